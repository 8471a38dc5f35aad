from .adapters.postgres_adapter import PostgresAdapter, create_postgres_adapter
from .exceptions import StoreConflictError, StoreError, StoreUnavailableError
from .models import GroupSnapshot, PersonRecord

__all__ = [
    'PostgresAdapter',
    'create_postgres_adapter',
    'StoreError',
    'StoreUnavailableError',
    'StoreConflictError',
    'GroupSnapshot',
    'PersonRecord',
]

from .postgres_adapter import PostgresAdapter, create_postgres_adapter

__all__ = ['PostgresAdapter', 'create_postgres_adapter']

"""
Shared fixtures for onboarding tests.

The store runs against a temporary SQLite file so the SQL paths of the
adapter are exercised without a PostgreSQL server.
"""

import pytest

from database.adapters.postgres_adapter import PostgresAdapter


@pytest.fixture
def store(tmp_path):
    """Empty onboarding store with the schema created."""
    adapter = PostgresAdapter(f"sqlite:///{tmp_path / 'onboarding.db'}")
    adapter.ensure_schema()
    yield adapter
    adapter.close()

"""
PostgreSQL adapter for the onboarding store.

This adapter provides a clean interface to the two onboarding tables:

- prime_data: one row per known person with their join-date history
  (a JSON array, newest first) and an optimistic-concurrency version.
- community_data: one row per community slug with the last observed
  member count.

Statements are written against SQLAlchemy Core so the same adapter runs on
PostgreSQL in production and on SQLite in tests.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from ..exceptions import StoreConflictError, StoreUnavailableError
from ..models.onboarding_records import GroupSnapshot, PersonRecord

logger = logging.getLogger(__name__)

PERSON_TABLE = "prime_data"
GROUP_TABLE = "community_data"

SCHEMA_STATEMENTS = [
    f"""
    CREATE TABLE IF NOT EXISTS {PERSON_TABLE} (
        person_id VARCHAR(255) PRIMARY KEY,
        name TEXT,
        joining_dates TEXT NOT NULL DEFAULT '[]',
        version INTEGER NOT NULL DEFAULT 0
    )
    """,
    f"""
    CREATE TABLE IF NOT EXISTS {GROUP_TABLE} (
        slug VARCHAR(255) PRIMARY KEY,
        member_count INTEGER NOT NULL
    )
    """,
]


class PostgresAdapter:
    """
    PostgreSQL adapter for onboarding store operations.

    Every mutation is a single-row statement, and the join-date history is
    only changed through a compare-and-set on the row version, so overlapping
    reconciliation runs can neither duplicate a label nor lose one.
    """

    def __init__(self, database_url: str, pool_size: int = 5, max_overflow: int = 10,
                 max_update_attempts: int = 5):
        """
        Initialize the database connection with connection pooling.

        Args:
            database_url (str): SQLAlchemy connection string
            pool_size (int): Number of connections to maintain in the pool
            max_overflow (int): Maximum overflow connections beyond pool_size
            max_update_attempts (int): Compare-and-set attempts before giving up
        """
        self.database_url = database_url
        self.max_update_attempts = max_update_attempts
        self.engine = self._create_engine(database_url, pool_size, max_overflow)

        # Test the connection immediately to catch configuration errors early
        self._test_connection()

        logger.info(f"Onboarding store initialized with pool size {pool_size}")

    def _create_engine(self, database_url: str, pool_size: int, max_overflow: int) -> Engine:
        """Create the SQLAlchemy engine; SQLite keeps its default pool."""
        echo = os.getenv('ENABLE_SQL_LOGGING', 'false').lower() == 'true'
        if database_url.startswith("sqlite"):
            return create_engine(database_url, echo=echo)

        return create_engine(
            database_url,
            poolclass=QueuePool,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,  # Validates connections before use
            pool_recycle=3600,   # Recycle connections every hour
            echo=echo
        )

    def _test_connection(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
                logger.info(f"Connected to database ({self.engine.dialect.name})")
        except Exception as e:
            logger.error(f"Database connection test failed: {e}")
            raise StoreUnavailableError(f"Cannot connect to database: {e}") from e

    def ensure_schema(self) -> None:
        """Create the onboarding tables if they do not exist yet."""
        try:
            with self.engine.connect() as conn:
                for statement in SCHEMA_STATEMENTS:
                    conn.execute(text(statement))
                conn.commit()
            logger.info(f"Schema ready: {PERSON_TABLE}, {GROUP_TABLE}")
        except SQLAlchemyError as e:
            logger.error(f"Failed to create schema: {e}")
            raise StoreUnavailableError(f"Failed to create schema: {e}") from e

    # =========================================================================
    # PERSON RECORDS
    # =========================================================================

    def find_person(self, person_id: str) -> Optional[PersonRecord]:
        """
        Get one person record by identifier.

        Args:
            person_id (str): The platform login id

        Returns:
            Optional[PersonRecord]: The record, or None if the person is unknown
        """
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    text(f"""
                        SELECT person_id, name, joining_dates, version
                        FROM {PERSON_TABLE}
                        WHERE person_id = :person_id
                    """),
                    {"person_id": person_id},
                ).mappings().fetchone()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read person {person_id}: {e}")
            raise StoreUnavailableError(f"Failed to read person {person_id}") from e

        return PersonRecord.from_row(row) if row else None

    def find_all_persons(self) -> List[PersonRecord]:
        """Get every person record, ordered by identifier."""
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(
                    text(f"""
                        SELECT person_id, name, joining_dates, version
                        FROM {PERSON_TABLE}
                        ORDER BY person_id
                    """)
                ).mappings().fetchall()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read person records: {e}")
            raise StoreUnavailableError("Failed to read person records") from e

        logger.debug(f"Read {len(rows)} person records")
        return [PersonRecord.from_row(row) for row in rows]

    def upsert_person(self, person_id: str, name: str,
                      joining_dates: Optional[List[str]] = None) -> None:
        """
        Insert a person, or refresh the display name of an existing one.

        The join-date history of an existing person is never overwritten here;
        it only changes through ``prepend_join_label``.

        Args:
            person_id (str): The platform login id
            name (str): Display name
            joining_dates (List[str], optional): Initial history for a new record
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(
                    text(f"""
                        INSERT INTO {PERSON_TABLE} (person_id, name, joining_dates, version)
                        VALUES (:person_id, :name, :joining_dates, 0)
                        ON CONFLICT (person_id) DO UPDATE SET name = excluded.name
                    """),
                    {
                        "person_id": person_id,
                        "name": name,
                        "joining_dates": json.dumps(joining_dates or []),
                    },
                )
                conn.commit()
            logger.debug(f"Upserted person {person_id}")
        except SQLAlchemyError as e:
            logger.error(f"Failed to upsert person {person_id}: {e}")
            raise StoreUnavailableError(f"Failed to upsert person {person_id}") from e

    def prepend_join_label(self, person_id: str, label: str) -> bool:
        """
        Add a join label to the front of a person's history if it is not there yet.

        The write is a compare-and-set on the row version; when another writer
        got there first the row is re-read and the presence check repeated.

        Args:
            person_id (str): The platform login id
            label (str): Join label such as "June 2024"

        Returns:
            bool: True if the history changed, False if the person is unknown
            or already carries the label

        Raises:
            StoreConflictError: If every attempt lost to a concurrent writer
        """
        for attempt in range(1, self.max_update_attempts + 1):
            record = self.find_person(person_id)
            if record is None:
                return False
            if label in record.joining_dates:
                return False

            updated = [label] + record.joining_dates
            try:
                with self.engine.connect() as conn:
                    result = conn.execute(
                        text(f"""
                            UPDATE {PERSON_TABLE}
                            SET joining_dates = :joining_dates, version = version + 1
                            WHERE person_id = :person_id AND version = :version
                        """),
                        {
                            "joining_dates": json.dumps(updated),
                            "person_id": person_id,
                            "version": record.version,
                        },
                    )
                    changed = result.rowcount == 1
                    conn.commit()
            except SQLAlchemyError as e:
                logger.error(f"Failed to update person {person_id}: {e}")
                raise StoreUnavailableError(f"Failed to update person {person_id}") from e

            if changed:
                logger.debug(f"Prepended '{label}' to {person_id}")
                return True

            logger.debug(
                f"Version conflict updating {person_id} "
                f"(attempt {attempt}/{self.max_update_attempts})"
            )

        raise StoreConflictError(
            f"Could not update {person_id} after {self.max_update_attempts} attempts"
        )

    # =========================================================================
    # GROUP SNAPSHOTS
    # =========================================================================

    def find_group_snapshot(self, slug: str) -> Optional[GroupSnapshot]:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    text(f"SELECT slug, member_count FROM {GROUP_TABLE} WHERE slug = :slug"),
                    {"slug": slug},
                ).mappings().fetchone()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read snapshot {slug}: {e}")
            raise StoreUnavailableError(f"Failed to read snapshot {slug}") from e

        return GroupSnapshot.from_row(row) if row else None

    def find_all_group_snapshots(self) -> List[GroupSnapshot]:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(
                    text(f"SELECT slug, member_count FROM {GROUP_TABLE} ORDER BY slug")
                ).mappings().fetchall()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read snapshots: {e}")
            raise StoreUnavailableError("Failed to read snapshots") from e

        return [GroupSnapshot.from_row(row) for row in rows]

    def create_group_snapshot(self, slug: str, member_count: int) -> bool:
        """
        Record the first sighting of a community.

        Returns:
            bool: True if the snapshot was created, False if it already existed
        """
        try:
            with self.engine.connect() as conn:
                result = conn.execute(
                    text(f"""
                        INSERT INTO {GROUP_TABLE} (slug, member_count)
                        VALUES (:slug, :member_count)
                        ON CONFLICT (slug) DO NOTHING
                    """),
                    {"slug": slug, "member_count": member_count},
                )
                created = result.rowcount == 1
                conn.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to create snapshot {slug}: {e}")
            raise StoreUnavailableError(f"Failed to create snapshot {slug}") from e

        return created

    def update_group_snapshot(self, slug: str, member_count: int) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(
                    text(f"UPDATE {GROUP_TABLE} SET member_count = :member_count WHERE slug = :slug"),
                    {"slug": slug, "member_count": member_count},
                )
                conn.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update snapshot {slug}: {e}")
            raise StoreUnavailableError(f"Failed to update snapshot {slug}") from e

    # =========================================================================
    # QUERY OPERATIONS (Reading Data)
    # =========================================================================

    def query_to_dataframe(self, query: str, params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Execute a SQL query and return results as a pandas DataFrame.

        Args:
            query (str): SQL query to execute
            params (Dict, optional): Query parameters for safe parameter binding

        Returns:
            pd.DataFrame: Query results
        """
        try:
            df = pd.read_sql_query(
                sql=text(query),
                con=self.engine,
                params=params or {}
            )
            logger.debug(f"Query returned {len(df)} rows")
            return df

        except SQLAlchemyError as e:
            logger.error(f"Query failed: {e}")
            raise StoreUnavailableError(f"Query failed: {e}") from e

    def close(self) -> None:
        """Close the database connection pool."""
        if self.engine:
            self.engine.dispose()
            logger.info("Onboarding store closed")


# Convenience function for easy initialization from environment
def create_postgres_adapter(database_url: Optional[str] = None) -> PostgresAdapter:
    """
    Create the store adapter using environment configuration.

    Reads DATABASE_URL, DB_POOL_SIZE and DB_MAX_OVERFLOW unless a URL is given.
    """
    database_url = database_url or os.getenv('DATABASE_URL')
    if not database_url:
        raise ValueError("DATABASE_URL environment variable is required")

    pool_size = int(os.getenv('DB_POOL_SIZE', '5'))
    max_overflow = int(os.getenv('DB_MAX_OVERFLOW', '10'))

    return PostgresAdapter(
        database_url=database_url,
        pool_size=pool_size,
        max_overflow=max_overflow
    )

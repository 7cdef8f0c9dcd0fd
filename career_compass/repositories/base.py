"""
Base Repository - Career Compass
career_compass/repositories/base.py

Base repository class with Snowflake connection management and common utilities.
"""

import json
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Generator, Optional

import snowflake.connector
from snowflake.connector import DictCursor
from snowflake.connector.errors import DatabaseError, InterfaceError, ProgrammingError

from career_compass.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    ForeignKeyViolationException,
    RepositoryException,
)
from career_compass.services.snowflake import get_snowflake_connection


class BaseRepository:
    """Base repository with Snowflake connection management."""

    @contextmanager
    def get_connection(self) -> Generator[snowflake.connector.SnowflakeConnection, None, None]:
        """Context manager for Snowflake connections."""
        conn = None
        try:
            conn = get_snowflake_connection()
            yield conn
        except InterfaceError as e:
            raise DatabaseConnectionException(f"Failed to connect to Snowflake: {e}")
        finally:
            if conn:
                conn.close()

    @contextmanager
    def get_cursor(self, dict_cursor: bool = True) -> Generator[Any, None, None]:
        """Context manager for Snowflake cursors with automatic connection cleanup."""
        with self.get_connection() as conn:
            cursor = conn.cursor(DictCursor) if dict_cursor else conn.cursor()
            try:
                yield cursor
            finally:
                cursor.close()

    @contextmanager
    def transaction(self) -> Generator[Any, None, None]:
        """
        Run several statements as one Snowflake transaction.

        Yields a dict cursor; commits when the block exits cleanly and rolls
        back on any exception.
        """
        with self.get_cursor() as cursor:
            conn = cursor.connection
            try:
                cursor.execute("BEGIN")
                yield cursor
                conn.commit()
            except ProgrammingError as e:
                conn.rollback()
                raise self._map_programming_error(e)
            except DatabaseError as e:
                conn.rollback()
                raise RepositoryException(f"Database error: {e}")
            except BaseException:
                conn.rollback()
                raise

    def execute_query(
        self,
        sql: str,
        params: Optional[tuple] = None,
        fetch_one: bool = False,
        fetch_all: bool = False,
        commit: bool = False,
    ) -> Optional[Any]:
        """
        Execute a SQL query with error handling.

        Args:
            sql: SQL query string
            params: Query parameters
            fetch_one: Return single row
            fetch_all: Return all rows
            commit: Commit transaction after execution

        Returns:
            Query results, or the affected row count when nothing is fetched
        """
        with self.get_cursor() as cursor:
            try:
                cursor.execute(sql, params or ())

                if commit:
                    cursor.connection.commit()

                if fetch_one:
                    return cursor.fetchone()
                elif fetch_all:
                    return cursor.fetchall()

                return cursor.rowcount

            except ProgrammingError as e:
                raise self._map_programming_error(e)
            except DatabaseError as e:
                raise RepositoryException(f"Database error: {e}")

    def _map_programming_error(self, e: ProgrammingError) -> RepositoryException:
        error_msg = str(e).upper()
        if "UNIQUE" in error_msg or "DUPLICATE" in error_msg:
            return DuplicateEntityException(str(e))
        elif "FOREIGN KEY" in error_msg:
            return ForeignKeyViolationException(str(e))
        return RepositoryException(f"Query error: {e}")

    def ping(self) -> bool:
        """Round-trip a trivial query; raises on connection failure."""
        row = self.execute_query("SELECT 1 AS OK", fetch_one=True)
        return bool(row)

    def normalize_timestamp(self, dt: Optional[datetime]) -> Optional[datetime]:
        """Ensure timestamp is UTC-aware."""
        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    def row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert Snowflake row (uppercase keys) to lowercase dict."""
        if row is None:
            return {}
        return {k.lower(): v for k, v in row.items()}

    def parse_variant(self, value: Any, default: Any = None) -> Any:
        """VARIANT columns come back as JSON text from the connector."""
        if value is None:
            return default
        if isinstance(value, (bytes, str)):
            return json.loads(value)
        return value

    def to_variant(self, value: Any) -> str:
        """Serialize a value for PARSE_JSON(%s)."""
        return json.dumps(value, default=str)

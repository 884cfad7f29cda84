"""Database connection and query execution for the CRM API.

Statements are written with ``?`` positional placeholders. They are
renumbered to asyncpg's ``$1..$n`` form right before execution, so callers
never deal with the driver's placeholder style.
"""

import logging
import re
from typing import Optional, List, Dict, Any, Sequence

import asyncpg
from asyncpg import Pool
from pydantic import BaseModel

from ..config import get_settings
from ..errors.query_errors import StoreError, ConstraintViolationError


logger = logging.getLogger(__name__)

_INSERT_PATTERN = re.compile(r"^\s*INSERT\s", re.IGNORECASE)


class WriteResult(BaseModel):
    """Outcome of an INSERT, UPDATE or DELETE statement."""

    last_insert_id: Optional[int] = None
    rows_affected: int = 0


def to_positional(sql: str) -> str:
    """Replace each ``?`` placeholder with ``$n`` in order of appearance."""
    counter = 0

    def _next(_match: re.Match) -> str:
        nonlocal counter
        counter += 1
        return f"${counter}"

    return re.sub(r"\?", _next, sql)


def parse_rows_affected(status: str) -> int:
    """Read the row count from a command status tag such as ``UPDATE 3``."""
    try:
        return int(status.split()[-1])
    except (AttributeError, IndexError, ValueError):
        return 0


class DatabaseManager:
    """Manages the connection pool and runs parameterized statements."""

    def __init__(self, database_url: Optional[str] = None):
        self.pool: Optional[Pool] = None
        self._database_url = database_url

    async def initialize(self) -> None:
        """Initialize the database connection pool."""
        if self.pool is None:
            settings = get_settings()
            self.pool = await asyncpg.create_pool(
                self._database_url or settings.database_url,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                command_timeout=settings.db_command_timeout
            )

    async def close(self) -> None:
        """Close the database connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None

    async def _get_pool(self) -> Pool:
        if not self.pool:
            await self.initialize()
        return self.pool

    async def execute_write(self, sql: str, params: Sequence[Any] = ()) -> WriteResult:
        """Execute an INSERT, UPDATE or DELETE statement.

        INSERT statements report the generated ``id``; everything else
        reports the number of rows touched.

        Raises:
            ConstraintViolationError: If an integrity constraint rejects the write
            StoreError: If the statement fails for any other reason
        """
        pool = await self._get_pool()
        query = to_positional(sql)

        try:
            async with pool.acquire() as conn:
                if _INSERT_PATTERN.match(sql):
                    row = await conn.fetchrow(f"{query} RETURNING id", *params)
                    last_id = row["id"] if row else None
                    return WriteResult(
                        last_insert_id=last_id,
                        rows_affected=1 if row else 0
                    )

                status = await conn.execute(query, *params)
                return WriteResult(rows_affected=parse_rows_affected(status))

        except asyncpg.IntegrityConstraintViolationError as e:
            logger.warning(f"Constraint violation: {e}")
            raise ConstraintViolationError(str(e)) from e
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Database error executing write: {e}")
            raise StoreError(str(e)) from e

    async def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        """Run a query and return its first row, or None."""
        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(to_positional(sql), *params)
                return dict(row) if row is not None else None

        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Database error running query: {e}")
            raise StoreError(str(e)) from e

    async def query_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a query and return all rows in order."""
        pool = await self._get_pool()

        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch(to_positional(sql), *params)
                return [dict(row) for row in rows]

        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logger.error(f"Database error running query: {e}")
            raise StoreError(str(e)) from e


# Global database manager instance
db_manager = DatabaseManager()


async def get_db_pool() -> Pool:
    """Get the database connection pool."""
    if not db_manager.pool:
        await db_manager.initialize()
    return db_manager.pool


def get_store() -> DatabaseManager:
    """Get the store used by route handlers."""
    return db_manager

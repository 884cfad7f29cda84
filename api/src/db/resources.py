"""Generic write operations for CRM tables."""

import logging
from typing import Dict, Any, Optional

from ..pagination import QUERY_TARGETS, resolve_target, check_identifier
from ..errors.query_errors import ConstraintViolationError
from ..errors.problem_details import ConflictError
from .connection import DatabaseManager, get_store


logger = logging.getLogger(__name__)

# Views are read-only
WRITABLE_TABLES = QUERY_TARGETS - {"stages_with_contacts"}


def _writable(table: str) -> str:
    resolve_target(table)
    if table not in WRITABLE_TABLES:
        raise ValueError(f"Table '{table}' is read-only")
    return table


def _columns(values: Dict[str, Any]) -> list[str]:
    return [check_identifier(column, "column name") for column in values]


async def create_row(
    table: str,
    values: Dict[str, Any],
    store: Optional[DatabaseManager] = None
) -> int:
    """Insert a row and return its id.

    Args:
        table: Target table
        values: Column values, keyed by column name
        store: Storage engine; defaults to the application's database

    Returns:
        The generated id

    Raises:
        ConflictError: If a referenced row does not exist or a constraint fails
        StoreError: If the database operation fails
    """
    store = store or get_store()
    columns = _columns(values)
    placeholders = ", ".join("?" for _ in columns)

    sql = f"INSERT INTO {_writable(table)} ({', '.join(columns)}) VALUES ({placeholders})"

    try:
        result = await store.execute_write(sql, list(values.values()))
    except ConstraintViolationError as e:
        raise ConflictError(f"Could not create {table} row: {e}")

    logger.info(f"Created {table} row {result.last_insert_id}")
    return result.last_insert_id


async def update_row(
    table: str,
    row_id: int,
    values: Dict[str, Any],
    store: Optional[DatabaseManager] = None
) -> bool:
    """Update a row by id and touch its ``updated_at``.

    Returns:
        True if a row was updated, False if none matched

    Raises:
        ConflictError: If a constraint rejects the new values
        StoreError: If the database operation fails
    """
    store = store or get_store()
    assignments = [f"{column} = ?" for column in _columns(values)]
    assignments.append("updated_at = CURRENT_TIMESTAMP")

    sql = f"UPDATE {_writable(table)} SET {', '.join(assignments)} WHERE id = ?"

    try:
        result = await store.execute_write(sql, [*values.values(), row_id])
    except ConstraintViolationError as e:
        raise ConflictError(f"Could not update {table} row {row_id}: {e}")

    updated = result.rows_affected > 0
    if updated:
        logger.info(f"Updated {table} row {row_id}")
    else:
        logger.debug(f"No {table} row {row_id} to update")
    return updated


async def delete_row(
    table: str,
    row_id: int,
    store: Optional[DatabaseManager] = None
) -> bool:
    """Delete a row by id.

    Returns:
        True if a row was deleted, False if none matched

    Raises:
        ConflictError: If other rows still reference this one
        StoreError: If the database operation fails
    """
    store = store or get_store()
    sql = f"DELETE FROM {_writable(table)} WHERE id = ?"

    try:
        result = await store.execute_write(sql, [row_id])
    except ConstraintViolationError as e:
        raise ConflictError(f"Could not delete {table} row {row_id}: {e}")

    deleted = result.rows_affected > 0
    if deleted:
        logger.info(f"Deleted {table} row {row_id}")
    else:
        logger.debug(f"No {table} row {row_id} to delete")
    return deleted

"""Message queries that fall outside generic pagination."""

import logging
from typing import Dict, Any, List, Optional

from .connection import DatabaseManager, get_store


logger = logging.getLogger(__name__)


async def list_company_messages(
    company_id: int,
    store: Optional[DatabaseManager] = None
) -> List[Dict[str, Any]]:
    """Return a company's support conversation, oldest message first.

    Args:
        company_id: Company whose messages to list
        store: Storage engine; defaults to the application's database

    Returns:
        Message rows ordered by creation time

    Raises:
        StoreError: If the database operation fails
    """
    store = store or get_store()
    rows = await store.query_all(
        "SELECT * FROM messages WHERE company_id = ? ORDER BY created_at ASC",
        [company_id]
    )
    logger.debug(f"Found {len(rows)} support messages for company {company_id}")
    return rows

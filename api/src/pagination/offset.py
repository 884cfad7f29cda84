"""Page-number pagination, filtering and sorting for list endpoints."""

import logging
import math
import re
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List, Mapping, Protocol, Sequence

from pydantic import BaseModel, Field, field_validator

from ..db.connection import get_store
from ..errors.query_errors import (
    QueryError, InvalidTargetError, InvalidIdentifierError, StoreError
)


logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100
DEFAULT_ORDER = "desc"
DEFAULT_SORT = "created_at"
DEFAULT_ORDER_BY = "ORDER BY created_at DESC"

# Tables and views that list queries may read from
QUERY_TARGETS = frozenset({
    "pipelines",
    "stages",
    "tags",
    "contacts",
    "messages",
    "tasks",
    "goals",
    "projects",
    "stages_with_contacts",
})

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_]+$")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_FILTER_KEY = re.compile(r"^filter\[(.*)\]$")


class QueryStore(Protocol):
    """Read side of the storage engine used by ``paginate``."""

    async def query_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]: ...

    async def query_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]: ...


def _parse_int(value: Any) -> Optional[int]:
    """Parse the leading integer of a query-string value, if any."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


class PaginationParams(BaseModel):
    """Pagination, sort and filter values after coercion.

    Invalid ``page``, ``per_page`` and ``order`` values are replaced by
    their defaults instead of being rejected. ``sort`` and ``filters`` are
    kept as given and checked by the query builder.
    """

    page: int = Field(default=DEFAULT_PAGE, description="Page number, 1-based")
    per_page: int = Field(default=DEFAULT_PER_PAGE, description="Items per page (1-100)")
    sort: Optional[str] = Field(default=None, description="Column to sort by")
    order: str = Field(default=DEFAULT_ORDER, description="Sort order")
    filters: Optional[Any] = Field(default=None, description="Field to substring mapping")

    @field_validator("page", mode="before")
    @classmethod
    def coerce_page(cls, v):
        page = _parse_int(v)
        if page is None or page < 1:
            return DEFAULT_PAGE
        return page

    @field_validator("per_page", mode="before")
    @classmethod
    def coerce_per_page(cls, v):
        per_page = _parse_int(v)
        if per_page is None or per_page < 1 or per_page > MAX_PER_PAGE:
            return DEFAULT_PER_PAGE
        return per_page

    @field_validator("sort", mode="before")
    @classmethod
    def coerce_sort(cls, v):
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("order", mode="before")
    @classmethod
    def coerce_order(cls, v):
        if isinstance(v, str) and v.lower() in ("asc", "desc"):
            return v.lower()
        return DEFAULT_ORDER

    @classmethod
    def from_raw(cls, raw_params: Mapping[str, Any]) -> "PaginationParams":
        """Build from raw query-string values."""
        return cls(
            page=raw_params.get("page"),
            per_page=raw_params.get("per_page"),
            sort=raw_params.get("sort"),
            order=raw_params.get("order"),
            filters=raw_params.get("filter")
        )


class PaginationOptions(BaseModel):
    """Caller-supplied scope for a list query.

    ``where_clause`` is a trusted ``WHERE ...`` fragment written by a route,
    never by a client. Its ``params`` bind to its ``?`` placeholders.
    """

    where_clause: str = ""
    params: List[Any] = Field(default_factory=list)
    order_by: Optional[str] = None


def parse_query_params(query_params: Any) -> Dict[str, Any]:
    """Collect pagination values from a request's query string.

    Filters are read from bracket keys (``filter[status]=open``). A bare
    ``filter`` value wins over bracket keys and is passed through unchanged
    so that validation rejects the mix.
    """
    raw: Dict[str, Any] = {}
    filters: Dict[str, str] = {}

    for key, value in query_params.items():
        match = _FILTER_KEY.match(key)
        if match:
            filters[match.group(1)] = value
        elif key in ("page", "per_page", "sort", "order", "filter"):
            raw[key] = value

    if filters and "filter" not in raw:
        raw["filter"] = filters
    return raw


def resolve_target(target: str) -> str:
    """Return the target if it is allow-listed.

    Raises:
        InvalidTargetError: If the target is not a known table or view
    """
    if target not in QUERY_TARGETS:
        raise InvalidTargetError("Invalid table name")
    return target


def check_identifier(name: Any, what: str) -> str:
    """Ensure a name is letters and underscores only.

    Raises:
        InvalidIdentifierError: If the name fails the pattern
    """
    if not isinstance(name, str) or not IDENTIFIER_PATTERN.match(name):
        raise InvalidIdentifierError(f"Invalid {what}")
    return name


def build_where_clause(
    filters: Optional[Any] = None,
    where_clause: str = "",
    params: Optional[Sequence[Any]] = None
) -> tuple[str, List[Any]]:
    """Combine a base predicate with substring filters.

    Args:
        filters: Mapping of column name to substring
        where_clause: Optional ``WHERE ...`` fragment from the caller
        params: Parameters bound to the base predicate

    Returns:
        Tuple of (where_clause, parameters)

    Raises:
        InvalidIdentifierError: If filters is not a mapping or a key is invalid
    """
    clause = where_clause or ""
    query_params = list(params or [])

    if filters is None:
        return clause, query_params

    if not isinstance(filters, Mapping):
        raise InvalidIdentifierError("Invalid filter: expected key-value pairs")

    if not filters:
        return clause, query_params

    conditions = []
    for key in filters:
        check_identifier(key, "filter key")
        conditions.append(f"{key} LIKE ?")

    clause += " AND " if clause else " WHERE "
    clause += " AND ".join(conditions)
    query_params.extend(f"%{value}%" for value in filters.values())

    return clause, query_params


def build_order_clause(
    sort: Optional[str] = None,
    order: str = DEFAULT_ORDER,
    default: Optional[str] = None
) -> str:
    """Build the ORDER BY clause.

    Raises:
        InvalidIdentifierError: If the sort column is invalid
    """
    if sort:
        check_identifier(sort, "sort column")
        return f"ORDER BY {sort} {order.upper()}"
    return default or DEFAULT_ORDER_BY


def last_page_for(total: int, per_page: int) -> int:
    return max(1, math.ceil(total / per_page))


def build_pagination(page: int, per_page: int, total: int) -> Dict[str, Any]:
    """Compute the pagination block for a page of results.

    A page past the end is clamped to the last page, and ``from``/``to``
    describe that clamped page.
    """
    last_page = last_page_for(total, per_page)
    current_page = min(page, last_page)
    offset = (current_page - 1) * per_page

    return {
        "current_page": current_page,
        "last_page": last_page,
        "per_page": per_page,
        "total": total,
        "from": offset + 1 if total > 0 else 0,
        "to": min(offset + per_page, total) if total > 0 else 0,
        "has_more": current_page < last_page,
        "next_page": current_page + 1 if current_page < last_page else None,
        "prev_page": current_page - 1 if current_page > 1 else None
    }


def empty_pagination(per_page: int) -> Dict[str, Any]:
    """Pagination block reported alongside a failure."""
    return build_pagination(DEFAULT_PAGE, per_page, 0)


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def paginate(
    raw_params: Mapping[str, Any],
    target: str,
    options: Optional[PaginationOptions] = None,
    *,
    path: str = "",
    store: Optional[QueryStore] = None
) -> Dict[str, Any]:
    """Run a paginated, filtered and sorted list query.

    Never raises. Invalid targets, invalid identifiers and storage failures
    all come back as a failure envelope with ``success`` set to False.

    Args:
        raw_params: page, per_page, sort, order and filter as received
        target: Table or view to read from
        options: Optional base predicate and default ordering
        path: Request path echoed in the metadata
        store: Storage engine; defaults to the application's database

    Returns:
        Result envelope with data, pagination and metadata
    """
    params = None
    options = options or PaginationOptions()

    try:
        params = PaginationParams.from_raw(raw_params)
        table = resolve_target(target)

        where_clause, query_params = build_where_clause(
            filters=params.filters,
            where_clause=options.where_clause,
            params=options.params
        )
        order_clause = build_order_clause(params.sort, params.order, options.order_by)

        if store is None:
            store = get_store()

        total_row = await store.query_one(
            f"SELECT COUNT(*) AS total FROM {table} {where_clause}",
            query_params
        )
        total = (total_row or {}).get("total") or 0

        # Out-of-range pages read the last page instead
        current_page = min(params.page, last_page_for(total, params.per_page))
        offset = (current_page - 1) * params.per_page

        data = await store.query_all(
            f"SELECT * FROM {table} {where_clause} {order_clause} LIMIT ? OFFSET ?",
            [*query_params, params.per_page, offset]
        )

        logger.debug(f"Paginated {table}: page {params.page}, {len(data or [])} of {total} rows")

        return {
            "success": True,
            "data": list(data or []),
            "pagination": build_pagination(params.page, params.per_page, total),
            "metadata": {
                "timestamp": _utc_timestamp(),
                "path": path,
                "table": table,
                "sort": params.sort or DEFAULT_SORT,
                "order": params.order,
                "filters": dict(params.filters) if isinstance(params.filters, Mapping) else {}
            }
        }

    except Exception as e:
        kind = e.kind if isinstance(e, QueryError) else StoreError.kind
        logger.error(f"Pagination error for {target}: {e}")
        return {
            "success": False,
            "data": [],
            "pagination": empty_pagination(
                params.per_page if params is not None else DEFAULT_PER_PAGE
            ),
            "error": {
                "message": "Error processing pagination",
                "details": str(e),
                "kind": kind
            }
        }

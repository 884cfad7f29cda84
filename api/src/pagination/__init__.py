"""Pagination module for page-number pagination of list endpoints."""

from .offset import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    DEFAULT_ORDER,
    DEFAULT_SORT,
    QUERY_TARGETS,
    QueryStore,
    PaginationParams,
    PaginationOptions,
    parse_query_params,
    resolve_target,
    check_identifier,
    build_where_clause,
    build_order_clause,
    build_pagination,
    empty_pagination,
    paginate
)

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PER_PAGE",
    "MAX_PER_PAGE",
    "DEFAULT_ORDER",
    "DEFAULT_SORT",
    "QUERY_TARGETS",
    "QueryStore",
    "PaginationParams",
    "PaginationOptions",
    "parse_query_params",
    "resolve_target",
    "check_identifier",
    "build_where_clause",
    "build_order_clause",
    "build_pagination",
    "empty_pagination",
    "paginate"
]

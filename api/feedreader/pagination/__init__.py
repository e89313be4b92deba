"""Bidirectional keyset pagination."""

from .fields import MAX_TOKEN, MAX_BIGINT, PaginationField
from .cursor import (
    Cursor,
    Page,
    build_cursor,
    trim_items,
    assemble_page,
    create_link_header
)
from .window import QueryExecutor, Window, build_window_queries, fetch_window

__all__ = [
    "MAX_TOKEN",
    "MAX_BIGINT",
    "PaginationField",
    "Cursor",
    "Page",
    "build_cursor",
    "trim_items",
    "assemble_page",
    "create_link_header",
    "QueryExecutor",
    "Window",
    "build_window_queries",
    "fetch_window"
]

"""Forward and backward keyset queries around a position token."""

import asyncio
import logging
from typing import Any, List, NamedTuple, Optional, Protocol, Sequence

from .fields import PaginationField, TokenValue


logger = logging.getLogger(__name__)


class QueryExecutor(Protocol):
    """Anything that can run a parameterized query and return ordered rows.

    Both ``asyncpg.Pool`` and ``asyncpg.Connection`` satisfy this; a pool
    checks out a separate connection per call.
    """

    async def fetch(self, query: str, *args: Any) -> List[Any]:
        ...


class Window(NamedTuple):
    """Rows on either side of a position, both ordered descending."""

    forward: List[Any]
    backward: List[Any]


def build_window_queries(
    table: str,
    columns: Sequence[str],
    field: PaginationField,
    limit: int,
    predicate: Optional[str] = None
) -> tuple[str, str]:
    """Build the forward and backward SQL for a keyset window.

    ``table``, ``columns`` and ``predicate`` are fixed by the caller's module,
    never taken from request input. The position value is always ``$1``.

    Returns:
        Tuple of (forward_query, backward_query)
    """
    column_list = ", ".join(columns)
    column = field.column
    where = f"{predicate} AND " if predicate else ""

    forward_query = f"""
        SELECT {column_list}
        FROM {table}
        WHERE {where}{column} < $1
        ORDER BY {column} DESC
        LIMIT {limit}
    """

    # Take the closest newer rows ascending, then flip them to match the forward orientation
    backward_query = f"""
        SELECT * FROM (
            SELECT {column_list}
            FROM {table}
            WHERE {where}{column} > $1
            ORDER BY {column} ASC
            LIMIT {limit}
        ) AS data
        ORDER BY {column} DESC
    """

    return forward_query, backward_query


async def fetch_window(
    executor: QueryExecutor,
    table: str,
    columns: Sequence[str],
    field: PaginationField,
    position: TokenValue,
    page_size: int,
    predicate: Optional[str] = None,
    concurrent: bool = True
) -> Window:
    """Run the two directional queries for one page.

    Both queries overfetch by one row. With ``concurrent`` set they are
    issued together, which against a pool means two connections.

    Args:
        executor: Pool or connection to run the queries on
        table: Table to read from
        columns: Columns to select
        field: Sort field
        position: Parsed position value (see ``PaginationField.parse``)
        page_size: Number of items per page
        predicate: Fixed SQL filter, ANDed with the keyset condition
        concurrent: Issue both queries at once

    Returns:
        Window with forward and backward rows
    """
    forward_query, backward_query = build_window_queries(
        table=table,
        columns=columns,
        field=field,
        limit=page_size + 1,
        predicate=predicate
    )

    if concurrent:
        forward, backward = await asyncio.gather(
            executor.fetch(forward_query, position),
            executor.fetch(backward_query, position)
        )
    else:
        forward = await executor.fetch(forward_query, position)
        backward = await executor.fetch(backward_query, position)

    logger.debug(
        f"Window on {table}.{field.column} at {position!r}: "
        f"{len(forward)} forward, {len(backward)} backward"
    )
    return Window(forward=list(forward), backward=list(backward))

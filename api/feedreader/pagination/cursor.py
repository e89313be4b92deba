"""Cursor derivation and page assembly for bidirectional keyset pagination."""

from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel, Field

from .fields import MAX_TOKEN, PaginationField


ItemT = TypeVar("ItemT")


class Cursor(BaseModel):
    """Navigation state for one page.

    ``next`` and ``prev`` are empty strings unless there is somewhere to go.
    The only exception is a short forward set, where ``next`` still carries the
    last row's value while ``has_next`` is false.
    """

    has_next: bool = Field(default=False, description="Whether an older page exists")
    has_prev: bool = Field(default=False, description="Whether a newer page exists")
    curr: str = Field(default=MAX_TOKEN, description="Token this page was requested with")
    next: str = Field(default="", description="Token for the next (older) page")
    prev: str = Field(default="", description="Token for the previous (newer) page")


class Page(BaseModel, Generic[ItemT]):
    """One page of items plus its cursor."""

    cursor: Cursor
    items: List[ItemT] = Field(default_factory=list)


def build_cursor(
    forward: Sequence[Any],
    backward: Sequence[Any],
    curr: str,
    field: PaginationField,
    page_size: int
) -> Cursor:
    """Derive the cursor from the two directional row sets.

    Both sets must be ordered descending by ``field`` and fetched with a
    limit of ``page_size + 1``.

    Args:
        forward: Rows strictly older than ``curr``
        backward: Rows strictly newer than ``curr``
        curr: Token the page was requested with
        field: Sort field the rows are keyed on
        page_size: Number of items per page

    Returns:
        Cursor for the page
    """
    overfetch = page_size + 1

    if len(forward) >= overfetch:
        # The last row only proves another page exists; resume from the one before it
        has_next, next_token = True, field.token_of(forward[len(forward) - 2])
    elif forward:
        has_next, next_token = False, field.token_of(forward[-1])
    else:
        has_next, next_token = False, ""

    if len(backward) >= overfetch:
        has_prev, prev_token = True, field.token_of(backward[1])
    elif backward:
        # Not enough history above us for a full window, go back to the first page
        has_prev, prev_token = True, MAX_TOKEN
    else:
        has_prev, prev_token = False, ""

    return Cursor(
        has_next=has_next,
        has_prev=has_prev,
        curr=curr,
        next=next_token,
        prev=prev_token
    )


def trim_items(forward: Sequence[Any], page_size: int) -> List[Any]:
    """Drop the overfetched sentinel row, if present."""
    items = list(forward)
    if len(items) > page_size:
        items = items[:page_size]
    return items


def assemble_page(
    forward: Sequence[Any],
    backward: Sequence[Any],
    curr: str,
    field: PaginationField,
    page_size: int,
    convert: Optional[Callable[[Any], Any]] = None
) -> Page:
    """Build a Page from the untrimmed forward set and the backward set.

    The cursor is derived before trimming so the dropped row never leaks into
    ``items``. ``convert`` is applied to each kept row.
    """
    cursor = build_cursor(forward, backward, curr, field, page_size)
    items = trim_items(forward, page_size)
    if convert is not None:
        items = [convert(row) for row in items]
    return Page(cursor=cursor, items=items)


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    cursor: Cursor
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters, without the pagination token
        cursor: Cursor of the page being served

    Returns:
        Link header value or None if no links
    """
    links = []

    if cursor.has_next:
        next_params = {**params, "pagination": cursor.next}
        next_url = f"{base_url}?{urlencode(next_params)}"
        links.append(f'<{next_url}>; rel="next"')

    if cursor.has_prev:
        prev_params = {**params, "pagination": cursor.prev}
        prev_url = f"{base_url}?{urlencode(prev_params)}"
        links.append(f'<{prev_url}>; rel="prev"')

    return ", ".join(links) if links else None

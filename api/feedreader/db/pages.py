"""Shared pagination entry point for store listings."""

import logging
from typing import Any, Callable, Optional, Sequence, Type

import asyncpg

from ..config import get_settings
from ..errors.problem_details import ProblemDetailException, InternalServerError
from ..pagination import Page, PaginationField, assemble_page, fetch_window
from .connection import get_db_pool


logger = logging.getLogger(__name__)


async def paginate(
    table: str,
    columns: Sequence[str],
    field: PaginationField,
    pagination: str,
    predicate: Optional[str] = None,
    convert: Optional[Callable[[Any], Any]] = None,
    page_model: Type[Page] = Page
) -> Page:
    """Fetch one page of ``table`` keyed on ``field`` around ``pagination``.

    The token is validated before the pool is touched, so a bad token never
    costs a query.

    Raises:
        InvalidPaginationTokenError: If the token does not parse for ``field``
        InternalServerError: If the store fails
    """
    position = field.parse(pagination)
    settings = get_settings()

    try:
        pool = await get_db_pool()
        window = await fetch_window(
            pool,
            table=table,
            columns=columns,
            field=field,
            position=position,
            page_size=settings.page_size,
            predicate=predicate,
            concurrent=settings.concurrent_window_queries
        )
    except ProblemDetailException:
        raise
    except asyncpg.PostgresError as e:
        logger.error(f"Database error paginating {table}: {e}")
        raise InternalServerError("Database error")
    except Exception as e:
        logger.error(f"Unexpected error paginating {table}: {e}")
        raise InternalServerError("Database unavailable")

    page = assemble_page(
        window.forward,
        window.backward,
        curr=pagination,
        field=field,
        page_size=settings.page_size,
        convert=convert
    )
    logger.debug(
        f"Page of {len(page.items)} {table} at {pagination!r} "
        f"(has_next={page.cursor.has_next}, has_prev={page.cursor.has_prev})"
    )
    return page_model(cursor=page.cursor, items=page.items)

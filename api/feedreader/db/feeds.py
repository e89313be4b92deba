"""Database operations for feeds."""

import logging

import asyncpg

from ..models.feeds import Feed, FeedCreate, FeedPage
from ..models.articles import rfc3339_timestamp
from ..pagination import PaginationField
from ..errors.problem_details import (
    NotFoundError, ConflictError, ProblemDetailException, InternalServerError
)
from .connection import get_db_pool
from .pages import paginate


logger = logging.getLogger(__name__)

FEED_COLUMNS = ("id", "name", "site_url", "feed_url", "date_added", "last_updated")
NEVER_UPDATED = "-1"


def _to_feed(row) -> Feed:
    return Feed.model_validate(dict(row))


async def list_feeds(pagination: str) -> FeedPage:
    """List one page of feeds, most recently added first.

    Raises:
        InvalidPaginationTokenError: If the token is not an integer id or MAX_TOKEN
        InternalServerError: If database operation fails
    """
    return await paginate(
        table="feeds",
        columns=FEED_COLUMNS,
        field=PaginationField.ID,
        pagination=pagination,
        convert=_to_feed,
        page_model=FeedPage
    )


async def add_feed(feed_data: FeedCreate) -> Feed:
    """Subscribe to a feed.

    Raises:
        ConflictError: If a feed with the same URL already exists
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO feeds (name, site_url, feed_url, date_added, last_updated)
                    VALUES ($1, $2, $3, $4, $5)
                    RETURNING {', '.join(FEED_COLUMNS)}
                    """,
                    feed_data.name,
                    feed_data.site_url,
                    feed_data.feed_url,
                    rfc3339_timestamp(),
                    NEVER_UPDATED
                )

            if not row:
                raise InternalServerError("Failed to create feed")

            feed = _to_feed(row)
            logger.info(f"Added feed {feed.id} ({feed.feed_url})")
            return feed

    except ProblemDetailException:
        raise
    except asyncpg.UniqueViolationError as e:
        logger.error(f"Unique constraint violation adding feed: {e}")
        raise ConflictError(f"Feed '{feed_data.feed_url}' already exists")
    except asyncpg.PostgresError as e:
        logger.error(f"Database error adding feed: {e}")
        raise InternalServerError(f"Database error: {e}")
    except Exception as e:
        logger.error(f"Unexpected error adding feed: {e}")
        raise InternalServerError(f"Unexpected error: {e}")


async def get_feed(feed_id: int) -> Feed:
    """Get a single feed.

    Raises:
        NotFoundError: If the feed doesn't exist
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {', '.join(FEED_COLUMNS)} FROM feeds WHERE id = $1",
                feed_id
            )

            if not row:
                raise NotFoundError(f"Feed '{feed_id}' not found")

            return _to_feed(row)

    except ProblemDetailException:
        raise
    except asyncpg.PostgresError as e:
        logger.error(f"Database error retrieving feed: {e}")
        raise InternalServerError(f"Database error: {e}")
    except Exception as e:
        logger.error(f"Unexpected error retrieving feed: {e}")
        raise InternalServerError(f"Unexpected error: {e}")


async def delete_feed(feed_id: int) -> bool:
    """Delete a feed. Its articles are kept.

    Returns:
        True if the feed was deleted, False if not found
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                result = await conn.execute("DELETE FROM feeds WHERE id = $1", feed_id)

            deleted = result.split()[-1] == "1"
            if deleted:
                logger.info(f"Deleted feed {feed_id}")
            else:
                logger.debug(f"Feed {feed_id} not found for deletion")
            return deleted

    except asyncpg.PostgresError as e:
        logger.error(f"Database error deleting feed: {e}")
        raise InternalServerError(f"Database error: {e}")
    except Exception as e:
        logger.error(f"Unexpected error deleting feed: {e}")
        raise InternalServerError(f"Unexpected error: {e}")


async def update_feed_last_updated(feed_id: int, timestamp: str) -> None:
    """Record when a feed was last refreshed."""
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(
                    "UPDATE feeds SET last_updated = $1 WHERE id = $2",
                    timestamp,
                    feed_id
                )
            logger.debug(f"Feed {feed_id} last_updated set to {timestamp}")

    except asyncpg.PostgresError as e:
        logger.error(f"Database error updating feed timestamp: {e}")
        raise InternalServerError(f"Database error: {e}")
    except Exception as e:
        logger.error(f"Unexpected error updating feed timestamp: {e}")
        raise InternalServerError(f"Unexpected error: {e}")

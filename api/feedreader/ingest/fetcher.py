"""Fetch RSS/Atom documents and turn their entries into articles."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

import feedparser
import httpx

from ..config import get_settings
from ..db.articles import add_articles
from ..db.feeds import get_feed, update_feed_last_updated
from ..errors.problem_details import BadGatewayError, InternalServerError
from ..models.articles import ArticleCreate, rfc3339_timestamp


logger = logging.getLogger(__name__)


def _first(items: Any, key: str) -> str:
    for item in items or []:
        value = item.get(key)
        if value:
            return value
    return ""


def entry_to_article(entry: Any, feed_name: str, fetched_at: datetime) -> Optional[ArticleCreate]:
    """Map a feedparser entry to an article.

    Entries without a link are skipped since the link identifies the article.
    The publication time falls back to the update time, then to ``fetched_at``.
    """
    link = entry.get("link") or _first(entry.get("links"), "href")
    if not link:
        return None

    author = entry.get("author") or _first(entry.get("authors"), "name")

    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if parsed:
        published = rfc3339_timestamp(datetime(*parsed[:6], tzinfo=timezone.utc))
    else:
        published = rfc3339_timestamp(fetched_at)

    return ArticleCreate(
        feed=feed_name,
        title=entry.get("title", ""),
        link=link,
        author=author,
        published=published
    )


def parse_feed(content: bytes, feed_name: str, fetched_at: Optional[datetime] = None) -> List[ArticleCreate]:
    """Parse a feed document into articles.

    Undated entries are stamped one millisecond apart going back from
    ``fetched_at``, so they stay distinct and keep document order newest-first.

    Raises:
        BadGatewayError: If the document cannot be parsed at all
    """
    fetched_at = fetched_at or datetime.now(timezone.utc)
    parsed = feedparser.parse(content)

    if parsed.bozo and not parsed.entries:
        logger.warning(f"Could not parse feed '{feed_name}': {parsed.get('bozo_exception')}")
        raise BadGatewayError(f"Feed '{feed_name}' could not be parsed")

    articles = []
    for index, entry in enumerate(parsed.entries):
        article = entry_to_article(entry, feed_name, fetched_at - timedelta(milliseconds=index))
        if article is None:
            logger.debug(f"Skipping entry without link in feed '{feed_name}'")
            continue
        articles.append(article)
    return articles


async def fetch_feed(url: str, client: Optional[httpx.AsyncClient] = None) -> bytes:
    """Download a feed document.

    Raises:
        BadGatewayError: If the request fails or returns an error status
    """
    settings = get_settings()

    async def _get(http: httpx.AsyncClient) -> bytes:
        response = await http.get(url)
        response.raise_for_status()
        return response.content

    try:
        if client is not None:
            return await _get(client)
        async with httpx.AsyncClient(
            timeout=settings.fetch_timeout,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True
        ) as http:
            return await _get(http)
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch feed {url}: {e}")
        raise BadGatewayError(f"Failed to fetch feed: {e}")


async def refresh_feed(feed_id: int, client: Optional[httpx.AsyncClient] = None) -> int:
    """Fetch a feed and store any new articles.

    Updating the feed's ``last_updated`` is best-effort; a failure there is
    logged and does not fail the refresh.

    Returns:
        Number of new articles stored

    Raises:
        NotFoundError: If the feed doesn't exist
        BadGatewayError: If the feed cannot be fetched or parsed
        InternalServerError: If storing articles fails
    """
    feed = await get_feed(feed_id)
    content = await fetch_feed(feed.feed_url, client=client)
    articles = parse_feed(content, feed.name)
    inserted = await add_articles(articles)

    try:
        await update_feed_last_updated(feed_id, rfc3339_timestamp())
    except InternalServerError as e:
        logger.warning(f"Could not update feed timestamp for {feed_id}: {e}")

    logger.info(f"Refreshed feed {feed_id}: {len(articles)} entries, {inserted} new")
    return inserted

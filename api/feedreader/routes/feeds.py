"""Feeds API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, Request, Response

from ..models.feeds import Feed, FeedCreate, FeedPage
from ..pagination import MAX_TOKEN, PaginationField
from ..db.feeds import add_feed, delete_feed, get_feed, list_feeds
from ..ingest import refresh_feed
from ..errors.problem_details import NotFoundError
from .articles import set_link_header


logger = logging.getLogger(__name__)

feeds_router = APIRouter(
    prefix="/feeds",
    tags=["Feeds"],
    responses={
        400: {"description": "Bad Request - Invalid pagination token"},
        404: {"description": "Not Found"}
    }
)

PaginationParam = Annotated[
    str,
    Query(description="Position token; the default requests the first page")
]


@feeds_router.get(
    "",
    response_model=FeedPage,
    summary="List feeds",
    description="One page of feeds, most recently added first."
)
async def get_feeds(
    request: Request,
    response: Response,
    pagination: PaginationParam = MAX_TOKEN
) -> FeedPage:
    """List one page of feeds."""
    page = await list_feeds(pagination)
    set_link_header(request, response, {}, page.cursor)
    return page


@feeds_router.post(
    "",
    response_model=FeedPage,
    status_code=201,
    summary="Add a feed",
    responses={409: {"description": "Feed URL already subscribed"}}
)
async def create_feed(feed_data: FeedCreate) -> FeedPage:
    """Subscribe to a feed and return the first page of feeds."""
    feed = await add_feed(feed_data)
    logger.info(f"Subscribed to feed {feed.id} '{feed.name}'")
    return await list_feeds(MAX_TOKEN)


@feeds_router.get(
    "/{feed_id}",
    response_model=Feed,
    summary="Get a feed"
)
async def get_feed_by_id(feed_id: int) -> Feed:
    """Get a single feed by id."""
    return await get_feed(feed_id)


@feeds_router.delete(
    "/{feed_id}",
    response_model=FeedPage,
    summary="Delete a feed"
)
async def delete_feed_by_id(
    feed_id: int,
    pagination: PaginationParam = MAX_TOKEN
) -> FeedPage:
    """Delete a feed and return the page the caller is on."""
    PaginationField.ID.parse(pagination)

    deleted = await delete_feed(feed_id)
    if not deleted:
        raise NotFoundError(f"Feed '{feed_id}' not found")

    return await list_feeds(pagination)


@feeds_router.post(
    "/{feed_id}/refresh",
    response_model=FeedPage,
    summary="Refresh a feed",
    description="Fetch the feed document, store new articles and return the page the caller is on.",
    responses={502: {"description": "Feed could not be fetched or parsed"}}
)
async def refresh_feed_by_id(
    feed_id: int,
    pagination: PaginationParam = MAX_TOKEN
) -> FeedPage:
    """Refresh a feed."""
    PaginationField.ID.parse(pagination)

    inserted = await refresh_feed(feed_id)
    logger.info(f"Feed {feed_id} refreshed with {inserted} new articles")

    return await list_feeds(pagination)

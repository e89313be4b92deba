"""Articles API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, Request, Response

from ..models.articles import Article, ArticlePage
from ..pagination import MAX_TOKEN, Cursor, create_link_header
from ..db.articles import (
    check_listing, get_article, list_articles,
    toggle_article_read, toggle_article_favorite
)


logger = logging.getLogger(__name__)

articles_router = APIRouter(
    prefix="/articles",
    tags=["Articles"],
    responses={
        400: {"description": "Bad Request - Invalid filter or pagination token"},
        404: {"description": "Not Found"}
    }
)

FilterParam = Annotated[
    str,
    Query(alias="filter", description="Article filter: unread, read or favorite")
]
PaginationParam = Annotated[
    str,
    Query(description="Position token; the default requests the first page")
]


def set_link_header(request: Request, response: Response, params: dict, cursor: Cursor) -> None:
    """Advertise the neighbouring pages with an RFC 8288 Link header."""
    base_url = str(request.url).split('?')[0]
    link_header = create_link_header(base_url=base_url, params=params, cursor=cursor)
    if link_header:
        response.headers["Link"] = link_header


@articles_router.get(
    "",
    response_model=ArticlePage,
    summary="List articles",
    description="One page of articles for a filter, with cursors to move forward and backward."
)
async def get_articles(
    request: Request,
    response: Response,
    article_filter: FilterParam = "unread",
    pagination: PaginationParam = MAX_TOKEN
) -> ArticlePage:
    """List one page of articles.

    Unread and favorited articles are ordered by publication time, read
    articles by the time they were read, newest first.
    """
    page = await list_articles(article_filter, pagination)
    set_link_header(request, response, {"filter": article_filter}, page.cursor)

    logger.info(f"Listed {len(page.items)} {article_filter} articles at {pagination}")
    return page


@articles_router.get(
    "/{article_id}",
    response_model=Article,
    summary="Get an article"
)
async def get_article_by_id(article_id: str) -> Article:
    """Get a single article by id."""
    return await get_article(article_id)


@articles_router.post(
    "/{article_id}/read",
    response_model=ArticlePage,
    summary="Toggle read",
    description="Flip an article between read and unread, then return the refreshed page."
)
async def mark_article_read(
    article_id: str,
    article_filter: FilterParam = "unread",
    pagination: PaginationParam = MAX_TOKEN
) -> ArticlePage:
    """Toggle the read flag and re-render the page the caller is on."""
    listing = check_listing(article_filter, pagination)

    article = await get_article(article_id)
    await toggle_article_read(article)

    return await list_articles(listing, pagination)


@articles_router.post(
    "/{article_id}/favorite",
    response_model=ArticlePage,
    summary="Toggle favorite",
    description="Flip an article's favorite flag, then return the refreshed page."
)
async def mark_article_favorite(
    article_id: str,
    article_filter: FilterParam = "unread",
    pagination: PaginationParam = MAX_TOKEN
) -> ArticlePage:
    """Toggle the favorite flag and re-render the page the caller is on."""
    listing = check_listing(article_filter, pagination)

    await toggle_article_favorite(article_id)

    return await list_articles(listing, pagination)

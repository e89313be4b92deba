"""HTML pages rendered with Jinja2."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..models.articles import ArticleFilter
from ..pagination import MAX_TOKEN
from ..db.articles import list_articles
from ..db.feeds import list_feeds


logger = logging.getLogger(__name__)

views_router = APIRouter(tags=["Views"], include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).parent.parent / "templates"))


def human_date(timestamp: str) -> str:
    """Render an RFC3339 timestamp as MM/DD/YYYY, passing anything else through."""
    try:
        return datetime.fromisoformat(timestamp).strftime("%m/%d/%Y")
    except ValueError:
        return timestamp


templates.env.filters["human_date"] = human_date

PaginationParam = Annotated[str, Query()]


async def _render_articles(request: Request, article_filter: ArticleFilter, pagination: str):
    page = await list_articles(article_filter, pagination)
    return templates.TemplateResponse(
        request,
        "articles.html",
        {
            "title": article_filter.heading,
            "article_filter": article_filter.value,
            "cursor": page.cursor,
            "articles": page.items,
        }
    )


@views_router.get("/", response_class=HTMLResponse)
async def index(request: Request, pagination: PaginationParam = MAX_TOKEN):
    """Unread articles."""
    return await _render_articles(request, ArticleFilter.UNREAD, pagination)


@views_router.get("/favorites.html", response_class=HTMLResponse)
async def favorites(request: Request, pagination: PaginationParam = MAX_TOKEN):
    """Favorited articles."""
    return await _render_articles(request, ArticleFilter.FAVORITE, pagination)


@views_router.get("/history.html", response_class=HTMLResponse)
async def history(request: Request, pagination: PaginationParam = MAX_TOKEN):
    """Read articles."""
    return await _render_articles(request, ArticleFilter.READ, pagination)


@views_router.get("/feeds.html", response_class=HTMLResponse)
async def feeds(request: Request, pagination: PaginationParam = MAX_TOKEN):
    """Subscribed feeds."""
    page = await list_feeds(pagination)
    return templates.TemplateResponse(
        request,
        "feeds.html",
        {"cursor": page.cursor, "feeds": page.items}
    )

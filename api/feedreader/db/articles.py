"""Database operations for articles."""

import logging
from typing import Iterable

import asyncpg

from ..models.articles import (
    Article, ArticleCreate, ArticleFilter, ArticlePage, UNREAD_DATE, rfc3339_timestamp
)
from ..pagination import PaginationField
from ..errors.problem_details import (
    NotFoundError, ProblemDetailException, InternalServerError
)
from .connection import get_db_pool
from .pages import paginate


logger = logging.getLogger(__name__)

ARTICLE_COLUMNS = (
    "id", "feed", "title", "link", "author", "published", "read", "favorited", "read_date"
)
SELECT_ARTICLE = f"SELECT {', '.join(ARTICLE_COLUMNS)} FROM articles"

# Fixed predicate and sort field behind each article listing
LISTINGS = {
    ArticleFilter.UNREAD: ("read = false", PaginationField.PUBLISHED),
    ArticleFilter.READ: ("read = true", PaginationField.READ_DATE),
    ArticleFilter.FAVORITE: ("favorited = true", PaginationField.PUBLISHED),
}


def _to_article(row) -> Article:
    return Article.model_validate(dict(row))


def check_listing(article_filter: ArticleFilter | str, pagination: str) -> ArticleFilter:
    """Validate a filter selector and token without touching the store.

    Raises:
        InvalidArticleFilterError: If the selector is not recognized
        InvalidPaginationTokenError: If the token does not parse for the filter's field
    """
    if not isinstance(article_filter, ArticleFilter):
        article_filter = ArticleFilter.from_str(article_filter)
    _, field = LISTINGS[article_filter]
    field.parse(pagination)
    return article_filter


async def _list_page(article_filter: ArticleFilter, pagination: str) -> ArticlePage:
    predicate, field = LISTINGS[article_filter]
    return await paginate(
        table="articles",
        columns=ARTICLE_COLUMNS,
        field=field,
        pagination=pagination,
        predicate=predicate,
        convert=_to_article,
        page_model=ArticlePage
    )


async def list_unread_articles(pagination: str) -> ArticlePage:
    """Unread articles, newest published first."""
    return await _list_page(ArticleFilter.UNREAD, pagination)


async def list_read_articles(pagination: str) -> ArticlePage:
    """Read articles, most recently read first."""
    return await _list_page(ArticleFilter.READ, pagination)


async def list_favorited_articles(pagination: str) -> ArticlePage:
    """Favorited articles, newest published first."""
    return await _list_page(ArticleFilter.FAVORITE, pagination)


async def list_articles(article_filter: ArticleFilter | str, pagination: str) -> ArticlePage:
    """List one page of articles matching a filter.

    Args:
        article_filter: Filter or its selector string
        pagination: Position token

    Returns:
        Page of articles

    Raises:
        InvalidArticleFilterError: If the selector is not recognized
        InvalidPaginationTokenError: If the token does not parse
        InternalServerError: If database operation fails
    """
    if not isinstance(article_filter, ArticleFilter):
        article_filter = ArticleFilter.from_str(article_filter)
    return await _list_page(article_filter, pagination)


async def get_article(article_id: str) -> Article:
    """Get a single article.

    Raises:
        NotFoundError: If the article doesn't exist
        InternalServerError: If database operation fails
    """
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            row = await conn.fetchrow(f"{SELECT_ARTICLE} WHERE id = $1", article_id)

            if not row:
                raise NotFoundError(f"Article '{article_id}' not found")

            return _to_article(row)

    except ProblemDetailException:
        raise
    except asyncpg.PostgresError as e:
        logger.error(f"Database error retrieving article: {e}")
        raise InternalServerError(f"Database error: {e}")
    except Exception as e:
        logger.error(f"Unexpected error retrieving article: {e}")
        raise InternalServerError(f"Unexpected error: {e}")


async def add_articles(articles: Iterable[ArticleCreate]) -> int:
    """Store articles, skipping any whose link is already known.

    Returns:
        Number of articles actually inserted
    """
    pool = await get_db_pool()
    query = """
        INSERT INTO articles (id, feed, title, link, author, published, read, favorited, read_date)
        VALUES ($1, $2, $3, $4, $5, $6, false, false, $7)
        ON CONFLICT (link) DO NOTHING
    """

    try:
        async with pool.acquire() as conn:
            inserted = 0
            async with conn.transaction():
                for article in articles:
                    result = await conn.execute(
                        query,
                        article.id,
                        article.feed,
                        article.title,
                        article.link,
                        article.author,
                        article.published,
                        UNREAD_DATE
                    )
                    # "INSERT 0 1" when stored, "INSERT 0 0" on conflict
                    if result.split()[-1] == "1":
                        inserted += 1

            logger.info(f"Stored {inserted} new articles")
            return inserted

    except asyncpg.PostgresError as e:
        logger.error(f"Database error storing articles: {e}")
        raise InternalServerError(f"Database error: {e}")
    except Exception as e:
        logger.error(f"Unexpected error storing articles: {e}")
        raise InternalServerError(f"Unexpected error: {e}")


async def toggle_article_read(article: Article) -> Article:
    """Flip an article between read and unread.

    Becoming read stamps ``read_date`` with the current time; becoming unread
    resets it to ``UNREAD_DATE``.
    """
    read_date = UNREAD_DATE if article.read else rfc3339_timestamp()
    return await _update_article(
        "UPDATE articles SET read = NOT read, read_date = $2 WHERE id = $1",
        article.id,
        read_date
    )


async def toggle_article_favorite(article_id: str) -> Article:
    """Flip an article's favorited flag."""
    return await _update_article(
        "UPDATE articles SET favorited = NOT favorited WHERE id = $1",
        article_id
    )


async def _update_article(statement: str, article_id: str, *args) -> Article:
    pool = await get_db_pool()

    try:
        async with pool.acquire() as conn:
            async with conn.transaction():
                row = await conn.fetchrow(
                    f"{statement} RETURNING {', '.join(ARTICLE_COLUMNS)}",
                    article_id,
                    *args
                )

            if not row:
                raise NotFoundError(f"Article '{article_id}' not found")

            article = _to_article(row)
            logger.info(
                f"Updated article {article_id} (read={article.read}, favorited={article.favorited})"
            )
            return article

    except ProblemDetailException:
        raise
    except asyncpg.PostgresError as e:
        logger.error(f"Database error updating article: {e}")
        raise InternalServerError(f"Database error: {e}")
    except Exception as e:
        logger.error(f"Unexpected error updating article: {e}")
        raise InternalServerError(f"Unexpected error: {e}")

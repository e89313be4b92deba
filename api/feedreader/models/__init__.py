"""Data models for the Feed Reader service."""

from .feeds import Feed, FeedCreate, FeedPage
from .articles import (
    Article,
    ArticleCreate,
    ArticleFilter,
    ArticlePage,
    UNREAD_DATE,
    article_id_for,
    rfc3339_timestamp
)

__all__ = [
    "Feed",
    "FeedCreate",
    "FeedPage",
    "Article",
    "ArticleCreate",
    "ArticleFilter",
    "ArticlePage",
    "UNREAD_DATE",
    "article_id_for",
    "rfc3339_timestamp"
]

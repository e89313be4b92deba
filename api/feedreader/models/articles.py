"""Pydantic models for articles."""

import base64
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, ConfigDict

from ..errors.problem_details import InvalidArticleFilterError
from ..pagination import Page


# read_date of an article that has not been read
UNREAD_DATE = "-1"


def rfc3339_timestamp(moment: datetime | None = None) -> str:
    """Format a moment (default: now) as UTC RFC3339 with millisecond precision."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def article_id_for(link: str) -> str:
    """Articles are identified by the URL-safe base64 of their link."""
    return base64.urlsafe_b64encode(link.encode("utf-8")).decode("ascii")


class ArticleFilter(str, Enum):
    """Predicates articles can be listed by."""

    UNREAD = "unread"
    READ = "read"
    FAVORITE = "favorite"

    @classmethod
    def from_str(cls, value: str) -> "ArticleFilter":
        """Parse a filter selector.

        Raises:
            InvalidArticleFilterError: If the selector is not recognized
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidArticleFilterError(value, [f.value for f in cls])

    @property
    def heading(self) -> str:
        """Heading used when rendering the list."""
        return {
            ArticleFilter.UNREAD: "unread",
            ArticleFilter.READ: "history",
            ArticleFilter.FAVORITE: "favorites",
        }[self]


class ArticleCreate(BaseModel):
    """An article parsed from a feed, ready to be stored."""

    feed: str = Field(default="", description="Name of the feed the article came from")
    title: str = ""
    link: str = Field(..., min_length=1)
    author: str = ""
    published: str = Field(description="RFC3339 publication timestamp")

    @property
    def id(self) -> str:
        return article_id_for(self.link)


class Article(BaseModel):
    """A stored article."""

    id: str
    feed: str
    title: str
    link: str
    author: str
    published: str
    read: bool
    favorited: bool
    read_date: str

    model_config = ConfigDict(from_attributes=True)


ArticlePage = Page[Article]

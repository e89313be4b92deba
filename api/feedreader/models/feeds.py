"""Pydantic models for feeds."""

from pydantic import BaseModel, Field, ConfigDict

from ..pagination import Page


class FeedCreate(BaseModel):
    """Model for subscribing to a new feed."""

    name: str = Field(..., min_length=1, description="Display name of the feed")
    site_url: str = Field(..., min_length=1, description="Home page of the site")
    feed_url: str = Field(..., min_length=1, description="RSS or Atom document URL")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Example Blog",
                "site_url": "https://blog.example.com",
                "feed_url": "https://blog.example.com/rss.xml"
            }
        }
    )


class Feed(BaseModel):
    """A subscribed feed."""

    id: int = Field(description="Feed identifier, increasing with insertion order")
    name: str
    site_url: str
    feed_url: str
    date_added: str = Field(description="RFC3339 timestamp the feed was added")
    last_updated: str = Field(description="RFC3339 timestamp of the last refresh, '-1' if never")

    model_config = ConfigDict(from_attributes=True)


FeedPage = Page[Feed]

"""Feed fetching and article ingestion."""

from .fetcher import entry_to_article, parse_feed, fetch_feed, refresh_feed

__all__ = ["entry_to_article", "parse_feed", "fetch_feed", "refresh_feed"]

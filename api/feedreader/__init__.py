"""Feed Reader: RSS feeds and articles served in keyset-paginated pages."""

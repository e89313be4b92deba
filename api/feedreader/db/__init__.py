"""PostgreSQL store for feeds and articles."""

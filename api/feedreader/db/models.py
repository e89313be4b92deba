"""SQLAlchemy models for the Feed Reader schema."""

from sqlalchemy import BigInteger, Boolean, Column, Identity, Index, Text
from sqlalchemy.orm import declarative_base

# Create base class for models
Base = declarative_base()


class Feed(Base):
    """Feeds table model."""
    __tablename__ = 'feeds'

    id = Column(BigInteger, Identity(always=False), primary_key=True)
    name = Column(Text, nullable=False)
    site_url = Column(Text, nullable=False)
    feed_url = Column(Text, nullable=False, unique=True)
    # RFC3339 strings so keyset comparisons are plain text comparisons
    date_added = Column(Text, nullable=False)
    last_updated = Column(Text, nullable=False, server_default='-1')


class Article(Base):
    """Articles table model."""
    __tablename__ = 'articles'

    id = Column(Text, primary_key=True)
    feed = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    link = Column(Text, nullable=False, unique=True)
    author = Column(Text, nullable=False)
    published = Column(Text, nullable=False)
    read = Column(Boolean, nullable=False, server_default='false')
    favorited = Column(Boolean, nullable=False, server_default='false')
    read_date = Column(Text, nullable=False, server_default='-1')

    __table_args__ = (
        Index('articles_read_published', 'read', 'published'),
        Index('articles_read_read_date', 'read', 'read_date'),
        Index('articles_favorited_published', 'favorited', 'published'),
    )


"""initial_schema

Revision ID: 3b8e61c4a2d9
Revises:
Create Date: 2026-10-19 12:10:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b8e61c4a2d9'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create feeds table
    op.create_table('feeds',
        sa.Column('id', sa.BigInteger(), sa.Identity(always=False), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('site_url', sa.Text(), nullable=False),
        sa.Column('feed_url', sa.Text(), nullable=False),
        sa.Column('date_added', sa.Text(), nullable=False),
        sa.Column('last_updated', sa.Text(), nullable=False, server_default='-1'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('feed_url')
    )

    # Create articles table
    op.create_table('articles',
        sa.Column('id', sa.Text(), nullable=False),
        sa.Column('feed', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('link', sa.Text(), nullable=False),
        sa.Column('author', sa.Text(), nullable=False),
        sa.Column('published', sa.Text(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('favorited', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('read_date', sa.Text(), nullable=False, server_default='-1'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('link')
    )

    # Keyset indexes, one per listing predicate
    op.create_index('articles_read_published', 'articles', ['read', 'published'], unique=False)
    op.create_index('articles_read_read_date', 'articles', ['read', 'read_date'], unique=False)
    op.create_index('articles_favorited_published', 'articles', ['favorited', 'published'], unique=False)


def downgrade() -> None:
    op.drop_index('articles_favorited_published', table_name='articles')
    op.drop_index('articles_read_read_date', table_name='articles')
    op.drop_index('articles_read_published', table_name='articles')

    op.drop_table('articles')
    op.drop_table('feeds')

"""Database connection pool for the Feed Reader service."""

import logging
import os
from typing import Optional
import asyncpg
from asyncpg import Pool

from ..config import get_settings


logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """Get database URL, preferring the DATABASE_URL environment variable."""
    return os.getenv("DATABASE_URL", get_settings().database_url)


class DatabaseManager:
    """Owns the connection pool every store operation checks out from."""

    def __init__(self):
        self.pool: Optional[Pool] = None

    async def initialize(self) -> None:
        """Initialize the database connection pool."""
        if self.pool is None:
            settings = get_settings()
            self.pool = await asyncpg.create_pool(
                get_database_url(),
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
                command_timeout=settings.db_command_timeout
            )
            logger.info(
                f"Connection pool created "
                f"(min={settings.db_pool_min_size}, max={settings.db_pool_max_size})"
            )

    async def close(self) -> None:
        """Close the database connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None


# Global database manager instance
db_manager = DatabaseManager()


async def get_db_pool() -> Pool:
    """Get the database connection pool."""
    if not db_manager.pool:
        await db_manager.initialize()
    return db_manager.pool

"""HTTP routes for the Feed Reader service."""

from .articles import articles_router
from .feeds import feeds_router
from .views import views_router

__all__ = ["articles_router", "feeds_router", "views_router"]

"""Article service package."""

from .router import router, get_article_service

__all__ = ["router", "get_article_service"]

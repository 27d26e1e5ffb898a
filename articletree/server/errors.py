"""Domain exceptions raised by the article and auth services."""

from __future__ import annotations


class ArticleTreeError(Exception):
    """Base exception for articletree."""


class ArticleError(ArticleTreeError):
    """Raised when an article operation cannot be completed."""


class ArticleNotFoundError(ArticleError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Article not found: {key}")


class ArticleValidationError(ArticleError):
    """Raised when submitted article fields are missing or malformed."""


class SlugConflictError(ArticleError):
    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__("Slug already exists. Please choose a unique slug.")


class InvalidParentError(ArticleError):
    """Raised when a parent reference is unknown or would create a cycle."""


class AuthError(ArticleTreeError):
    """Raised for failed signup or login attempts."""


__all__ = [
    "ArticleError",
    "ArticleNotFoundError",
    "ArticleTreeError",
    "ArticleValidationError",
    "AuthError",
    "InvalidParentError",
    "SlugConflictError",
]

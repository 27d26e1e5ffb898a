"""Hierarchical article management."""

from .models.article import ArticleNode, ArticleRecord
from .forest import build_forest, flatten

__all__ = ["ArticleNode", "ArticleRecord", "build_forest", "flatten"]

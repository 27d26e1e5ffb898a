from __future__ import annotations

import logging
import sqlite3
import uuid
from typing import List, Optional, Tuple

from articletree.forest import build_forest, descendant_ids, parent_options
from articletree.models.article import ArticleNode, ArticleRecord
from articletree.server.articles.store import ArticleStore
from articletree.server.errors import (
    ArticleNotFoundError,
    ArticleValidationError,
    InvalidParentError,
    SlugConflictError,
)
from articletree.server.settings import Settings
from articletree.utils import slugify

LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Title, slug, and content are required"
# Path segments of the articles router that a slug would shadow.
RESERVED_SLUGS = frozenset({"tree", "parent-options"})


class ArticleService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.store = ArticleStore(settings.sqlite_db_path)

    # ------------------------------------------------------------------ reads
    def list_articles(self) -> List[ArticleRecord]:
        return self.store.list_articles()

    def get_article(self, slug: str) -> ArticleRecord:
        article = self.store.get_by_slug(slug)
        if article is None:
            raise ArticleNotFoundError(slug)
        return article

    def tree(self) -> List[ArticleNode]:
        records = [
            {"id": record.id, "title": record.title, "slug": record.slug, "parent_id": record.parent_id}
            for record in self.store.list_records()
        ]
        return build_forest(records)

    def parent_options(self, exclude_slug: str | None = None) -> List[Tuple[str, str, int]]:
        exclude_id = self.get_article(exclude_slug).id if exclude_slug else None
        return parent_options(self.store.list_records(), exclude_id=exclude_id)

    # ------------------------------------------------------------------ writes
    def create_article(
        self,
        *,
        title: str,
        content: str,
        slug: str | None = None,
        parent_id: str | None = None,
    ) -> ArticleRecord:
        title, content = (title or "").strip(), content or ""
        slug = slugify((slug or "").strip() or title, fallback="")
        self._require_fields(title, slug, content)
        parent_id = self._resolve_parent(parent_id)
        if self.store.slug_exists(slug):
            raise SlugConflictError(slug)

        article_id = str(uuid.uuid4())
        try:
            self.store.create_article(
                article_id=article_id,
                title=title,
                slug=slug,
                content=content,
                parent_id=parent_id,
            )
        except sqlite3.IntegrityError as exc:
            raise SlugConflictError(slug) from exc
        LOGGER.info("Created article %s (%s) under %s", article_id, slug, parent_id or "<root>")
        return self.store.get_article(article_id)  # type: ignore[return-value]

    def update_article(
        self,
        current_slug: str,
        *,
        title: str,
        slug: str,
        content: str,
        parent_id: str | None = None,
    ) -> ArticleRecord:
        article = self.get_article(current_slug)
        title, content = (title or "").strip(), content or ""
        slug = slugify(slug or "", fallback="")
        self._require_fields(title, slug, content)
        parent_id = self._resolve_parent(parent_id, article_id=article.id)
        if self.store.slug_exists(slug, exclude_id=article.id):
            raise SlugConflictError(slug)

        try:
            self.store.update_article(
                article.id,
                title=title,
                slug=slug,
                content=content,
                parent_id=parent_id,
            )
        except sqlite3.IntegrityError as exc:
            raise SlugConflictError(slug) from exc
        LOGGER.info("Updated article %s (%s)", article.id, slug)
        return self.store.get_article(article.id)  # type: ignore[return-value]

    def delete_article(self, slug: str) -> None:
        article = self.get_article(slug)
        if not self.store.delete_article(article.id):
            raise ArticleNotFoundError(slug)
        LOGGER.info("Deleted article %s (%s)", article.id, slug)

    # ------------------------------------------------------------------ helpers
    @staticmethod
    def _require_fields(title: str, slug: str, content: str) -> None:
        if not title or not slug or not content.strip():
            raise ArticleValidationError(REQUIRED_FIELDS_MESSAGE)
        if slug in RESERVED_SLUGS:
            raise ArticleValidationError(f"Slug is reserved: {slug}")

    def _resolve_parent(self, parent_id: str | None, *, article_id: str | None = None) -> Optional[str]:
        if not parent_id:
            return None
        if self.store.get_article(parent_id) is None:
            raise InvalidParentError(f"Parent article not found: {parent_id}")
        if article_id is None:
            return parent_id
        if parent_id == article_id:
            raise InvalidParentError("An article cannot be its own parent")
        if parent_id in descendant_ids(build_forest(self.store.list_records()), article_id):
            raise InvalidParentError("An article cannot be moved under one of its descendants")
        return parent_id


__all__ = ["ArticleService", "REQUIRED_FIELDS_MESSAGE", "RESERVED_SLUGS"]

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from articletree.models.article import ArticleRecord


class ArticleStore:
    """Persists flat article records (id, title, slug, content, parent id) in SQLite."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self._ensure_parent()
        self._initialize()

    def _ensure_parent(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _initialize(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS articles (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    slug TEXT NOT NULL UNIQUE,
                    content TEXT NOT NULL,
                    parent_id TEXT REFERENCES articles(id) ON DELETE SET NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_articles_parent ON articles(parent_id);
                """
            )

    # ------------------------------------------------------------------ article CRUD
    def create_article(
        self,
        *,
        article_id: str,
        title: str,
        slug: str,
        content: str,
        parent_id: Optional[str],
    ) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO articles(id, title, slug, content, parent_id, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (article_id, title, slug, content, parent_id, now, now),
            )

    def update_article(
        self,
        article_id: str,
        *,
        title: str,
        slug: str,
        content: str,
        parent_id: Optional[str],
    ) -> bool:
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE articles
                SET title = ?, slug = ?, content = ?, parent_id = ?, updated_at = ?
                WHERE id = ?
                """,
                (title, slug, content, parent_id, now, article_id),
            )
        return cursor.rowcount > 0

    def delete_article(self, article_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM articles WHERE id = ?", (article_id,))
        return cursor.rowcount > 0

    def delete_all(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM articles")

    # ------------------------------------------------------------------ lookups
    def get_article(self, article_id: str) -> Optional[ArticleRecord]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM articles WHERE id = ?",
                (article_id,),
            ).fetchone()
        return self._row_to_record(row) if row else None

    def get_by_slug(self, slug: str) -> Optional[ArticleRecord]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM articles WHERE slug = ?",
                (slug,),
            ).fetchone()
        return self._row_to_record(row) if row else None

    def slug_exists(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        with self._connect() as conn:
            if exclude_id is None:
                row = conn.execute("SELECT 1 FROM articles WHERE slug = ?", (slug,)).fetchone()
            else:
                row = conn.execute(
                    "SELECT 1 FROM articles WHERE slug = ? AND id != ?",
                    (slug, exclude_id),
                ).fetchone()
        return row is not None

    # ------------------------------------------------------------------ listing helpers
    def list_records(self) -> List[ArticleRecord]:
        """Point-in-time flat snapshot in insertion order."""

        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM articles ORDER BY rowid").fetchall()
        return [self._row_to_record(row) for row in rows]

    def list_articles(self) -> List[ArticleRecord]:
        """Newest articles first, each carrying its direct child count."""

        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT a.*,
                       (SELECT COUNT(*) FROM articles c WHERE c.parent_id = a.id) AS child_count
                FROM articles a
                ORDER BY a.created_at DESC, a.rowid DESC
                """
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> ArticleRecord:
        return ArticleRecord(
            id=row["id"],
            title=row["title"],
            slug=row["slug"],
            content=row["content"],
            parent_id=row["parent_id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            child_count=int(row["child_count"] or 0) if "child_count" in row.keys() else 0,
        )


__all__ = ["ArticleStore"]

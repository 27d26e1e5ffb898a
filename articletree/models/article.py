from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class ArticleRecord:
    """One stored article, as listed by the record store (no nested children)."""

    id: str
    title: str
    slug: str
    content: str = ""
    parent_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    child_count: int = 0


@dataclass(slots=True)
class ArticleNode:
    """Represents an article inside a forest assembled from flat records."""

    id: str
    title: str
    slug: str
    parent_id: Optional[str] = None
    children: List["ArticleNode"] = field(default_factory=list)
    payload: Dict[str, Any] = field(default_factory=dict)

    def add_child(self, child: "ArticleNode") -> None:
        self.children.append(child)

    def to_dict(self) -> Dict[str, Any]:
        """Nested, JSON-ready view of this node and its subtree."""

        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "parent_id": self.parent_id,
        }
        for key, value in self.payload.items():
            data[key] = value.isoformat() if isinstance(value, datetime) else value
        data["children"] = [child.to_dict() for child in self.children]
        return data


__all__ = ["ArticleNode", "ArticleRecord"]

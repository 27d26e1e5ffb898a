from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from articletree.models.article import ArticleNode, ArticleRecord


class ArticleCreate(BaseModel):
    """Client payload for creating an article."""

    title: str
    content: str
    slug: str | None = Field(default=None, description="Derived from the title when omitted")
    parent_id: str | None = Field(default=None, description="Empty or null for a top level article")


class ArticleUpdate(BaseModel):
    title: str
    slug: str
    content: str
    parent_id: str | None = None


class ArticleSummary(BaseModel):
    id: str
    title: str
    slug: str
    parent_id: str | None = None
    child_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: ArticleRecord) -> "ArticleSummary":
        return cls(
            id=record.id,
            title=record.title,
            slug=record.slug,
            parent_id=record.parent_id,
            child_count=record.child_count,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class ArticleDetail(ArticleSummary):
    content: str = ""

    @classmethod
    def from_record(cls, record: ArticleRecord) -> "ArticleDetail":
        base = ArticleSummary.from_record(record)
        return cls(**base.model_dump(), content=record.content)


class ArticleListResponse(BaseModel):
    items: List[ArticleSummary]
    total: int


class ArticleTreeNode(BaseModel):
    id: str
    title: str
    slug: str
    parent_id: str | None = None
    children: List["ArticleTreeNode"] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: ArticleNode) -> "ArticleTreeNode":
        return cls(
            id=node.id,
            title=node.title,
            slug=node.slug,
            parent_id=node.parent_id,
            children=[cls.from_node(child) for child in node.children],
        )


ArticleTreeNode.model_rebuild()


class ArticleTreeResponse(BaseModel):
    items: List[ArticleTreeNode]


class ParentOption(BaseModel):
    id: str
    label: str
    depth: int


class ParentOptionsResponse(BaseModel):
    items: List[ParentOption]


__all__ = [
    "ArticleCreate",
    "ArticleDetail",
    "ArticleListResponse",
    "ArticleSummary",
    "ArticleTreeNode",
    "ArticleTreeResponse",
    "ArticleUpdate",
    "ParentOption",
    "ParentOptionsResponse",
]

from __future__ import annotations

from pathlib import Path
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Query

from articletree.server.articles.models import (
    ArticleCreate,
    ArticleDetail,
    ArticleListResponse,
    ArticleSummary,
    ArticleTreeNode,
    ArticleTreeResponse,
    ArticleUpdate,
    ParentOption,
    ParentOptionsResponse,
)
from articletree.server.articles.service import ArticleService
from articletree.server.auth import require_user
from articletree.server.auth.store import User
from articletree.server.errors import (
    ArticleError,
    ArticleNotFoundError,
    SlugConflictError,
)
from articletree.server.settings import Settings, get_settings


router = APIRouter(prefix="/api/articles", tags=["articles"])

_ARTICLE_SERVICES: Dict[Path, ArticleService] = {}


def get_article_service(settings: Settings = Depends(get_settings)) -> ArticleService:
    service = _ARTICLE_SERVICES.get(settings.sqlite_db_path)
    if service is None:
        service = _ARTICLE_SERVICES[settings.sqlite_db_path] = ArticleService(settings)
    return service


def _to_http_error(exc: ArticleError) -> HTTPException:
    if isinstance(exc, ArticleNotFoundError):
        return HTTPException(status_code=404, detail="Article not found")
    if isinstance(exc, SlugConflictError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


@router.get("", response_model=ArticleListResponse)
def list_articles(service: ArticleService = Depends(get_article_service)) -> ArticleListResponse:
    items = [ArticleSummary.from_record(record) for record in service.list_articles()]
    return ArticleListResponse(items=items, total=len(items))


@router.get("/tree", response_model=ArticleTreeResponse)
def get_tree(service: ArticleService = Depends(get_article_service)) -> ArticleTreeResponse:
    return ArticleTreeResponse(items=[ArticleTreeNode.from_node(node) for node in service.tree()])


@router.get("/parent-options", response_model=ParentOptionsResponse)
def get_parent_options(
    exclude: str | None = Query(default=None, description="Slug of the article being edited"),
    service: ArticleService = Depends(get_article_service),
    _user: User = Depends(require_user),
) -> ParentOptionsResponse:
    try:
        options = service.parent_options(exclude_slug=exclude)
    except ArticleError as exc:
        raise _to_http_error(exc) from exc
    return ParentOptionsResponse(
        items=[ParentOption(id=option_id, label=label, depth=depth) for option_id, label, depth in options]
    )


@router.get("/{slug}", response_model=ArticleDetail)
def get_article(slug: str, service: ArticleService = Depends(get_article_service)) -> ArticleDetail:
    try:
        return ArticleDetail.from_record(service.get_article(slug))
    except ArticleError as exc:
        raise _to_http_error(exc) from exc


@router.post("", response_model=ArticleDetail, status_code=201)
def create_article(
    payload: ArticleCreate,
    service: ArticleService = Depends(get_article_service),
    _user: User = Depends(require_user),
) -> ArticleDetail:
    try:
        record = service.create_article(
            title=payload.title,
            slug=payload.slug,
            content=payload.content,
            parent_id=payload.parent_id,
        )
    except ArticleError as exc:
        raise _to_http_error(exc) from exc
    return ArticleDetail.from_record(record)


@router.put("/{slug}", response_model=ArticleDetail)
def update_article(
    slug: str,
    payload: ArticleUpdate,
    service: ArticleService = Depends(get_article_service),
    _user: User = Depends(require_user),
) -> ArticleDetail:
    try:
        record = service.update_article(
            slug,
            title=payload.title,
            slug=payload.slug,
            content=payload.content,
            parent_id=payload.parent_id,
        )
    except ArticleError as exc:
        raise _to_http_error(exc) from exc
    return ArticleDetail.from_record(record)


@router.delete("/{slug}")
def delete_article(
    slug: str,
    service: ArticleService = Depends(get_article_service),
    _user: User = Depends(require_user),
):
    try:
        service.delete_article(slug)
    except ArticleError as exc:
        raise _to_http_error(exc) from exc
    return {"status": "deleted"}


__all__ = ["router", "get_article_service"]

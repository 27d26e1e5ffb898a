from __future__ import annotations

from pathlib import Path
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from articletree.server.auth.service import AuthService
from articletree.server.auth.store import User
from articletree.server.errors import AuthError
from articletree.server.settings import Settings, get_settings


router = APIRouter(prefix="/api/auth", tags=["auth"])

_AUTH_SERVICES: Dict[Path, AuthService] = {}


class Credentials(BaseModel):
    email: str
    password: str


def get_auth_service(settings: Settings = Depends(get_settings)) -> AuthService:
    service = _AUTH_SERVICES.get(settings.sqlite_db_path)
    if service is None:
        service = _AUTH_SERVICES[settings.sqlite_db_path] = AuthService(settings)
    return service


def current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
    service: AuthService = Depends(get_auth_service),
) -> User | None:
    return service.resolve(request.cookies.get(settings.session_cookie_name))


def require_user(user: User | None = Depends(current_user)) -> User:
    if user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user


def _user_payload(user: User) -> dict[str, object]:
    return {"id": user.id, "email": user.email}


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


@router.post("/signup")
def signup(
    payload: Credentials,
    response: Response,
    settings: Settings = Depends(get_settings),
    service: AuthService = Depends(get_auth_service),
):
    try:
        user, token = service.signup(payload.email, payload.password)
    except AuthError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    _set_session_cookie(response, token, settings)
    return {"user": _user_payload(user)}


@router.post("/login")
def login(
    payload: Credentials,
    response: Response,
    settings: Settings = Depends(get_settings),
    service: AuthService = Depends(get_auth_service),
):
    try:
        user, token = service.login(payload.email, payload.password)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    _set_session_cookie(response, token, settings)
    return {"user": _user_payload(user)}


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    service: AuthService = Depends(get_auth_service),
):
    service.logout(request.cookies.get(settings.session_cookie_name))
    response.delete_cookie(settings.session_cookie_name)
    return {"status": "logged_out"}


@router.get("/me")
def me(user: User = Depends(require_user)):
    return {"user": _user_payload(user)}


__all__ = ["router", "get_auth_service", "current_user", "require_user"]

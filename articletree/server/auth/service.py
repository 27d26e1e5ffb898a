from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import sqlite3
from datetime import datetime, timedelta, timezone

from articletree.server.auth.store import User, UserStore
from articletree.server.errors import AuthError
from articletree.server.settings import Settings

LOGGER = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 200_000
MIN_PASSWORD_LENGTH = 6


def hash_password(password: str, salt_hex: str) -> str:
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt_hex), PBKDF2_ITERATIONS)
    return digest.hex()


def verify_password(password: str, salt_hex: str, hash_hex: str) -> bool:
    return hmac.compare_digest(hash_password(password, salt_hex), hash_hex)


class AuthService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.store = UserStore(settings.sqlite_db_path)

    def signup(self, email: str, password: str) -> tuple[User, str]:
        email = self._normalize_email(email)
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        salt = secrets.token_bytes(16).hex()
        try:
            user = self.store.create_user(email=email, password_salt=salt, password_hash=hash_password(password, salt))
        except sqlite3.IntegrityError as exc:
            raise AuthError("User already registered") from exc
        LOGGER.info("Registered user %s", email)
        return user, self._open_session(user)

    def login(self, email: str, password: str) -> tuple[User, str]:
        credentials = self.store.get_credentials((email or "").strip().lower())
        if credentials is None or not verify_password(password or "", credentials.password_salt, credentials.password_hash):
            raise AuthError("Invalid login credentials")
        return credentials.user, self._open_session(credentials.user)

    def logout(self, token: str | None) -> None:
        if token:
            self.store.delete_session(token)

    def resolve(self, token: str | None) -> User | None:
        if not token:
            return None
        found = self.store.get_session_user(token)
        if found is None:
            return None
        user, expires_at = found
        if expires_at <= datetime.now(timezone.utc):
            self.store.delete_session(token)
            return None
        return user

    def _open_session(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        self.store.purge_expired_sessions(now)
        token = secrets.token_urlsafe(32)
        expires_at = now + timedelta(seconds=self.settings.session_max_age_seconds)
        self.store.create_session(token, user.id, expires_at)
        return token

    @staticmethod
    def _normalize_email(email: str) -> str:
        email = (email or "").strip().lower()
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise AuthError("A valid email address is required")
        return email


__all__ = ["AuthService", "hash_password", "verify_password"]

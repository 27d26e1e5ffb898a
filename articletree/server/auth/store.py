from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


@dataclass(slots=True)
class User:
    id: int
    email: str
    created_at: datetime


@dataclass(slots=True)
class UserCredentials:
    user: User
    password_salt: str
    password_hash: str


class UserStore:
    """Persists users and their server-side sessions next to the article table."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _initialize(self) -> None:
        with self._connect() as conn:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    email TEXT NOT NULL UNIQUE,
                    password_salt TEXT NOT NULL,
                    password_hash TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS sessions (
                    token TEXT PRIMARY KEY,
                    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                    created_at TEXT NOT NULL,
                    expires_at TEXT NOT NULL
                );
                """
            )

    # ------------------------------------------------------------------ users
    def create_user(self, *, email: str, password_salt: str, password_hash: str) -> User:
        now = datetime.now(timezone.utc)
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO users(email, password_salt, password_hash, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (email, password_salt, password_hash, now.isoformat()),
            )
        return User(id=int(cursor.lastrowid), email=email, created_at=now)

    def get_credentials(self, email: str) -> Optional[UserCredentials]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        if not row:
            return None
        return UserCredentials(
            user=self._row_to_user(row),
            password_salt=row["password_salt"],
            password_hash=row["password_hash"],
        )

    # ------------------------------------------------------------------ sessions
    def create_session(self, token: str, user_id: int, expires_at: datetime) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO sessions(token, user_id, created_at, expires_at) VALUES (?, ?, ?, ?)",
                (token, user_id, now, expires_at.isoformat()),
            )

    def get_session_user(self, token: str) -> Optional[tuple[User, datetime]]:
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT u.id, u.email, u.created_at, s.expires_at
                FROM sessions s
                JOIN users u ON u.id = s.user_id
                WHERE s.token = ?
                """,
                (token,),
            ).fetchone()
        if not row:
            return None
        return self._row_to_user(row), datetime.fromisoformat(row["expires_at"])

    def purge_expired_sessions(self, now: datetime) -> int:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM sessions WHERE expires_at <= ?", (now.isoformat(),))
        return cursor.rowcount

    def delete_session(self, token: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM sessions WHERE token = ?", (token,))

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=int(row["id"]),
            email=row["email"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )


__all__ = ["User", "UserCredentials", "UserStore"]

# holdings_api/db.py
# Database access layer: one SQLAlchemy engine per Database, shared by reference.
# Works against SQLite (local dev) and PostgreSQL (DATABASE_URL).

from contextlib import contextmanager
from typing import Iterator, Optional
from urllib.parse import urlparse

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine

from holdings_api import config


def normalize_database_url(url: str) -> str:
    """Accept Heroku/Render style postgres:// URLs (SQLAlchemy wants postgresql://)."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


class Database:
    """
    Shared persistence client.

    Holds the engine and hands out connections. One instance is created per
    application and attached to ``app.state``; request handlers receive it
    through the ``get_database`` dependency.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = normalize_database_url(url)
        self.engine: Engine = self._create_engine(self.url, echo)

    @staticmethod
    def _create_engine(url: str, echo: bool) -> Engine:
        if url.startswith("sqlite"):
            print("[DB] Using SQLite (local dev mode)")
            return create_engine(url, echo=echo, future=True)

        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid DATABASE_URL: {url[:20]}...")

        print(f"[DB] Using {parsed.scheme} ({parsed.hostname})")
        return create_engine(
            url,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,  # Verify connections before use
            echo=echo,
            future=True,
        )

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Read connection (no transaction commit)."""
        with self.engine.connect() as conn:
            yield conn

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """Write connection: commits on success, rolls back on error."""
        with self.engine.begin() as conn:
            yield conn

    def dispose(self) -> None:
        self.engine.dispose()


def create_database(url: Optional[str] = None) -> Database:
    return Database(url or config.DATABASE_URL)


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's shared Database."""
    return request.app.state.database

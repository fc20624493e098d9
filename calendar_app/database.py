# calendar_app/database.py
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Mapping, Optional

from dotenv import load_dotenv
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.engine.url import make_url

load_dotenv()

logger = logging.getLogger(__name__)


def _default_db_url() -> str:
    """
    Use a file-based SQLite DB at the project root when DATABASE_URL is not provided.
    """
    root = Path(__file__).resolve().parents[1]
    return f"sqlite+aiosqlite:///{(root / 'calendar.db').as_posix()}"


def _translate_sslmode(value: str) -> Optional[str]:
    """Translate libpq sslmode values to asyncpg-compatible flags."""

    normalized = value.strip().lower()
    if normalized in {"require", "verify-ca", "verify-full"}:
        return "true"
    if normalized == "disable":
        return "false"

    # "prefer" and "allow" have no asyncpg equivalent; leave the driver default.
    return None


def _normalize_database_url(raw_url: Optional[str]) -> Optional[str]:
    """Ensure async-friendly drivers even if the URL omits them."""

    if not raw_url:
        return raw_url

    try:
        url = make_url(raw_url)
    except Exception:
        return raw_url

    driver = url.drivername.lower()
    if driver in {"postgresql", "postgres"} or (
        driver.startswith("postgresql+") and driver != "postgresql+asyncpg"
    ):
        url = url.set(drivername="postgresql+asyncpg")
    elif driver == "sqlite":
        url = url.set(drivername="sqlite+aiosqlite")

    if url.drivername == "postgresql+asyncpg":
        query = dict(url.query)
        sslmode = query.pop("sslmode", None)
        if sslmode is not None:
            translated = _translate_sslmode(sslmode)
            if translated is not None:
                query["ssl"] = translated
        if query != url.query:
            url = url.set(query=query)

    return url.render_as_string(hide_password=False)


def database_url_from_env(env: Mapping[str, str]) -> str:
    """Resolve the preferred database URL from environment variables."""

    for raw in (env.get("DATABASE_URL"), env.get("POSTGRES_URL")):
        normalized = _normalize_database_url(raw)
        if normalized:
            return normalized

    return DEFAULT_SQLITE_URL


DEFAULT_SQLITE_URL: str = _default_db_url()

Base = declarative_base()


class Database:
    """Owns the async engine and session factory for one database.

    Created once per process (or per test), opened at startup and closed at
    shutdown. Request handlers get sessions from it through ``get_db``.
    """

    def __init__(self, url: str, *, echo: Optional[bool] = None) -> None:
        if echo is None:
            echo = os.getenv("SQLALCHEMY_ECHO", "0").lower() in {"1", "true", "yes"}
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, pool_pre_ping=True)
        self.session_factory = sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Database":
        return cls(database_url_from_env(os.environ if env is None else env))

    async def init_models(self) -> None:
        """Create the events table and its indexes if they do not exist."""

        import calendar_app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database ready at %s", make_url(self.url).render_as_string(hide_password=True))

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an AsyncSession from the app's database."""

    database: Database = request.app.state.database
    async with database.session() as session:
        yield session

"""Async SQLAlchemy engine and session helpers for the league tables."""

import importlib
import ssl
from typing import Any, Dict, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from app.config import settings

LEAGUE_SCHEMA_MODULES = (
    "app.schemas.managers",
    "app.schemas.teams",
    "app.schemas.seasons",
    "app.schemas.season_standings",
    "app.schemas.manager_history",
    "app.schemas.champions",
    "app.schemas.awards",
    "app.schemas.hall_of_fame",
    "app.schemas.trades",
)


def load_schema_modules() -> None:
    """Import every league table module so SQLModel.metadata is complete."""
    for module in LEAGUE_SCHEMA_MODULES:
        importlib.import_module(module)


def _normalize_db_url(url: str) -> str:
    """Select the asyncpg driver for bare ``postgres://`` / ``postgresql://`` URLs.

    URLs that already name a driver (``postgresql+psycopg``, ``sqlite+aiosqlite``)
    are left alone.
    """
    try:
        u = make_url(url)
        driver = (u.drivername or "").lower()
        if "+" in driver:
            return u.render_as_string(hide_password=False)
        if driver in ("postgres", "postgresql"):
            u = u.set(drivername="postgresql+asyncpg")
        return u.render_as_string(hide_password=False)
    except Exception:
        # String-level fallback for partial URLs make_url rejects
        for prefix in ("postgresql://", "postgres://"):
            if url.startswith(prefix):
                return "postgresql+asyncpg://" + url.split("://", 1)[1]
        return url


def _ssl_connect_args(sslmode: str) -> Dict[str, Any]:
    mode = sslmode.lower()
    if mode == "disable":
        return {"ssl": False}
    if mode in {"allow", "prefer"}:
        # asyncpg negotiates TLS itself when the server requires it
        return {}
    if mode == "require":
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return {"ssl": context}
    if mode == "verify-ca":
        context = ssl.create_default_context()
        context.check_hostname = False
        return {"ssl": context}
    return {"ssl": ssl.create_default_context()}


def _prepare_asyncpg_connection(url: str) -> Tuple[str, Dict[str, Any]]:
    """Strip query args asyncpg rejects and turn ``sslmode`` into connect kwargs."""
    split = urlsplit(_normalize_db_url(url))
    sslmode = None
    kept = []
    for key, value in parse_qsl(split.query, keep_blank_values=True):
        if key == "sslmode":
            sslmode = value
        elif key != "channel_binding":
            kept.append((key, value))

    cleaned_url = urlunsplit(split._replace(query=urlencode(kept, doseq=True))).rstrip("?")
    connect_args = _ssl_connect_args(sslmode) if sslmode else {}
    return cleaned_url, connect_args


DATABASE_URL, CONNECT_ARGS = _prepare_asyncpg_connection(settings.database_url)

engine = create_async_engine(
    DATABASE_URL,
    echo=settings.sql_echo,
    pool_pre_ping=True,
    connect_args=CONNECT_ARGS,
)
SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


async def dispose_engine() -> None:
    """Dispose of the async engine and its connection pool."""
    await engine.dispose()


def describe_database_url(url: str) -> str:
    """Return a sanitized description of the DB URL for logging (no password)."""
    try:
        u = make_url(url)
        port = f":{u.port}" if u.port else ""
        return f"{u.drivername}://{u.username or '?'}@{u.host or '?'}{port}/{u.database or '?'}"
    except Exception:
        return "<unparseable database URL>"


def create_league_tables_sync(conn: Any) -> None:
    """Create the league tables on a sync connection (tests and local dev only)."""
    load_schema_modules()
    SQLModel.metadata.create_all(conn)

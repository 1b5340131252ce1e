from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from poi_api.core.config import settings


def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
    # SQLite ignores foreign keys (and ON DELETE CASCADE) unless asked per connection
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for(url: str, echo: bool = False) -> AsyncEngine:
    """Async engine for ``url``; SQLite engines get foreign keys enabled."""
    engine = create_async_engine(url, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _set_sqlite_pragma)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async_engine = create_engine_for(str(settings.DATABASE_URL), echo=settings.DB_ECHO)

AsyncSessionLocal = create_session_factory(async_engine)

from __future__ import annotations

from pathlib import Path
from typing import Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession


engine: Optional[AsyncEngine] = None
SessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


async def init_engine(dsn: str) -> None:
    global engine
    if engine is None:
        url = make_url(dsn)
        if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
            # SQLite does not create missing parent directories
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_async_engine(dsn, future=True, echo=False)


def init_sessionmaker() -> None:
    global SessionLocal
    if SessionLocal is None:
        assert engine is not None, "Engine not initialized"
        SessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def set_sqlite_pragmas() -> None:
    assert engine is not None
    if engine.url.get_backend_name() != "sqlite" or not engine.url.database:
        return
    async with engine.begin() as conn:  # type: ignore
        await conn.exec_driver_sql("PRAGMA journal_mode=WAL;")
        await conn.exec_driver_sql("PRAGMA foreign_keys=ON;")


async def dispose_engine() -> None:
    global engine, SessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    SessionLocal = None

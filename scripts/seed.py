#!/usr/bin/env python3
"""Load every packaged name table into the configured database."""
from __future__ import annotations

import asyncio
import logging

from nametables.core.config import settings
from nametables.core.logging_config import setup_logging
from nametables.core.registry import Registry
from nametables.infra import db
from nametables.infra.migrate import migrate
from nametables.infra.repos import TablesRepo

log = logging.getLogger("scripts.seed")


async def main() -> None:
    await db.init_engine(settings.DATABASE_URL)
    db.init_sessionmaker()
    await migrate()
    async with db.SessionLocal() as s:  # type: ignore
        repo = TablesRepo(s)
        for kind, locale in Registry.available():
            await repo.save(Registry.get_table(locale, kind))
        await s.commit()
        stored = await repo.list_tables()
    log.info("Seeded %d table(s) into %s", len(stored), settings.DATABASE_URL)
    await db.dispose_engine()


if __name__ == "__main__":
    setup_logging(debug=settings.DEBUG)
    asyncio.run(main())

from __future__ import annotations

import asyncio
import logging
from argparse import Namespace
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from ...core.config import settings
from ...core.error_handler import ExitCode
from ...core.registry import Registry, normalize_locale, resource_name
from ...core.tables import NameTable, TableKind
from ...infra import db
from ...infra.migrate import migrate
from ...infra.repos import TablesRepo
from ..codecs import FILE_SUFFIXES, csv_codec, json_codec

log = logging.getLogger(__name__)


def select_tables(
    locales: Iterable[str], kinds: Optional[Iterable[TableKind]] = None
) -> List[Tuple[TableKind, str]]:
    """Packaged (kind, locale) pairs matching the filters; no locales means all."""
    wanted_locales = {normalize_locale(l) for l in locales}
    wanted_kinds = set(kinds) if kinds else None
    return [
        (kind, locale)
        for kind, locale in Registry.available()
        if (wanted_kinds is None or kind in wanted_kinds) and (not wanted_locales or locale in wanted_locales)
    ]


def write_files(tables: Iterable[NameTable], out_dir: Path, fmt: str) -> List[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for table in tables:
        path = out_dir / resource_name(table.kind, table.locale, FILE_SUFFIXES[fmt])
        if fmt == "json":
            json_codec.dump(table, path)
        else:
            csv_codec.dump(table, path)
        written.append(path)
        log.debug("Wrote %s (%d entries)", path, len(table))
    return written


async def save_tables(dsn: str, tables: Iterable[NameTable]) -> int:
    await db.init_engine(dsn)
    db.init_sessionmaker()
    try:
        await migrate()
        count = 0
        async with db.SessionLocal() as s:  # type: ignore
            repo = TablesRepo(s)
            for table in tables:
                await repo.save(table)
                count += 1
            await s.commit()
        return count
    finally:
        await db.dispose_engine()


def export_tables(args: Namespace) -> int:
    fmt = (args.format or settings.DEFAULT_FORMAT).lower()
    selected = select_tables(args.locales, args.kind)
    if not selected:
        log.error("No tables match the given locales/kinds")
        return ExitCode.USAGE
    tables = [Registry.get_table(locale, kind) for kind, locale in selected]

    if fmt == "sqlite":
        if args.database:
            dsn = args.database
        elif args.out:
            dsn = db.sqlite_url(Path(args.out) / f"nametables{FILE_SUFFIXES['sqlite']}")
        else:
            dsn = settings.DATABASE_URL
        count = asyncio.run(save_tables(dsn, tables))
        log.info("Stored %d table(s) in %s", count, dsn)
        return ExitCode.OK

    out_dir = Path(args.out) if args.out else settings.EXPORT_DIR
    written = write_files(tables, out_dir, fmt)
    log.info("Exported %d table(s) as %s to %s", len(written), fmt, out_dir)
    return ExitCode.OK

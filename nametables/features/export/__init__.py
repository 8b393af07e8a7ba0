from __future__ import annotations

import argparse

from ...core.config import SUPPORTED_FORMATS
from ...core.tables import TableKind
from .handlers import export_tables


def register(sub: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    p = sub.add_parser("export", help="Convert packaged tables to JSON, CSV or SQLite")
    p.add_argument("locales", nargs="*", help="Locales to export (default: all)")
    p.add_argument("--kind", type=TableKind.parse, action="append", help="Repeatable; default: all kinds")
    p.add_argument("--format", choices=SUPPORTED_FORMATS, default=None)
    p.add_argument("--out", help="Output directory")
    p.add_argument("--database", help="SQLAlchemy URL for --format sqlite")
    p.set_defaults(handler=export_tables)

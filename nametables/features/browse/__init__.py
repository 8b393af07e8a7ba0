from __future__ import annotations

import argparse

from ...core.tables import TableKind
from .handlers import list_tables, lookup_key, show_table


def register(sub: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    p = sub.add_parser("list", help="List packaged tables")
    p.add_argument("--kind", type=TableKind.parse, default=None)
    p.add_argument("-v", "--verbose", action="store_true", help="Include entry counts per key category")
    p.set_defaults(handler=list_tables)

    p = sub.add_parser("show", help="Print one table")
    p.add_argument("locale")
    p.add_argument("--kind", type=TableKind.parse, default=TableKind.LOCALE_NAMES)
    p.add_argument("--format", choices=("text", "json", "csv"), default="text")
    p.set_defaults(handler=show_table)

    p = sub.add_parser("lookup", help="Print the display value of one key")
    p.add_argument("locale")
    p.add_argument("key")
    p.add_argument("--kind", type=TableKind.parse, default=TableKind.LOCALE_NAMES)
    p.set_defaults(handler=lookup_key)

from __future__ import annotations

import argparse

from ...core.tables import TableKind
from .handlers import check


def register(sub: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    p = sub.add_parser("check", help="Verify key uniqueness, zone arity and format round trips")
    p.add_argument("locales", nargs="*", help="Locales to check (default: all)")
    p.add_argument("--kind", type=TableKind.parse, action="append")
    p.add_argument("--no-roundtrip", action="store_true", help="Skip the JSON/CSV round-trip comparison")
    p.set_defaults(handler=check)

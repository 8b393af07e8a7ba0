from __future__ import annotations

import logging
import sys
from argparse import Namespace

from ...core.error_handler import ExitCode
from ...core.registry import Registry, resource_name
from ...core.tables import ZoneNames
from ..codecs import csv_codec, json_codec
from ..integrity.checks import summarize

log = logging.getLogger(__name__)


def list_tables(args: Namespace) -> int:
    found = Registry.available(args.kind)
    for kind, locale in found:
        if args.verbose:
            table = Registry.get_table(locale, kind)
            counts = ", ".join(f"{cat.value}={n}" for cat, n in sorted(summarize(table).items()))
            print(f"{kind.value}\t{locale or 'root'}\t{len(table)}\t{counts}")
        else:
            print(f"{kind.value}\t{locale or 'root'}")
    log.debug("Listed %d table(s)", len(found))
    return ExitCode.OK


def _text_value(value) -> str:
    if isinstance(value, ZoneNames):
        return "\t".join(value)
    return value


def show_table(args: Namespace) -> int:
    table = Registry.get_table(args.locale, args.kind)
    if args.format == "json":
        sys.stdout.write(json_codec.dumps(table))
    elif args.format == "csv":
        sys.stdout.write(csv_codec.dumps(table))
    else:
        for key, value in table.items():
            print(f"{key}\t{_text_value(value)}")
    log.debug("Shown %s", resource_name(table.kind, table.locale, ""))
    return ExitCode.OK


def lookup_key(args: Namespace) -> int:
    table = Registry.get_table(args.locale, args.kind)
    value = table[args.key]
    if isinstance(value, ZoneNames):
        for slot, name in value._asdict().items():
            print(f"{slot}\t{name}")
    else:
        print(value)
    return ExitCode.OK

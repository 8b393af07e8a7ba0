from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path
from typing import Iterable, List

from ...core.error_handler import ExitCode
from ...core.registry import resource_name
from ..codecs import json_codec
from .parser import discover_sources, iter_tables

log = logging.getLogger(__name__)


def import_sources(paths: Iterable[Path], out_dir: Path) -> List[Path]:
    """Convert Java bundle sources into JSON table documents under ``out_dir``.

    Stops at the first source that fails validation; nothing after it is
    written.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for src, table in iter_tables(paths):
        dest = out_dir / resource_name(table.kind, table.locale)
        json_codec.dump(table, dest)
        log.info("%s -> %s (%d entries, %d shared)", src.name, dest.name, len(table), len(table.shared))
        written.append(dest)
    return written


def import_java(args: Namespace) -> int:
    paths: List[Path] = []
    for root in args.sources:
        found = discover_sources(Path(root))
        if not found:
            log.warning("No name table sources under %s", root)
        paths.extend(found)
    if not paths:
        return ExitCode.USAGE
    written = import_sources(paths, Path(args.out))
    log.info("Imported %d table(s) into %s", len(written), args.out)
    return ExitCode.OK

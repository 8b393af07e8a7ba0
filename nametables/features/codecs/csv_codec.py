"""CSV rendition of name tables.

One row per entry, in source order::

    key,shape,ref,v1,v2,v3,v4,v5,v6

``shape`` is ``text`` (value in ``v1``) or ``zone`` (six names in
``v1``..``v6``). ``ref`` carries the shared constant name, if any; the value
columns are always filled so the file reads on its own. A constant declared
as an alias is written with its targets, ``SystemV_EST=America_Eastern``.
CSV has no room for the table kind and locale, so readers pass them in.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Dict, IO, List, Optional, Union

from ...core.errors import TableFormatError
from ...core.tables import ZONE_NAME_SLOTS, NameTable, SharedRef, TableKind, Value, ZoneNames

HEADER = ["key", "shape", "ref"] + [f"v{i}" for i in range(1, ZONE_NAME_SLOTS + 1)]
SHAPE_TEXT = "text"
SHAPE_ZONE = "zone"
ALIAS_SEP = "="


def _ref_chain(table: NameTable, name: Optional[str]) -> str:
    if not name:
        return ""
    chain = [name]
    while table.alias_of(chain[-1]):
        chain.append(table.alias_of(chain[-1]))
    return ALIAS_SEP.join(chain)


def write_rows(table: NameTable, fp: IO[str]) -> None:
    writer = csv.writer(fp, lineterminator="\n")
    writer.writerow(HEADER)
    for key, value in table.items():
        ref = _ref_chain(table, table.ref_of(key))
        if isinstance(value, ZoneNames):
            writer.writerow([key, SHAPE_ZONE, ref, *value])
        else:
            writer.writerow([key, SHAPE_TEXT, ref, value] + [""] * (ZONE_NAME_SLOTS - 1))


def read_rows(fp: IO[str], kind: Union[str, TableKind], locale: str) -> NameTable:
    reader = csv.reader(fp)
    header = next(reader, None)
    if header != HEADER:
        raise TableFormatError(f"Unexpected CSV header {header!r}", locale=locale)

    shared: Dict[str, Any] = {}
    pairs: List[tuple] = []
    for lineno, row in enumerate(reader, start=2):
        if len(row) != len(HEADER):
            raise TableFormatError(f"Line {lineno}: expected {len(HEADER)} columns, got {len(row)}", locale=locale)
        key, shape, ref, *values = row
        if shape == SHAPE_ZONE:
            value: Value = ZoneNames(*values)
        elif shape == SHAPE_TEXT:
            if any(values[1:]):
                raise TableFormatError(f"Line {lineno}: text row with extra values", locale=locale, key=key)
            value = values[0]
        else:
            raise TableFormatError(f"Line {lineno}: unknown shape {shape!r}", locale=locale, key=key)

        if ref:
            names = ref.split(ALIAS_SEP)
            bindings = [(n, SharedRef(t)) for n, t in zip(names, names[1:])] + [(names[-1], value)]
            for name, bound in bindings:
                if shared.setdefault(name, bound) != bound:
                    raise TableFormatError(
                        f"Line {lineno}: shared value {name!r} differs from earlier rows", locale=locale, key=key
                    )
            pairs.append((key, SharedRef(names[0])))
        else:
            pairs.append((key, value))
    return NameTable.build(kind, locale, pairs, shared=shared)


def dumps(table: NameTable) -> str:
    buf = io.StringIO()
    write_rows(table, buf)
    return buf.getvalue()


def loads(text: str, kind: Union[str, TableKind], locale: str) -> NameTable:
    return read_rows(io.StringIO(text, newline=""), kind, locale)


def dump(table: NameTable, path: Path) -> None:
    with path.open("w", encoding="utf-8", newline="") as fh:
        write_rows(table, fh)


def load(path: Path, kind: Union[str, TableKind], locale: str) -> NameTable:
    with path.open(encoding="utf-8", newline="") as fh:
        return read_rows(fh, kind, locale)

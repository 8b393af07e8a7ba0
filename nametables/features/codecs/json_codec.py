"""JSON documents for name tables.

Layout::

    {
      "kind": "timezonenames",
      "locale": "fr_CA",
      "shared": {"America_Eastern": ["heure normale de l’Est", "HNE", ...]},
      "entries": [["America/New_York", {"$ref": "America_Eastern"}], ...]
    }

``entries`` keeps source order. Values bound to a shared constant are
written as ``{"$ref": name}`` so the deduplication survives a round trip.
A shared constant declared as an alias of another is written the same way
inside ``shared``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, IO, List, Union

from ...core.errors import TableFormatError
from ...core.tables import NameTable, SharedRef, TableKind

REF_KEY = "$ref"


def _plain(value: Any) -> Any:
    return list(value) if isinstance(value, tuple) else value


def _compact(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _ref(value: Dict[str, Any], *, locale: str, key: Any) -> SharedRef:
    if set(value) != {REF_KEY} or not isinstance(value[REF_KEY], str):
        raise TableFormatError(f"Malformed reference {value!r}", locale=locale, key=key)
    return SharedRef(value[REF_KEY])


def to_document(table: NameTable) -> Dict[str, Any]:
    entries: List[list] = []
    for key, value in table.items():
        ref = table.ref_of(key)
        entries.append([key, {REF_KEY: ref} if ref else _plain(value)])
    return {
        "kind": table.kind.value,
        "locale": table.locale,
        "shared": {
            name: {REF_KEY: table.alias_of(name)} if table.alias_of(name) else _plain(v)
            for name, v in table.shared.items()
        },
        "entries": entries,
    }


def from_document(doc: Any) -> NameTable:
    if not isinstance(doc, dict):
        raise TableFormatError("Document is not a JSON object")
    missing = [f for f in ("kind", "locale", "entries") if f not in doc]
    if missing:
        raise TableFormatError(f"Document is missing {', '.join(missing)}")
    locale = doc["locale"]
    if not isinstance(locale, str):
        raise TableFormatError("Document locale must be a string")
    try:
        kind = TableKind.parse(doc["kind"])
    except ValueError as e:
        raise TableFormatError(str(e), locale=locale) from e

    raw_shared = doc.get("shared") or {}
    if not isinstance(raw_shared, dict):
        raise TableFormatError("Document shared values must be an object", locale=locale)
    shared = {
        name: _ref(value, locale=locale, key=name) if isinstance(value, dict) else value
        for name, value in raw_shared.items()
    }

    if not isinstance(doc["entries"], list):
        raise TableFormatError("Document entries must be an array", locale=locale)

    pairs = []
    for entry in doc["entries"]:
        if not isinstance(entry, list) or len(entry) != 2:
            raise TableFormatError(f"Malformed entry {entry!r}", locale=locale)
        key, value = entry
        if isinstance(value, dict):
            value = _ref(value, locale=locale, key=key)
        pairs.append((key, value))
    return NameTable.build(kind, locale, pairs, shared=shared)


def dumps(table: NameTable) -> str:
    """Serialize ``table`` one entry per line, UTF-8 text without escapes."""
    doc = to_document(table)
    lines = [
        "{",
        f'  "kind": {_compact(doc["kind"])},',
        f'  "locale": {_compact(doc["locale"])},',
        '  "shared": {',
    ]
    shared = list(doc["shared"].items())
    for i, (name, value) in enumerate(shared):
        sep = "," if i < len(shared) - 1 else ""
        lines.append(f"    {_compact(name)}: {_compact(value)}{sep}")
    lines.append("  },")
    lines.append('  "entries": [')
    entries = doc["entries"]
    for i, entry in enumerate(entries):
        sep = "," if i < len(entries) - 1 else ""
        lines.append(f"    {_compact(entry)}{sep}")
    lines.append("  ]")
    lines.append("}")
    return "\n".join(lines) + "\n"


def loads(text: str) -> NameTable:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise TableFormatError(f"Invalid JSON: {e}") from e
    return from_document(doc)


def dump(table: NameTable, fp: Union[IO[str], Path]) -> None:
    if isinstance(fp, Path):
        fp.write_text(dumps(table), encoding="utf-8")
    else:
        fp.write(dumps(table))


def load(fp: Union[IO[str], Path]) -> NameTable:
    if isinstance(fp, Path):
        return loads(fp.read_text(encoding="utf-8"))
    return loads(fp.read())

"""Lookup of packaged name tables by locale.

Tables are JSON documents named ``<kind>_<locale>.json`` inside the
``nametables.locales`` package (or ``settings.DATA_DIR`` when set). Each one
is parsed on first use and kept for the life of the process. A locale maps
to exactly one table: there is no fallback to parent locales.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .config import settings
from .errors import TableFormatError, UnknownLocaleError
from .tables import NameTable, TableKind, Value

log = logging.getLogger(__name__)

RESOURCE_PACKAGE = "nametables.locales"
ROOT_LOCALE_NAME = "root"


def normalize_locale(tag: str) -> str:
    """Canonical underscore form of a locale tag, e.g. ``fr-ca`` -> ``fr_CA``.

    Script subtags are title-cased and region subtags upper-cased; anything
    else after the language is kept as given. ``root`` and the empty string
    both name the root locale, returned as ``""``.
    """
    parts = [p for p in tag.strip().replace("-", "_").split("_") if p]
    if not parts or parts[0].lower() == ROOT_LOCALE_NAME:
        return ""
    out = [parts[0].lower()]
    for p in parts[1:]:
        if len(p) == 4 and p.isalpha():
            out.append(p.title())
        elif (len(p) == 2 and p.isalpha()) or (len(p) == 3 and p.isdigit()):
            out.append(p.upper())
        else:
            out.append(p)
    return "_".join(out)


def resource_name(kind: TableKind, locale: str, suffix: str = ".json") -> str:
    return f"{kind.value}_{locale or ROOT_LOCALE_NAME}{suffix}"


def parse_resource_name(name: str) -> Optional[Tuple[TableKind, str]]:
    """Inverse of ``resource_name``; ``None`` for files that are not tables."""
    stem, _, _suffix = name.rpartition(".")
    prefix, sep, locale = stem.partition("_")
    if not sep:
        return None
    try:
        kind = TableKind.parse(prefix)
    except ValueError:
        return None
    return kind, "" if locale == ROOT_LOCALE_NAME else locale


class Registry:
    _tables: Dict[Tuple[TableKind, str], NameTable] = {}
    _data_dir: Optional[Path] = None

    @classmethod
    def configure(cls, data_dir: Optional[Path]) -> None:
        cls._data_dir = data_dir
        cls.clear()

    @classmethod
    def clear(cls) -> None:
        cls._tables.clear()

    @classmethod
    def _source(cls):
        data_dir = cls._data_dir or settings.DATA_DIR
        if data_dir is not None:
            return Path(data_dir)
        return resources.files(RESOURCE_PACKAGE)

    @classmethod
    def available(cls, kind: Optional[Union[str, TableKind]] = None) -> List[Tuple[TableKind, str]]:
        wanted = TableKind.parse(kind) if kind is not None else None
        found = []
        for entry in cls._source().iterdir():
            if not entry.name.endswith(".json"):
                continue
            parsed = parse_resource_name(entry.name)
            if parsed is None:
                continue
            if wanted is None or parsed[0] is wanted:
                found.append(parsed)
        return sorted(found, key=lambda p: (p[0].value, p[1]))

    @classmethod
    def get_table(cls, locale: str, kind: Union[str, TableKind] = TableKind.LOCALE_NAMES) -> NameTable:
        from ..features.codecs import json_codec

        kind = TableKind.parse(kind)
        locale = normalize_locale(locale)
        cache_key = (kind, locale)
        table = cls._tables.get(cache_key)
        if table is not None:
            return table

        res = cls._source().joinpath(resource_name(kind, locale))
        if not res.is_file():
            raise UnknownLocaleError(locale, kind.value)
        table = json_codec.loads(res.read_text(encoding="utf-8"))
        if table.kind is not kind or table.locale != locale:
            raise TableFormatError(
                f"Resource {res.name} declares {table.kind.value}/{table.locale or ROOT_LOCALE_NAME}", locale=locale
            )
        log.debug("Loaded %s table for %s (%d entries)", kind.value, locale or ROOT_LOCALE_NAME, len(table))
        # Concurrent first loads agree on a single instance.
        return cls._tables.setdefault(cache_key, table)


def get_table(locale: str, kind: Union[str, TableKind] = TableKind.LOCALE_NAMES) -> NameTable:
    return Registry.get_table(locale, kind)


def lookup(locale: str, key: str, kind: Union[str, TableKind] = TableKind.LOCALE_NAMES) -> Value:
    """Display value for ``key`` in one locale's table; ``KeyError`` if absent."""
    return Registry.get_table(locale, kind)[key]

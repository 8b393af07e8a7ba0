"""Data-integrity checks over name tables."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ...core.errors import NameTablesError
from ...core.registry import Registry, normalize_locale
from ...core.tables import EXCITY_PREFIX, NameTable, TableKind
from ..codecs import csv_codec, json_codec

log = logging.getLogger(__name__)


class KeyCategory(str, Enum):
    REGION = "region"
    SCRIPT = "script"
    LANGUAGE = "language"
    VARIANT = "variant"
    KEYWORD = "keyword"
    CURRENCY = "currency"
    ZONE = "zone"
    ZONE_ALIAS = "zone-alias"
    EXEMPLAR_CITY = "exemplar-city"
    UNKNOWN = "unknown"


_LOCALE_KEY_PATTERNS = [
    (KeyCategory.REGION, re.compile(r"^(?:[A-Z]{2}|\d{3})$")),
    (KeyCategory.SCRIPT, re.compile(r"^[A-Z][a-z]{3}$")),
    (KeyCategory.LANGUAGE, re.compile(r"^(?:root|[a-z]{2,3}(?:_[A-Za-z0-9]+)*)$")),
    (KeyCategory.VARIANT, re.compile(r"^%%[A-Z0-9]+$")),
    (KeyCategory.KEYWORD, re.compile(r"^(?:key\.[a-z0-9]+|type\.[a-z0-9]+\.[A-Za-z0-9\-]+)$")),
]
_CURRENCY_RE = re.compile(r"^[A-Za-z]{3}$")
_ZONE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_+\-]*(?:/[A-Za-z0-9_+\-]+)*$")


def classify_key(key: str, kind: Union[str, TableKind] = TableKind.LOCALE_NAMES) -> KeyCategory:
    kind = TableKind.parse(kind)
    if kind is TableKind.TIMEZONE_NAMES:
        if key.startswith(EXCITY_PREFIX):
            return KeyCategory.EXEMPLAR_CITY if _ZONE_RE.match(key[len(EXCITY_PREFIX):]) else KeyCategory.UNKNOWN
        if not _ZONE_RE.match(key):
            return KeyCategory.UNKNOWN
        return KeyCategory.ZONE if "/" in key else KeyCategory.ZONE_ALIAS
    if kind is TableKind.CURRENCY_NAMES:
        return KeyCategory.CURRENCY if _CURRENCY_RE.match(key) else KeyCategory.UNKNOWN
    for category, pattern in _LOCALE_KEY_PATTERNS:
        if pattern.match(key):
            return category
    return KeyCategory.UNKNOWN


def summarize(table: NameTable) -> Dict[KeyCategory, int]:
    counts: Dict[KeyCategory, int] = {}
    for key in table:
        cat = classify_key(key, table.kind)
        counts[cat] = counts.get(cat, 0) + 1
    return counts


@dataclass(frozen=True)
class Issue:
    kind: TableKind
    locale: str
    message: str
    key: Optional[str] = None

    def __str__(self) -> str:
        where = f"{self.kind.value}/{self.locale or 'root'}"
        if self.key is not None:
            where += f" [{self.key}]"
        return f"{where}: {self.message}"


def _roundtrip_issues(table: NameTable) -> List[Issue]:
    issues: List[Issue] = []
    candidates = [
        ("json", lambda: json_codec.loads(json_codec.dumps(table))),
        ("csv", lambda: csv_codec.loads(csv_codec.dumps(table), table.kind, table.locale)),
    ]
    for name, convert in candidates:
        try:
            back = convert()
        except NameTablesError as e:
            issues.append(Issue(table.kind, table.locale, f"{name} round trip failed: {e}"))
            continue
        if back != table:
            issues.append(Issue(table.kind, table.locale, f"{name} round trip changed the table"))
    return issues


def check_table(table: NameTable, *, roundtrip: bool = True) -> List[Issue]:
    issues: List[Issue] = []
    for key, value in table.items():
        if classify_key(key, table.kind) is KeyCategory.UNKNOWN:
            issues.append(Issue(table.kind, table.locale, "unrecognized key", key))
        if value == "":
            issues.append(Issue(table.kind, table.locale, "empty display name", key))
    if roundtrip:
        issues.extend(_roundtrip_issues(table))
    return issues


def check_all(
    kinds: Optional[Iterable[Union[str, TableKind]]] = None,
    locales: Optional[Iterable[str]] = None,
    *,
    roundtrip: bool = True,
) -> Dict[Tuple[TableKind, str], List[Issue]]:
    """Check every packaged table, optionally narrowed by kind and locale.

    Tables that fail to load are reported as a single issue rather than
    aborting the run.
    """
    wanted_kinds = {TableKind.parse(k) for k in kinds} if kinds else None
    wanted_locales = {normalize_locale(l) for l in locales} if locales else None
    results: Dict[Tuple[TableKind, str], List[Issue]] = {}
    for kind, locale in Registry.available():
        if wanted_kinds is not None and kind not in wanted_kinds:
            continue
        if wanted_locales is not None and locale not in wanted_locales:
            continue
        try:
            table = Registry.get_table(locale, kind)
        except NameTablesError as e:
            results[(kind, locale)] = [Issue(kind, locale, f"failed to load: {e}")]
            continue
        results[(kind, locale)] = check_table(table, roundtrip=roundtrip)
        log.debug("Checked %s/%s: %d issue(s)", kind.value, locale or "root", len(results[(kind, locale)]))
    return results

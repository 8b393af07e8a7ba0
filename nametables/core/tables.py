"""In-memory name tables.

A table is an ordered, read-only mapping from a code (region, script,
language tag, zone ID, currency code...) to its localized display value.
Time-zone tables hold six-slot ``ZoneNames`` values, except for
exemplar-city keys which hold a plain string.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, NamedTuple, Optional, Sequence, Tuple, Union

from .errors import ArityError, DuplicateKeyError, TableFormatError, UnresolvedReferenceError


EXCITY_PREFIX = "timezone.excity."
ZONE_NAME_SLOTS = 6


class TableKind(str, Enum):
    LOCALE_NAMES = "localenames"
    TIMEZONE_NAMES = "timezonenames"
    CURRENCY_NAMES = "currencynames"

    @classmethod
    def parse(cls, value: Union[str, "TableKind"]) -> "TableKind":
        if isinstance(value, cls):
            return value
        v = str(value).strip().lower().replace("-", "").replace("_", "")
        aliases = {
            "locale": cls.LOCALE_NAMES,
            "locales": cls.LOCALE_NAMES,
            "timezone": cls.TIMEZONE_NAMES,
            "timezones": cls.TIMEZONE_NAMES,
            "tz": cls.TIMEZONE_NAMES,
            "currency": cls.CURRENCY_NAMES,
            "currencies": cls.CURRENCY_NAMES,
        }
        if v in aliases:
            return aliases[v]
        for kind in cls:
            if kind.value == v:
                return kind
        raise ValueError(f"Unknown table kind: {value!r}")

    def __str__(self) -> str:
        return self.value


class ZoneNames(NamedTuple):
    """The six display-name variants of a time zone.

    Empty strings mean the locale has no distinct form for that slot.
    """

    long_standard: str
    short_standard: str
    long_daylight: str
    short_daylight: str
    long_generic: str
    short_generic: str

    @classmethod
    def from_sequence(
        cls, values: Sequence[Any], *, key: str = "", locale: Optional[str] = None
    ) -> "ZoneNames":
        if isinstance(values, cls):
            return values
        if len(values) != ZONE_NAME_SLOTS:
            raise ArityError(key, len(values), ZONE_NAME_SLOTS, locale=locale)
        for v in values:
            if not isinstance(v, str):
                raise TableFormatError(f"Zone name slot is not a string: {v!r}", locale=locale, key=key)
        return cls(*values)


class SharedRef(NamedTuple):
    """Placeholder for a value bound to a named shared constant."""

    name: str


Value = Union[str, ZoneNames]


def expects_zone_names(kind: TableKind, key: str) -> bool:
    return kind is TableKind.TIMEZONE_NAMES and not key.startswith(EXCITY_PREFIX)


def _coerce(value: Any, *, key: str, locale: str) -> Value:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ZoneNames.from_sequence(value, key=key, locale=locale)
    raise TableFormatError(f"Unsupported value type {type(value).__name__}", locale=locale, key=key)


def _ref_name(ref: SharedRef, *, key: str, locale: str) -> str:
    if not isinstance(ref.name, str) or not ref.name:
        raise TableFormatError(f"Bad shared reference name {ref.name!r}", locale=locale, key=key)
    return ref.name


class NameTable(Mapping):
    """Read-only, ordered mapping of code -> display value for one locale."""

    __slots__ = ("kind", "locale", "_keys", "_index", "_shared", "_refs", "_aliases")

    def __init__(
        self,
        kind: TableKind,
        locale: str,
        keys: Tuple[str, ...],
        index: Dict[str, Value],
        shared: Dict[str, Value],
        refs: Dict[str, str],
        aliases: Optional[Dict[str, str]] = None,
    ) -> None:
        self.kind = kind
        self.locale = locale
        self._keys = keys
        self._index = MappingProxyType(index)
        self._shared = MappingProxyType(shared)
        self._refs = MappingProxyType(refs)
        self._aliases = MappingProxyType(aliases or {})

    @classmethod
    def build(
        cls,
        kind: Union[str, TableKind],
        locale: str,
        pairs: Iterable[Tuple[str, Any]],
        shared: Optional[Mapping[str, Any]] = None,
    ) -> "NameTable":
        """Validate ``pairs`` and build a table.

        A pair's value may be a string, a six-item sequence, or a
        ``SharedRef`` naming an entry of ``shared``. A shared value may
        itself be a ``SharedRef`` to another shared name, which makes it an
        alias. Every key bound to the same shared name, or to an alias of
        it, resolves to the same value object.
        """
        kind = TableKind.parse(kind)
        declared = dict(shared or {})
        aliases: Dict[str, str] = {}
        values: Dict[str, Value] = {}
        first_name: Dict[int, str] = {}
        for name, value in declared.items():
            if isinstance(value, SharedRef):
                aliases[name] = _ref_name(value, key=name, locale=locale)
            elif isinstance(value, (list, tuple)) and id(value) in first_name:
                # the same sequence object under two names
                aliases[name] = first_name[id(value)]
            else:
                if isinstance(value, (list, tuple)):
                    first_name[id(value)] = name
                values[name] = _coerce(value, key=name, locale=locale)

        resolved_shared: Dict[str, Value] = {}
        for name in declared:
            target = name
            seen = {name}
            while target in aliases:
                target = aliases[target]
                if target in seen:
                    raise TableFormatError("Shared value alias cycle", locale=locale, key=name)
                seen.add(target)
            if target not in values:
                raise UnresolvedReferenceError(target, locale=locale, key=name)
            resolved_shared[name] = values[target]

        keys: list[str] = []
        index: Dict[str, Value] = {}
        refs: Dict[str, str] = {}
        for key, value in pairs:
            if not isinstance(key, str):
                raise TableFormatError(f"Key is not a string: {key!r}", locale=locale)
            if key in index:
                raise DuplicateKeyError(key, locale=locale)
            if isinstance(value, SharedRef):
                name = _ref_name(value, key=key, locale=locale)
                if name not in resolved_shared:
                    raise UnresolvedReferenceError(name, locale=locale, key=key)
                refs[key] = name
                value = resolved_shared[name]
            else:
                value = _coerce(value, key=key, locale=locale)
            if expects_zone_names(kind, key) != isinstance(value, ZoneNames):
                shape = "zone names" if expects_zone_names(kind, key) else "a string"
                raise TableFormatError(f"Expected {shape}", locale=locale, key=key)
            keys.append(key)
            index[key] = value
        return cls(kind, locale, tuple(keys), index, resolved_shared, refs, aliases)

    def __getitem__(self, key: str) -> Value:
        return self._index[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NameTable):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.locale == other.locale
            and list(self.items()) == list(other.items())
            and self._ref_chains() == other._ref_chains()
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<NameTable {self.kind.value}/{self.locale or 'root'} entries={len(self)} shared={len(self._shared)}>"

    @property
    def shared(self) -> Mapping[str, Value]:
        return self._shared

    def ref_of(self, key: str) -> Optional[str]:
        """Name of the shared constant ``key`` is bound to, if any."""
        return self._refs.get(key)

    def alias_of(self, name: str) -> Optional[str]:
        """Shared name that ``name`` was declared as an alias of, if any."""
        return self._aliases.get(name)

    def _ref_chains(self) -> Dict[str, Tuple[str, ...]]:
        chains = {}
        for key, name in self._refs.items():
            chain = [name]
            while chain[-1] in self._aliases:
                chain.append(self._aliases[chain[-1]])
            chains[key] = tuple(chain)
        return chains

    def zone_names(self, zone_id: str) -> ZoneNames:
        if self.kind is not TableKind.TIMEZONE_NAMES:
            raise TypeError(f"{self.kind.value} table has no zone names")
        value = self._index[zone_id]
        if not isinstance(value, ZoneNames):
            raise KeyError(zone_id)
        return value

    def exemplar_city(self, zone_id: str) -> Optional[str]:
        value = self._index.get(EXCITY_PREFIX + zone_id)
        return value if isinstance(value, str) else None

    def zones(self) -> Iterator[str]:
        """Zone keys in source order, exemplar-city keys excluded."""
        return (k for k, v in self.items() if isinstance(v, ZoneNames))

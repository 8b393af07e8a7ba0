from __future__ import annotations

from typing import Optional


class NameTablesError(Exception):
    """Base class for every error raised by nametables."""


class TableFormatError(NameTablesError):
    def __init__(self, message: str, *, locale: Optional[str] = None, key: Optional[str] = None) -> None:
        where = []
        if locale is not None:
            where.append(f"locale={locale or 'root'}")
        if key is not None:
            where.append(f"key={key!r}")
        super().__init__(f"{message} ({', '.join(where)})" if where else message)
        self.locale = locale
        self.key = key


class DuplicateKeyError(TableFormatError):
    def __init__(self, key: str, *, locale: Optional[str] = None) -> None:
        super().__init__("Duplicate key", locale=locale, key=key)


class ArityError(TableFormatError):
    def __init__(self, key: str, size: int, expected: int, *, locale: Optional[str] = None) -> None:
        super().__init__(f"Zone names must have {expected} slots, got {size}", locale=locale, key=key)
        self.size = size
        self.expected = expected


class UnresolvedReferenceError(TableFormatError):
    def __init__(self, name: str, *, locale: Optional[str] = None, key: Optional[str] = None) -> None:
        super().__init__(f"Unknown shared value {name!r}", locale=locale, key=key)
        self.name = name


class UnknownLocaleError(NameTablesError, LookupError):
    def __init__(self, locale: str, kind: str) -> None:
        super().__init__(f"No {kind} table for locale {locale or 'root'!r}")
        self.locale = locale
        self.kind = kind

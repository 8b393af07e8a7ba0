"""Reader for generated Java ``ListResourceBundle`` sources.

The CLDR build emits one class per locale and table kind::

    public class TimeZoneNames_fr_CA extends TimeZoneNamesBundle {
        @Override
        protected final Object[][] getContents() {
            final String[] America_Eastern = new String[] { "...", ... };
            final Object[][] data = new Object[][] {
                { "America/New_York", America_Eastern },
                { "timezone.excity.Pacific/Easter", "\\u00eele de P\\u00e2ques" },
            };
            return data;
        }
    }

Only that shape is understood. Local constants become shared values of the
resulting table; constants no entry uses are dropped.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ...core.errors import TableFormatError
from ...core.tables import NameTable, SharedRef, TableKind

log = logging.getLogger(__name__)

CLASS_PREFIXES = {
    "LocaleNames": TableKind.LOCALE_NAMES,
    "TimeZoneNames": TableKind.TIMEZONE_NAMES,
    "CurrencyNames": TableKind.CURRENCY_NAMES,
}
SOURCE_NAME_RE = re.compile(r"^(LocaleNames|TimeZoneNames|CurrencyNames)(?:_(\w+))?\.java$")

_TOKEN_RE = re.compile(
    r'/\*.*?\*/|//[^\n]*'             # comments
    r'|"(?:[^"\\\n]|\\.)*"'           # string literal
    r"|[A-Za-z_$][\w$]*"              # identifier / keyword
    r"|\[\s*\]"                       # array brackets
    r"|\S",
    re.DOTALL,
)
_ESCAPE_RE = re.compile(r"\\(u+[0-9a-fA-F]{4}|[0-3][0-7]{0,2}|[4-7][0-7]?|.)")
_SIMPLE_ESCAPES = {"b": "\b", "t": "\t", "n": "\n", "f": "\f", "r": "\r", '"': '"', "'": "'", "\\": "\\", "s": " "}


def decode_java_string(literal: str) -> str:
    """Value of a Java string literal, quotes included in ``literal``."""
    if len(literal) < 2 or literal[0] != '"' or literal[-1] != '"':
        raise ValueError(f"Not a string literal: {literal!r}")

    def repl(m: "re.Match[str]") -> str:
        esc = m.group(1)
        if esc[0] == "u":
            return chr(int(esc.lstrip("u"), 16))
        if esc[0].isdigit():
            return chr(int(esc, 8))
        try:
            return _SIMPLE_ESCAPES[esc]
        except KeyError:
            raise ValueError(f"Invalid escape \\{esc}") from None

    decoded = _ESCAPE_RE.sub(repl, literal[1:-1])
    # \\u escapes may spell out surrogate pairs
    return decoded.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def classify_class_name(name: str) -> Tuple[TableKind, str]:
    prefix, _, locale = name.partition("_")
    try:
        return CLASS_PREFIXES[prefix], locale
    except KeyError:
        raise TableFormatError(f"Not a name table class: {name}") from None


class BundleSourceParser:
    """Token cursor over one Java source file."""

    def __init__(self, text: str, filename: str = "<string>") -> None:
        self.filename = filename
        self.tokens = [t for t in _TOKEN_RE.findall(text) if not t.startswith(("/*", "//"))]
        self.pos = 0
        self.locale: Optional[str] = None

    def _error(self, message: str) -> TableFormatError:
        around = " ".join(self.tokens[max(self.pos - 3, 0):self.pos + 3])
        return TableFormatError(f"{self.filename}: {message} near {around!r}", locale=self.locale)

    def _peek(self) -> str:
        if self.pos >= len(self.tokens):
            raise self._error("Unexpected end of source")
        return self.tokens[self.pos]

    def _next(self) -> str:
        tok = self._peek()
        self.pos += 1
        return tok

    def _expect(self, *expected: str) -> None:
        for want in expected:
            tok = self._next()
            if tok.replace(" ", "") != want:
                raise self._error(f"Expected {want!r}, got {tok!r}")

    def _seek(self, *seq: str) -> None:
        n = len(seq)
        for i in range(self.pos, len(self.tokens) - n + 1):
            if tuple(self.tokens[i:i + n]) == seq:
                self.pos = i + n
                return
        raise self._error(f"Could not find {' '.join(seq)!r}")

    def _string(self) -> str:
        tok = self._next()
        if not tok.startswith('"'):
            raise self._error(f"Expected a string literal, got {tok!r}")
        try:
            return decode_java_string(tok)
        except ValueError as e:
            raise self._error(str(e)) from e

    def _string_array(self) -> List[str]:
        # after `new String[]`
        self._expect("{")
        values: List[str] = []
        while self._peek() != "}":
            values.append(self._string())
            if self._peek() == ",":
                self._next()
        self._next()
        return values

    def _value(self, constants: Dict[str, Any]) -> Any:
        tok = self._peek()
        if tok.startswith('"'):
            return self._string()
        if tok == "new":
            self._expect("new", "String", "[]")
            return self._string_array()
        self._next()
        if tok not in constants:
            raise self._error(f"Unknown constant {tok!r}")
        return SharedRef(tok)

    def _rows(self, constants: Dict[str, Any]) -> List[Tuple[str, Any]]:
        # after `new Object[][]`
        self._expect("{")
        rows: List[Tuple[str, Any]] = []
        while self._peek() != "}":
            self._expect("{")
            key = self._string()
            self._expect(",")
            value = self._value(constants)
            if self._peek() == ",":
                self._next()
            self._expect("}")
            rows.append((key, value))
            if self._peek() == ",":
                self._next()
        self._next()
        return rows

    def parse(self) -> NameTable:
        self._seek("class")
        class_name = self._next()
        kind, self.locale = classify_class_name(class_name)
        self._seek("getContents", "(", ")", "{")

        constants: Dict[str, Any] = {}
        rows: Optional[List[Tuple[str, Any]]] = None
        while self._peek() != "return":
            self._expect("final")
            type_name = self._next()
            while self._peek().replace(" ", "") == "[]":
                type_name += self._next().replace(" ", "")
            name = self._next()
            self._expect("=")
            if type_name == "Object[][]":
                self._expect("new", "Object", "[]", "[]")
                rows = self._rows(constants)
            elif type_name == "String[]":
                if self._peek() == "new":
                    self._expect("new", "String", "[]")
                    constants[name] = self._string_array()
                else:
                    constants[name] = self._value(constants)
            elif type_name == "String":
                constants[name] = self._value(constants)
            else:
                raise self._error(f"Unsupported constant type {type_name}")
            self._expect(";")
        if rows is None:
            raise self._error("No data array in getContents()")

        # constant aliases (`final String[] A = B;`) stay SharedRefs; their
        # targets count as used
        used = {v.name for _, v in rows if isinstance(v, SharedRef)}
        pending = list(used)
        while pending:
            value = constants[pending.pop()]
            if isinstance(value, SharedRef) and value.name not in used:
                used.add(value.name)
                pending.append(value.name)
        unused = sorted(set(constants) - used)
        if unused:
            log.debug("%s: dropping unused constants %s", self.filename, ", ".join(unused))
        shared = {n: v for n, v in constants.items() if n in used}
        return NameTable.build(kind, self.locale, rows, shared=shared)


def parse_bundle_source(text: str, filename: str = "<string>") -> NameTable:
    return BundleSourceParser(text, filename).parse()


def parse_bundle_file(path: Path) -> NameTable:
    return parse_bundle_source(path.read_text(encoding="utf-8"), path.name)


def discover_sources(root: Path) -> List[Path]:
    """Every name-table source below ``root``, sorted by file name."""
    if root.is_file():
        return [root] if SOURCE_NAME_RE.match(root.name) else []
    return sorted((p for p in root.rglob("*.java") if SOURCE_NAME_RE.match(p.name)), key=lambda p: p.name)


def iter_tables(paths: Iterable[Path]) -> Iterable[Tuple[Path, NameTable]]:
    for path in paths:
        yield path, parse_bundle_file(path)

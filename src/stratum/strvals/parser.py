"""
Parser for inline ``key=value`` assignments.

Assignments address a path in a values tree with dots and list indexes and
write the value there, creating intermediate mappings and lists as needed:

    name=value                    {"name": "value"}
    outer.inner=value             {"outer": {"inner": "value"}}
    list[1]=b                     {"list": [None, "b"]}
    list[0].name=a                {"list": [{"name": "a"}]}
    a=1,b=2                       {"a": 1, "b": 2}
    list={a,b}                    {"list": ["a", "b"]}
    dotted\\.key=value            {"dotted.key": "value"}

A backslash escapes the next character in keys and values. Anything found
along the path that is not a mapping (or list, for an index) is replaced.

Modes:
    typed    booleans, null and integers are converted; the rest are strings
    string   every value stays a string
    file     the value is a reference passed to a reader callback
    json     the value is a JSON document
    literal  a single assignment; everything after ``=`` is kept verbatim
"""

from __future__ import annotations

import json as _json
import re as _re
import typing as _typing

import stratum.constants as constants

Reader = _typing.Callable[[str], str]

_INT_PATTERN = _re.compile(r"-?(?:0|[1-9][0-9]*)")


class ParseError(ValueError):
    """An inline assignment is malformed."""


def typed_value(text: str) -> _typing.Any:
    """Convert a raw value to bool, None or int where it reads as one."""
    if text == "true":
        return True
    if text == "false":
        return False
    if text == "null":
        return None
    if _INT_PATTERN.fullmatch(text):
        return int(text)
    return text


class _Parser:
    """Single-use parser over one assignment string."""

    def __init__(
        self,
        text: str,
        mode: str,
        reader: Reader | None = None,
    ) -> None:
        self._text = text
        self._pos = 0
        self._mode = mode
        self._reader = reader

    # -------------------------------------------------------------------------
    # Scanning
    # -------------------------------------------------------------------------

    def _eof(self) -> bool:
        return self._pos >= len(self._text)

    def _read_until(self, stops: str) -> tuple[str, str | None]:
        """Read up to one of ``stops``, resolving escapes. Consumes the stop."""
        chars: list[str] = []
        while not self._eof():
            char = self._text[self._pos]
            self._pos += 1
            if char == "\\":
                if self._eof():
                    raise ParseError(f"trailing escape in {self._text!r}")
                chars.append(self._text[self._pos])
                self._pos += 1
            elif char in stops:
                return "".join(chars), char
            else:
                chars.append(char)
        return "".join(chars), None

    def _expect_separator(self) -> None:
        if self._eof():
            return
        char = self._text[self._pos]
        if char != ",":
            raise ParseError(
                f"unexpected {char!r} at position {self._pos} in {self._text!r}, expected ','"
            )
        self._pos += 1

    # -------------------------------------------------------------------------
    # Grammar
    # -------------------------------------------------------------------------

    def parse(self, dest: dict[str, _typing.Any]) -> None:
        while not self._eof():
            self._key(dest)
            if self._mode == "literal":
                break

    def _key(self, data: dict[str, _typing.Any]) -> None:
        key, stop = self._read_until("=[,.")
        if stop is None or stop == ",":
            if not key and stop is None:
                return
            raise ParseError(f"key {key!r} has no value")
        if not key:
            raise ParseError(f"key cannot be empty in {self._text!r}")

        if stop == "=":
            data[key] = self._value()
        elif stop == ".":
            child = data.get(key)
            if not isinstance(child, dict):
                child = {}
                data[key] = child
            self._key(child)
        else:
            items = data.get(key)
            if not isinstance(items, list):
                items = []
                data[key] = items
            self._index(items)

    def _index(self, items: list[_typing.Any]) -> None:
        """Handle ``[N]`` and whatever follows it. The ``[`` is consumed."""
        raw, stop = self._read_until("]")
        if stop is None:
            raise ParseError(f"unterminated list index in {self._text!r}")
        try:
            index = int(raw)
        except ValueError:
            raise ParseError(f"list index {raw!r} is not an integer") from None
        if index < 0:
            raise ParseError(f"negative list index {index} is not allowed")
        if index > constants.MAX_LIST_INDEX:
            raise ParseError(
                f"list index {index} exceeds the maximum of {constants.MAX_LIST_INDEX}"
            )
        if len(items) <= index:
            items.extend([None] * (index + 1 - len(items)))

        char = self._text[self._pos] if not self._eof() else ""
        self._pos += 1
        if char == "=":
            items[index] = self._value()
        elif char == ".":
            child = items[index]
            if not isinstance(child, dict):
                child = {}
                items[index] = child
            self._key(child)
        elif char == "[":
            nested = items[index]
            if not isinstance(nested, list):
                nested = []
                items[index] = nested
            self._index(nested)
        else:
            raise ParseError(f"expected '=', '.' or '[' after list index in {self._text!r}")

    def _value(self) -> _typing.Any:
        """Read the value after ``=`` and the separator that ends it."""
        if self._mode == "literal":
            value = self._text[self._pos :]
            self._pos = len(self._text)
            return value

        if self._mode == "json":
            return self._json_value()

        if self._mode in ("typed", "string") and self._text.startswith("{", self._pos):
            return self._list_value()

        raw, _ = self._read_until(",")
        if self._mode == "file":
            if self._reader is None:
                raise ParseError("no reader configured for file values")
            return self._reader(raw)
        if self._mode == "string":
            return raw
        return typed_value(raw)

    def _list_value(self) -> list[_typing.Any]:
        self._pos += 1  # "{"
        body, stop = self._read_until("}")
        if stop is None:
            raise ParseError(f"unterminated list value in {self._text!r}")
        self._expect_separator()
        if not body:
            return []
        items = body.split(",")
        if self._mode == "string":
            return items
        return [typed_value(item) for item in items]

    def _json_value(self) -> _typing.Any:
        decoder = _json.JSONDecoder()
        try:
            value, end = decoder.raw_decode(self._text, self._pos)
        except _json.JSONDecodeError as e:
            raise ParseError(f"invalid JSON value: {e.msg} at position {e.pos}") from e
        self._pos = end
        self._expect_separator()
        return value


def parse(text: str) -> dict[str, _typing.Any]:
    """Parse typed assignments into a new tree."""
    dest: dict[str, _typing.Any] = {}
    parse_into(text, dest)
    return dest


def parse_into(text: str, dest: dict[str, _typing.Any]) -> None:
    """
    Apply ``--set`` style assignments to ``dest`` in place.

    Args:
        text: One or more comma-separated ``key=value`` assignments.
        dest: Tree to modify.

    Raises:
        ParseError: If the assignments are malformed.
    """
    _Parser(text, "typed").parse(dest)


def parse_into_string(text: str, dest: dict[str, _typing.Any]) -> None:
    """Apply ``--set-string`` assignments; every value stays a string."""
    _Parser(text, "string").parse(dest)


def parse_into_file(text: str, dest: dict[str, _typing.Any], reader: Reader) -> None:
    """
    Apply ``--set-file`` assignments.

    Args:
        text: ``key=reference`` assignments.
        dest: Tree to modify.
        reader: Called once per value with the reference; its return value is
            stored at the key.

    Raises:
        ParseError: If the assignments are malformed.
    """
    _Parser(text, "file", reader).parse(dest)


def parse_literal_into(text: str, dest: dict[str, _typing.Any]) -> None:
    """Apply a single ``--set-literal`` assignment; the value is kept verbatim."""
    _Parser(text, "literal").parse(dest)


def parse_json(text: str, dest: dict[str, _typing.Any]) -> None:
    """Apply ``--set-json`` style ``key=<json>`` assignments."""
    _Parser(text, "json").parse(dest)

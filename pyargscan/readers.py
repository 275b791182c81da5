#!/usr/bin/env python
"""Argument readers.

A reader is any callable taking the raw argument string and returning the
decoded value. Readers signal invalid input by raising
:class:`pyargscan.types.DecodingError`; they never return a placeholder.

Example
-------

    args.get_next_argument(UnitReader({"k": 1000, "M": 1000 * 1000}))
    args.get_next_argument(ListReader(BooleanReader(), delimiter=":"))
"""

import re
from typing import Callable, Generic, Mapping, Optional, TypeVar, Union

from pyargscan.types import DecodingError


T = TypeVar("T")

ReaderType = Callable[[str], T]

INTEGER = re.compile(r"[+-]?[0-9]+")
FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _is_integral(type_) -> bool:
    return isinstance(type_, type) and issubclass(type_, int) and not issubclass(type_, bool)


def _is_real(type_) -> bool:
    return isinstance(type_, type) and issubclass(type_, float)


def as_reader(reader: Union[ReaderType, type, None]) -> ReaderType:
    """Turn `reader` into a reader callable.

    Types are wrapped into a :class:`StreamReader`, ``None`` yields the
    string reader.
    """
    if reader is None:
        return StreamReader(str)
    if isinstance(reader, type):
        return StreamReader(reader)
    if callable(reader):
        return reader
    raise TypeError(f"{reader!r} is neither a type nor a callable reader.")


def decode(reader: ReaderType, text: str):
    """Run `reader` on `text`, reporting any rejection as `DecodingError`."""
    try:
        return reader(text)
    except DecodingError:
        raise
    except (ValueError, TypeError) as e:
        raise DecodingError(text, reader, str(e)) from e


class StreamReader(Generic[T]):
    """Decode the whole string as `type_`.

    Leading or trailing garbage, white space included, is rejected; there are no
    partial parses. Empty text is never a valid value, strings included.
    Numbers are parsed independent of the locale.
    """

    def __init__(self, type_: type = str) -> None:
        self.type_ = type_

    def __call__(self, text: str) -> T:
        tp = self.type_
        if tp is str:
            if text == "":
                raise DecodingError(text, self, "empty argument")
            if any(ch.isspace() for ch in text):
                raise DecodingError(text, self, "white space in argument")
            return text
        if tp is bool:
            if text == "0":
                return False
            if text == "1":
                return True
            raise DecodingError(text, self, "expected '0' or '1'")
        if _is_integral(tp):
            if INTEGER.fullmatch(text) is None:
                raise DecodingError(text, self, "not an integer")
            return tp(int(text))
        if _is_real(tp):
            if FLOAT.fullmatch(text) is None:
                raise DecodingError(text, self, "not a floating point number")
            return tp(text)
        if text == "":
            raise DecodingError(text, self, "empty argument")
        try:
            return tp(text)
        except (ValueError, TypeError, ArithmeticError) as e:
            raise DecodingError(text, self, str(e)) from e

    def __repr__(self):
        return f"StreamReader({getattr(self.type_, '__name__', self.type_)})"


class UnitReader(Generic[T]):
    """Decode a number followed by a unit suffix, e.g. ``50k`` or ``-1Mi``.

    The number is multiplied by the factor registered for the suffix. A plain
    ``0`` is always accepted; any other number without a known suffix is not.
    """

    def __init__(self, units: Mapping[str, Union[int, float]], type_: type = int) -> None:
        if not (_is_integral(type_) or _is_real(type_)):
            raise TypeError(f"UnitReader requires a numeric type, got {type_!r}.")
        self.units = dict(units)
        self.type_ = type_
        self._number = StreamReader(type_)

    def __call__(self, text: str) -> T:
        pattern = INTEGER if _is_integral(self.type_) else FLOAT
        match = pattern.match(text)
        if match is None:
            raise DecodingError(text, self, "missing leading number")
        value = self._number(match.group())
        suffix = text[match.end() :]
        factor = self.units.get(suffix)
        if factor is not None:
            return self.type_(value * factor)
        if suffix == "" and value == 0:
            return self.type_(0)
        raise DecodingError(text, self, f"unknown unit {suffix!r}")

    def __repr__(self):
        return f"UnitReader({sorted(self.units)!r}, {self.type_.__name__})"


class BooleanReader:
    """Decode ``0``/``1``, ``true``/``false`` and ``on``/``off`` (case-insensitive)."""

    TRUE_WORDS = frozenset(("1", "true", "on"))
    FALSE_WORDS = frozenset(("0", "false", "off"))

    def __call__(self, text: str) -> bool:
        word = text.lower()
        if word in self.TRUE_WORDS:
            return True
        if word in self.FALSE_WORDS:
            return False
        raise DecodingError(text, self, "not a boolean word")

    def __repr__(self):
        return "BooleanReader()"


class ListReader(Generic[T]):
    """Split on `delimiter` and decode every element with `reader`.

    The result is a fresh `container`; elements are inserted with ``add()`` if
    the container has one (sets), otherwise with ``append()``. An empty string
    yields an empty container. If one element fails, the whole list fails.
    """

    def __init__(self, reader: Union[ReaderType, type, None] = None, delimiter: str = ",", container=list) -> None:
        if not delimiter:
            raise ValueError("Delimiter must not be empty.")
        self.reader = as_reader(reader)
        self.delimiter = delimiter
        self.container = container

    def __call__(self, text: str):
        result = self.container()
        insert = getattr(result, "add", None) or getattr(result, "append", None)
        if insert is None:
            raise TypeError(f"Container {self.container!r} supports neither add() nor append().")
        if text == "":
            return result
        for idx, item in enumerate(text.split(self.delimiter)):
            try:
                value = decode(self.reader, item)
            except DecodingError as e:
                raise DecodingError(text, self, f"element #{idx} {item!r} rejected") from e
            insert(value)
        return result

    def __repr__(self):
        return f"ListReader({self.reader!r}, delimiter={self.delimiter!r})"


def reader_name(reader: Optional[ReaderType]) -> str:
    if reader is None:
        return "str"
    return getattr(reader, "__name__", None) or repr(reader)

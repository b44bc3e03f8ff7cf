"""Helpers for the string-encoded fields used on the exchange wire format."""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

T = TypeVar("T")

MaybeFloat = Optional[float]
MaybeInt = Optional[int]
MaybeString = Optional[str]


class StringEnum(str, Enum):
    """Enum whose members travel on the wire as their string values."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "StringEnum":
        """Return the member for ``text``; raise ValueError for unknown text."""
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"unknown variant {text}") from None

    @classmethod
    def parse_lenient(cls, text: str) -> Union["StringEnum", str]:
        """Return the member for ``text``, or ``text`` itself when it is unknown."""
        if not isinstance(text, str):
            raise TypeError(f"expected a string, got {type(text).__name__}")
        try:
            return cls(text)
        except ValueError:
            return text


def parse_opt_str(value: Any, convert: Callable[[str], T]) -> Optional[T]:
    """Convert a string field that may be empty or absent.

    Empty strings, nulls, numbers and booleans all give ``None``; any other
    string is handed to ``convert``.
    """
    if value is None or isinstance(value, (bool, int, float)):
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected a string or a number, got {type(value).__name__}")
    if value == "":
        return None
    try:
        return convert(value)
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ValueError(f"invalid value {value!r}: {exc}") from exc


def parse_float(value: Any) -> float:
    """Read a float given either as a number or as a string."""
    if value is None:
        raise ValueError("null is not a valid number")
    if isinstance(value, bool):
        raise TypeError("a boolean is not a valid number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        if value != value.strip() or "_" in value:
            raise ValueError(f"invalid float literal {value!r}")
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"invalid float literal {value!r}") from None
    raise TypeError(f"expected a string or a number, got {type(value).__name__}")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


def dump_str(value: Any) -> str:
    """Render a value as the string the wire format expects."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def dump_str_opt(value: Any) -> Optional[str]:
    """Render a value as a string, keeping ``None`` as ``None``."""
    return None if value is None else dump_str(value)


def drop_none(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``mapping`` without the entries whose value is ``None``."""
    return {key: value for key, value in mapping.items() if value is not None}
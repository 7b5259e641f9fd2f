"""Conversion of procfs number fields into bounded integers."""

from __future__ import annotations

from enum import Enum, IntEnum
from itertools import takewhile
from typing import Tuple, Union

from .types import ParserError

_C_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_INVALID_ARGUMENT = "Corrupted number - Invalid argument"
_OUT_OF_RANGE = "Corrupted number - Out of range"


class Base(IntEnum):
    """Numeric base of a textual number."""

    OCTAL = 8
    DECIMAL = 10
    HEX = 16


class IntKind(Enum):
    """A fixed-width integer type that a parsed value must fit into."""

    INT8 = (8, True)
    UINT8 = (8, False)
    INT16 = (16, True)
    UINT16 = (16, False)
    INT32 = (32, True)
    UINT32 = (32, False)
    INT64 = (64, True)
    UINT64 = (64, False)

    def __init__(self, bits: int, signed: bool) -> None:
        self.bits = bits
        self.signed = signed

    @property
    def min(self) -> int:
        """Smallest value of this kind."""
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        """Largest value of this kind."""
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1


def _scan(value: str, base: int) -> Tuple[bool, int]:
    """Read the leading number of ``value``; return (negative, magnitude).

    Leading whitespace, a sign and, for base 16, a ``0x`` prefix are accepted.
    Anything after the digits is ignored.
    """
    text = value.lstrip(_C_WHITESPACE)
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        text = text[1:]

    if base == 16 and text[:2] in ("0x", "0X") and text[2:3] in _HEX_DIGITS:
        text = text[2:]

    allowed = set(_DIGITS[:base]) | set(_DIGITS[:base].upper())
    digits = "".join(takewhile(allowed.__contains__, text))
    if not digits:
        raise ParserError(_INVALID_ARGUMENT, value)
    return negative, int(digits, base)


def to_number(
    value: str,
    kind: IntKind = IntKind.INT64,
    base: Union[Base, int] = Base.DECIMAL,
) -> int:
    """Parse ``value`` as an integer of the given kind.

    Signed kinds are read as a 64-bit signed number, unsigned kinds as a
    64-bit unsigned number (where a leading minus wraps around), and the
    result must then fit the kind.

    Raises ParserError when no number can be read or it is out of range.
    """
    negative, magnitude = _scan(value, int(base))

    if kind.signed:
        result = -magnitude if negative else magnitude
        if not _INT64_MIN <= result <= _INT64_MAX:
            raise ParserError(_OUT_OF_RANGE, value)
    else:
        if magnitude > _UINT64_MAX:
            raise ParserError(_OUT_OF_RANGE, value)
        result = (-magnitude) % (1 << 64) if negative else magnitude

    if not kind.min <= result <= kind.max:
        raise ParserError(_OUT_OF_RANGE, value)
    return result
"""
Feed indices.

A sequential feed numbers its updates 0, 1, 2, ... with no gaps. Callers
hand us that number in one of three shapes:

- `BigEndianIndex`: the 8-byte big-endian identifier stored on the network
- `DecimalIndex`: a decimal string, as typed on a command line or read from JSON
- `IntegerIndex`: a plain int

`normalize_index` is the single place where those shapes collapse to an
integer. Raw `bytes`, `str` and `int` values are lifted into the matching
variant first by `as_index_value`; any other shape is a `TypeError`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, TypeAlias

from cluster_client.types import UINT64_MAX, Bytes8, ClusterArgumentError, is_uint64

_DECIMAL_PATTERN: Final = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class BigEndianIndex:
    """An index given as its 8-byte big-endian identifier."""

    value: Bytes8


@dataclass(frozen=True, slots=True)
class DecimalIndex:
    """An index given as decimal text."""

    value: str


@dataclass(frozen=True, slots=True)
class IntegerIndex:
    """An index given as an int."""

    value: int


IndexValue: TypeAlias = BigEndianIndex | DecimalIndex | IntegerIndex
"""Tagged form of a feed index."""

Index: TypeAlias = IndexValue | bytes | bytearray | str | int
"""Anything accepted where a feed index is expected."""


def as_index_value(index: Index) -> IndexValue:
    """
    Lift a raw index into its tagged form.

    Raises:
        TypeError: If `index` is none of the accepted shapes.
        ClusterArgumentError: If a byte index is not exactly 8 bytes.
    """
    if isinstance(index, (BigEndianIndex, DecimalIndex, IntegerIndex)):
        return index
    if isinstance(index, (bytes, bytearray)):
        return BigEndianIndex(Bytes8(index))
    if isinstance(index, str):
        return DecimalIndex(index)
    # bool is an int subclass but never a meaningful index.
    if isinstance(index, int) and not isinstance(index, bool):
        return IntegerIndex(index)
    raise TypeError(f"Unknown type of index: {type(index).__name__}")


def normalize_index(index: Index) -> int:
    """
    Return the integer position of a feed index.

    Raises:
        TypeError: If `index` is none of the accepted shapes.
        ClusterArgumentError: If the value is malformed or outside the uint64 range.
    """
    match as_index_value(index):
        case BigEndianIndex(value=raw):
            value = int.from_bytes(raw, "big")
        case DecimalIndex(value=text):
            if _DECIMAL_PATTERN.fullmatch(text) is None:
                raise ClusterArgumentError(f"Feed index is not a decimal number: {text!r}", text)
            value = int(text)
        case IntegerIndex(value=value):
            pass

    if not is_uint64(value):
        raise ClusterArgumentError(
            f"Feed index {value} is outside the range [0, {UINT64_MAX}]", index
        )
    return value


def make_index_bytes(index: Index) -> Bytes8:
    """Return the canonical 8-byte big-endian identifier of an index."""
    return Bytes8(normalize_index(index).to_bytes(8, "big"))

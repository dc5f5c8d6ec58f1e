"""
Unsigned varint encoding, as used by multiformats.

A CID is a sequence of varints followed by a digest::

    [version][codec][hash function code][digest length][digest ...]

Each varint stores an integer 7 bits at a time, least significant group
first. The high bit of every byte is a continuation flag:

    [C|D D D D D D D]
     ^-- 1 = more bytes follow, 0 = last byte

So codec 0x1b (keccak-256) fits in one byte, while 0xfa (cluster manifest)
needs two::

    0x1b -> [0x1b]
    0xfa -> [0xfa, 0x01]     (0x7a | 0x80, then 0xfa >> 7)

The multiformats flavour is stricter than protobuf's:

- At most 9 bytes (63 bits of payload).
- Encodings must be minimal: a trailing 0x00 group is rejected, so every
  integer has exactly one byte representation.

References:
    https://github.com/multiformats/unsigned-varint
"""

from __future__ import annotations

from typing import Final

MAX_VARINT_BYTES: Final = 9
"""Longest varint accepted by the multiformats specification."""

MAX_VARINT_VALUE: Final = 2**63 - 1
"""Largest integer representable in `MAX_VARINT_BYTES` bytes."""


class VarintError(ValueError):
    """Raised when varint encoding or decoding fails."""


def encode_varint(value: int) -> bytes:
    """
    Encode a non-negative integer as an unsigned varint.

    Raises:
        VarintError: If value is negative or needs more than 63 bits.
    """
    if value < 0:
        raise VarintError("Varint must be non-negative")
    if value > MAX_VARINT_VALUE:
        raise VarintError(f"Varint value {value} exceeds 63 bits")

    out = bytearray()
    while True:
        low, value = value & 0x7F, value >> 7
        if not value:
            out.append(low)
            return bytes(out)
        out.append(low | 0x80)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode a varint from bytes at the given offset.

    Args:
        data: Input bytes containing the varint.
        offset: Starting position in data.

    Returns:
        Tuple of (decoded_value, bytes_consumed).

    Raises:
        VarintError: If the input is truncated, longer than 9 bytes,
            or not minimally encoded.
    """
    value = 0
    window = data[offset : offset + MAX_VARINT_BYTES]
    for consumed, byte in enumerate(window, start=1):
        value |= (byte & 0x7F) << (7 * (consumed - 1))
        if byte & 0x80:
            continue
        # A multi-byte varint ending in a zero group has a shorter encoding.
        if byte == 0 and consumed > 1:
            raise VarintError("Varint is not minimally encoded")
        return value, consumed

    if len(data) - offset > MAX_VARINT_BYTES:
        raise VarintError("Varint too long")
    raise VarintError("Truncated varint")

"""
Multibase: self-describing text encodings for binary CIDs.

The first character of a multibase string names the alphabet used for the
rest of it. Only the encodings that actually occur for cluster CIDs are
supported:

=======  ==================  =====================================
Prefix   Encoding            Notes
=======  ==================  =====================================
``b``    base32 (lower)      RFC 4648 alphabet, no padding. Default for CIDv1.
``B``    base32 (upper)      Same, upper case.
``z``    base58btc           Bitcoin alphabet.
``f``    base16 (lower)      Plain hex.
``F``    base16 (upper)      Plain hex, upper case.
=======  ==================  =====================================

References:
    https://github.com/multiformats/multibase
"""

from __future__ import annotations

import base64
import binascii
import re
from enum import Enum
from typing import Final

_BASE16_PATTERN: Final = re.compile(r"[0-9a-fA-F]*")


class MultibaseError(ValueError):
    """Raised when multibase text cannot be decoded."""


class Base58:
    """
    Base58 encoding/decoding (Bitcoin alphabet).

    Leading zero bytes map to leading '1' characters and back, so the
    encoding is length preserving for zero prefixes.
    """

    ALPHABET: Final[str] = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
    """Base58 alphabet (excludes 0, O, I, l)."""

    @classmethod
    def encode(cls, data: bytes) -> str:
        """Encode bytes as a Base58 string."""
        leading_zeros = len(data) - len(data.lstrip(b"\x00"))

        num = int.from_bytes(data, "big")
        result: list[str] = []
        while num > 0:
            num, remainder = divmod(num, 58)
            result.append(cls.ALPHABET[remainder])

        result.extend([cls.ALPHABET[0]] * leading_zeros)
        return "".join(reversed(result))

    @classmethod
    def decode(cls, s: str) -> bytes:
        """
        Decode a Base58 string to bytes.

        Raises:
            MultibaseError: If the string contains a character outside the alphabet.
        """
        leading_ones = len(s) - len(s.lstrip(cls.ALPHABET[0]))

        num = 0
        for char in s:
            index = cls.ALPHABET.find(char)
            if index < 0:
                raise MultibaseError(f"Invalid Base58 character: {char!r}")
            num = num * 58 + index

        body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
        return b"\x00" * leading_ones + body


class Multibase(Enum):
    """Supported multibase encodings, keyed by their prefix character."""

    BASE32 = "b"
    BASE32_UPPER = "B"
    BASE58_BTC = "z"
    BASE16 = "f"
    BASE16_UPPER = "F"

    @property
    def prefix(self) -> str:
        """The single character that introduces this encoding."""
        return self.value


def _b32_encode(data: bytes) -> str:
    return base64.b32encode(data).decode("ascii").rstrip("=")


def _b32_decode(text: str) -> bytes:
    if "=" in text:
        raise MultibaseError("base32 multibase text must not be padded")
    try:
        raw = base64.b32decode(text.upper() + "=" * (-len(text) % 8))
    except binascii.Error as exc:
        raise MultibaseError(f"Invalid base32 text: {exc}") from exc
    # Unused trailing bits must be zero.
    if _b32_encode(raw) != text.upper():
        raise MultibaseError("Non-canonical base32 text")
    return raw


def _b16_decode(text: str) -> bytes:
    if len(text) % 2 or _BASE16_PATTERN.fullmatch(text) is None:
        raise MultibaseError(f"Invalid base16 text: {text!r}")
    return bytes.fromhex(text)


def encode(data: bytes, base: Multibase = Multibase.BASE32) -> str:
    """
    Encode bytes as multibase text.

    Args:
        data: Bytes to encode.
        base: Target encoding. Defaults to lowercase base32.

    Returns:
        The prefix character followed by the encoded payload.
    """
    match base:
        case Multibase.BASE32:
            body = _b32_encode(data).lower()
        case Multibase.BASE32_UPPER:
            body = _b32_encode(data)
        case Multibase.BASE58_BTC:
            body = Base58.encode(data)
        case Multibase.BASE16:
            body = data.hex()
        case Multibase.BASE16_UPPER:
            body = data.hex().upper()
    return base.prefix + body


def decode(text: str) -> tuple[Multibase, bytes]:
    """
    Decode multibase text.

    Returns:
        Tuple of (encoding used, decoded bytes).

    Raises:
        MultibaseError: If the prefix is unknown or the payload is malformed.
    """
    if not text:
        raise MultibaseError("Empty multibase text")

    try:
        base = Multibase(text[0])
    except ValueError:
        raise MultibaseError(f"Unsupported multibase prefix {text[0]!r}") from None

    body = text[1:]
    if not body:
        raise MultibaseError("Multibase text has no payload")

    # Case-specific alphabets must not be mixed.
    if base in (Multibase.BASE32, Multibase.BASE16) and body != body.lower():
        raise MultibaseError(f"{base.name} text must be lower case")
    if base in (Multibase.BASE32_UPPER, Multibase.BASE16_UPPER) and body != body.upper():
        raise MultibaseError(f"{base.name} text must be upper case")

    match base:
        case Multibase.BASE32 | Multibase.BASE32_UPPER:
            return base, _b32_decode(body)
        case Multibase.BASE58_BTC:
            return base, Base58.decode(body)
        case Multibase.BASE16 | Multibase.BASE16_UPPER:
            return base, _b16_decode(body)
    raise MultibaseError(f"Unsupported multibase {base.name}")

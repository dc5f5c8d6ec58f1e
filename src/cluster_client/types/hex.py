"""
Conversion and validation between hex text and raw bytes.

Every reference exchanged with callers is lowercase hexadecimal text without
a '0x' prefix:

- 64 characters for a plain reference (a 32-byte keccak-256 digest)
- 128 characters for an encrypted reference (digest followed by a 32-byte key)

Anything else is rejected before it reaches the network or the CID codec.
"""

from __future__ import annotations

import re
from typing import Any, Final

from .exceptions import ClusterArgumentError, HexLengthError

REFERENCE_HEX_LENGTH: Final = 64
"""Hex characters in a plain reference (32 bytes)."""

ENCRYPTED_REFERENCE_HEX_LENGTH: Final = 128
"""Hex characters in an encrypted reference (64 bytes)."""

_HEX_PATTERN: Final = re.compile(r"[0-9a-f]+", re.IGNORECASE)


def bytes_to_hex(data: bytes | bytearray | memoryview, length: int | None = None) -> str:
    """
    Convert bytes to lowercase unprefixed hex.

    Args:
        data: Bytes to render.
        length: Expected number of hex characters. Checked whenever given.

    Returns:
        Two hex characters per input byte.

    Raises:
        HexLengthError: If `length` is given and the result differs.
    """
    result = bytes(data).hex()
    if length is not None and len(result) != length:
        raise HexLengthError(result, expected=length)
    return result


def hex_to_bytes(value: str) -> bytes:
    """
    Parse unprefixed hex text into bytes.

    Accepts upper and lower case digits.

    Raises:
        ClusterArgumentError: If the text is not hex or has an odd length.
    """
    assert_hex_string(value)
    if len(value) % 2:
        raise ClusterArgumentError(f"value has odd hex length {len(value)}: {value}", value)
    return bytes.fromhex(value)


def is_hex_string(value: Any, length: int | None = None) -> bool:
    """Return whether `value` is unprefixed hex text, optionally of an exact length."""
    if not isinstance(value, str) or _HEX_PATTERN.fullmatch(value) is None:
        return False
    return length is None or len(value) == length


def assert_hex_string(value: Any, length: int | None = None, name: str = "value") -> None:
    """
    Verify that `value` is unprefixed hex text.

    Args:
        value: Candidate value.
        length: Required character length, if any.
        name: Name of the value, used in the error message.

    Raises:
        ClusterArgumentError: Carrying the offending value.
    """
    if not is_hex_string(value, length):
        # Only mention a length when the caller asked for one.
        length_msg = f" of length {length}" if length is not None else ""
        raise ClusterArgumentError(f"{name} not valid hex string{length_msg}: {value}", value)


def is_reference(value: Any) -> bool:
    """Return whether `value` is a plain 64-character hex reference."""
    return is_hex_string(value, REFERENCE_HEX_LENGTH)


def assert_reference(value: Any) -> None:
    """
    Verify that `value` is a plain, unencrypted reference.

    Encrypted (128-character) references are valid hex but are not
    supported by the CID codec or the feed verifier.

    Raises:
        ClusterArgumentError: If not hex, or not exactly 64 characters.
    """
    assert_hex_string(value, name="Reference")
    if len(value) != REFERENCE_HEX_LENGTH:
        raise ClusterArgumentError(
            f"Reference does not have expected length {REFERENCE_HEX_LENGTH} characters. "
            "Encrypted references are not supported.",
            value,
        )


def make_hex_string(value: str, length: int | None = None) -> str:
    """
    Normalize user supplied hex text.

    Strips an optional '0x' prefix and lowercases the digits.

    Raises:
        ClusterArgumentError: If the remainder is not hex of the given length.
    """
    if not isinstance(value, str):
        raise ClusterArgumentError(f"Expected hex string, got {type(value).__name__}", value)
    stripped = value[2:] if value[:2] in ("0x", "0X") else value
    assert_hex_string(stripped, length)
    return stripped.lower()

"""
Fixed-length byte types.

Owners, topics, digests and feed index identifiers all have a fixed width.
Each width gets its own `bytes` subclass so that a 20-byte owner can never
be passed where a 32-byte topic is expected without failing loudly.
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable

from typing_extensions import Self

from .exceptions import ClusterArgumentError
from .hex import hex_to_bytes, make_hex_string


def _coerce_to_bytes(value: Any) -> bytes:
    """
    Turn raw buffers, hex text (optionally 0x-prefixed) or byte-valued
    iterables into `bytes`, raising `ClusterArgumentError` otherwise.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        # The empty string is the zero-length value, not malformed hex.
        if value in ("", "0x"):
            return b""
        return hex_to_bytes(make_hex_string(value))
    if isinstance(value, Iterable):
        try:
            return bytes(bytearray(value))
        except (TypeError, ValueError) as exc:
            raise ClusterArgumentError(f"Cannot convert to bytes: {exc}", value) from exc
    raise ClusterArgumentError(f"Cannot convert {type(value).__name__} to bytes", value)


class BaseBytes(bytes):
    """
    Immutable bytes with a width fixed per subclass.

    Equality and hashing are those of `bytes`, so a `Bytes32` compares equal to
    the raw digest it wraps.
    """

    LENGTH: ClassVar[int]
    """Required width in bytes."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Coerce `value` (see `_coerce_to_bytes`) and check its width.

        Raises:
            ClusterArgumentError: If the width is not `LENGTH`.
        """
        raw = _coerce_to_bytes(value)
        if len(raw) != cls.LENGTH:
            raise ClusterArgumentError(
                f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(raw)}", value
            )
        return super().__new__(cls, raw)

    @classmethod
    def zero(cls) -> Self:
        """The all-zero value of this width."""
        return cls(bytes(cls.LENGTH))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()})"


class Bytes8(BaseBytes):
    """Fixed-size byte array of exactly 8 bytes (a big-endian feed index)."""

    LENGTH = 8


class Bytes20(BaseBytes):
    """Fixed-size byte array of exactly 20 bytes (an account address)."""

    LENGTH = 20


class Bytes32(BaseBytes):
    """Fixed-size byte array of exactly 32 bytes (digests and topics)."""

    LENGTH = 32


EthAddress = Bytes20
"""The 20-byte account address identifying a feed owner."""

"""
Content identifiers (CIDs).

A CID is a self-describing pointer to content. Binary layout (version 1)::

    [version varint][codec varint][multihash]

where the multihash is itself::

    [hash function code varint][digest length varint][digest]

The textual form is the binary form in multibase (see `multibase`), by
default lowercase base32 with a leading ``b``.

Version 0 CIDs predate this layout. They are a bare sha2-256 multihash,
always rendered as base58btc without a multibase prefix (``Qm...``), and
implicitly carry the dag-pb codec. They are accepted when parsing so that
foreign identifiers can be inspected, but never produced.

References:
    https://github.com/multiformats/cid
    https://github.com/multiformats/multihash
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from cluster_client.types import CidParseError

from . import multibase
from .multibase import Multibase, MultibaseError
from .varint import VarintError, decode_varint, encode_varint

SHA2_256_CODE: Final = 0x12
"""Multihash function code of sha2-256 (the only hash allowed in CIDv0)."""

DAG_PB_CODEC: Final = 0x70
"""Codec implied by every version 0 CID."""

_CIDV0_PREFIX: Final = "Qm"
_CIDV0_TEXT_LENGTH: Final = 46
_CIDV0_BYTE_LENGTH: Final = 34


@dataclass(frozen=True, slots=True)
class Multihash:
    """
    A digest tagged with the hash function that produced it.

    The digest is stored as given; no hashing happens here.
    """

    code: int
    """Hash function identifier from the multicodec table."""

    digest: bytes
    """Raw digest bytes."""

    def encode(self) -> bytes:
        """Encode as ``[code][length][digest]``."""
        return encode_varint(self.code) + encode_varint(len(self.digest)) + self.digest

    @classmethod
    def decode(cls, data: bytes, offset: int = 0) -> tuple[Multihash, int]:
        """
        Decode a multihash starting at `offset`.

        Returns:
            Tuple of (multihash, bytes consumed).

        Raises:
            VarintError: If a header varint is malformed.
            ValueError: If fewer digest bytes remain than the header announces.
        """
        code, code_len = decode_varint(data, offset)
        size, size_len = decode_varint(data, offset + code_len)
        start = offset + code_len + size_len
        digest = data[start : start + size]
        if len(digest) != size:
            raise ValueError(f"Multihash announces {size} digest bytes, found {len(digest)}")
        return cls(code=code, digest=bytes(digest)), code_len + size_len + size


@dataclass(frozen=True, slots=True)
class Cid:
    """A parsed content identifier."""

    version: int
    """CID version, 0 or 1."""

    codec: int
    """Multicodec describing how to interpret the content."""

    multihash: Multihash
    """Hash of the content."""

    @classmethod
    def create_v1(cls, codec: int, multihash: Multihash) -> Cid:
        """Create a version 1 CID."""
        return cls(version=1, codec=codec, multihash=multihash)

    @property
    def digest(self) -> bytes:
        """The raw digest wrapped by this CID."""
        return self.multihash.digest

    def to_bytes(self) -> bytes:
        """Return the binary form."""
        if self.version == 0:
            return self.multihash.encode()
        return encode_varint(self.version) + encode_varint(self.codec) + self.multihash.encode()

    def encode(self, base: Multibase = Multibase.BASE32) -> str:
        """
        Return the textual form.

        Version 0 CIDs ignore `base` and are always bare base58btc.
        """
        if self.version == 0:
            return multibase.Base58.encode(self.to_bytes())
        return multibase.encode(self.to_bytes(), base)

    def __str__(self) -> str:
        return self.encode()

    def __repr__(self) -> str:
        return f"Cid({self!s})"

    @classmethod
    def from_bytes(cls, data: bytes) -> Cid:
        """
        Parse the binary form.

        Raises:
            CidParseError: If the bytes are not a version 0 or version 1 CID.
        """
        data = bytes(data)

        # A bare sha2-256 multihash is a version 0 CID.
        if len(data) == _CIDV0_BYTE_LENGTH and data[0] == SHA2_256_CODE and data[1] == 0x20:
            return cls(version=0, codec=DAG_PB_CODEC, multihash=Multihash(data[0], data[2:]))

        try:
            version, pos = decode_varint(data)
        except VarintError as exc:
            raise CidParseError(data, str(exc)) from exc
        if version != 1:
            raise CidParseError(data, f"unsupported CID version {version}")

        # Varint and digest length errors are both ValueErrors.
        try:
            codec, consumed = decode_varint(data, pos)
            pos += consumed

            multihash, consumed = Multihash.decode(data, pos)
            pos += consumed
        except ValueError as exc:
            raise CidParseError(data, str(exc)) from exc

        if pos != len(data):
            raise CidParseError(data, f"{len(data) - pos} trailing bytes after multihash")

        return cls(version=version, codec=codec, multihash=multihash)

    @classmethod
    def parse(cls, text: str) -> Cid:
        """
        Parse the textual form.

        Raises:
            CidParseError: If the text is not a valid CID in a supported encoding.
        """
        if not isinstance(text, str):
            raise CidParseError(text, f"expected str, got {type(text).__name__}")

        try:
            if len(text) == _CIDV0_TEXT_LENGTH and text.startswith(_CIDV0_PREFIX):
                data = multibase.Base58.decode(text)
            else:
                _, data = multibase.decode(text)
        except MultibaseError as exc:
            raise CidParseError(text, str(exc)) from exc

        try:
            return cls.from_bytes(data)
        except CidParseError as exc:
            # Report the text the caller gave us, not the intermediate bytes.
            raise CidParseError(text, exc.detail) from exc

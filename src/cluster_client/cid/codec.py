"""
Encoding cluster references as CIDs and back.

A cluster reference is a 32-byte keccak-256 digest shown as 64 hex
characters. Wrapping it in a CID makes it self-describing: the multihash
records that the digest is keccak-256, and the CID codec records what kind
of content it points to:

============  ==========================  ==========================
Codec         Meaning                     Reference type
============  ==========================  ==========================
``0x1b``      keccak-256 hash function    (multihash code only)
``0xe4``      cluster namespace           none
``0xfa``      cluster manifest            ``ReferenceType.MANIFEST``
``0xfb``      cluster feed                ``ReferenceType.FEED``
============  ==========================  ==========================

Two decode styles are offered:

- `decode_cid` is permissive. It accepts any well-formed CID and reports
  the reference type only when the codec is one of the cluster codecs.
- `decode_strict`, `decode_feed_cid` and `decode_manifest_cid` commit to an
  expected type. The first returns an inspectable outcome, the other two
  raise `CidCodecError` on mismatch.

References:
    https://github.com/multiformats/multicodec/blob/master/table.csv
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Final, cast

from cluster_client.types import (
    CidCodecError,
    ClusterArgumentError,
    assert_reference,
    bytes_to_hex,
    hex_to_bytes,
)

from .cid import Cid, Multihash


class ClusterCodec(IntEnum):
    """Multicodec numbers reserved for the cluster."""

    KECCAK_256 = 0x1B
    """Hash function code used in the multihash of every cluster CID."""

    CLUSTER_NS = 0xE4
    """Generic cluster namespace codec (carries no reference type)."""

    CLUSTER_MANIFEST = 0xFA
    """Codec of a reference to a manifest."""

    CLUSTER_FEED = 0xFB
    """Codec of a reference to a feed."""


class ReferenceType(Enum):
    """The kind of content a reference points to."""

    FEED = "feed"
    MANIFEST = "manifest"


REFERENCE_TYPE_CODECS: Final[dict[ReferenceType, ClusterCodec]] = {
    ReferenceType.FEED: ClusterCodec.CLUSTER_FEED,
    ReferenceType.MANIFEST: ClusterCodec.CLUSTER_MANIFEST,
}
"""Codec to use when encoding a reference of each type."""

CODEC_REFERENCE_TYPES: Final[dict[int, ReferenceType]] = {
    codec: reference_type for reference_type, codec in REFERENCE_TYPE_CODECS.items()
}
"""Reverse lookup from codec number to reference type."""


@dataclass(frozen=True, slots=True)
class DecodeResult:
    """Outcome of a permissive decode."""

    reference: str
    """Hex encoded digest carried by the CID."""

    type: ReferenceType | None = None
    """Reference type, if the CID had one of the cluster codecs."""


@dataclass(frozen=True, slots=True)
class DecodeOutcome:
    """
    Outcome of a strict decode.

    Exactly one of `reference` and `error` is set.
    """

    reference: str | None = None
    """Hex encoded digest, when the codec matched."""

    error: CidCodecError | None = None
    """Why the CID was rejected, when it did not."""

    def __post_init__(self) -> None:
        if (self.reference is None) == (self.error is None):
            raise ValueError("DecodeOutcome needs exactly one of reference and error")

    @property
    def ok(self) -> bool:
        """Whether the CID had the expected codec."""
        return self.error is None

    def unwrap(self) -> str:
        """
        Return the reference, raising the stored error on mismatch.

        Raises:
            CidCodecError: If the decode did not succeed.
        """
        if self.error is not None:
            raise self.error
        return cast(str, self.reference)


def _encode_reference(ref: str, codec: ClusterCodec) -> Cid:
    assert_reference(ref)
    digest = hex_to_bytes(ref)
    return Cid.create_v1(codec, Multihash(code=ClusterCodec.KECCAK_256, digest=digest))


def encode_reference(ref: str, type: ReferenceType) -> Cid:
    """
    Encode a hex reference as a CID carrying the codec for `type`.

    Args:
        ref: 64-character hex reference.
        type: Kind of content the reference points to.

    Raises:
        ClusterArgumentError: If the reference is malformed or the type is unknown.
    """
    codec = REFERENCE_TYPE_CODECS.get(type) if isinstance(type, ReferenceType) else None
    if codec is None:
        raise ClusterArgumentError("Unknown reference type.", type)
    return _encode_reference(ref, codec)


def encode_feed_reference(ref: str) -> Cid:
    """Encode a hex reference as a feed CID."""
    return _encode_reference(ref, ClusterCodec.CLUSTER_FEED)


def encode_manifest_reference(ref: str) -> Cid:
    """Encode a hex reference as a manifest CID."""
    return _encode_reference(ref, ClusterCodec.CLUSTER_MANIFEST)


def decode_cid(cid: Cid | str) -> DecodeResult:
    """
    Decode a CID, or its textual form, into a hex reference.

    Never fails on a codec that is not a cluster codec; `type` is None then.

    Raises:
        CidParseError: If `cid` is text that is not a valid CID.
    """
    if isinstance(cid, str):
        cid = Cid.parse(cid)

    return DecodeResult(
        reference=bytes_to_hex(cid.multihash.digest),
        type=CODEC_REFERENCE_TYPES.get(cid.codec),
    )


def decode_strict(cid: Cid | str, expected: ReferenceType) -> DecodeOutcome:
    """
    Decode a CID that must carry the codec of `expected`.

    Codec mismatches are returned, not raised.

    Raises:
        CidParseError: If `cid` is text that is not a valid CID.
    """
    if isinstance(cid, str):
        cid = Cid.parse(cid)

    result = decode_cid(cid)
    if result.type is expected:
        return DecodeOutcome(reference=result.reference)

    name = expected.value.capitalize()
    return DecodeOutcome(
        error=CidCodecError(
            f"CID did not have Cluster {name} codec!",
            expected=expected,
            actual=result.type,
            codec=cid.codec,
        )
    )


def decode_feed_cid(cid: Cid | str) -> str:
    """
    Decode a feed CID into a hex reference.

    Raises:
        CidCodecError: If the CID does not have the cluster feed codec.
    """
    return decode_strict(cid, ReferenceType.FEED).unwrap()


def decode_manifest_cid(cid: Cid | str) -> str:
    """
    Decode a manifest CID into a hex reference.

    Raises:
        CidCodecError: If the CID does not have the cluster manifest codec.
    """
    return decode_strict(cid, ReferenceType.MANIFEST).unwrap()

"""Self-describing content identifiers for cluster references."""

from .cid import Cid, Multihash
from .codec import (
    ClusterCodec,
    DecodeOutcome,
    DecodeResult,
    ReferenceType,
    decode_cid,
    decode_feed_cid,
    decode_manifest_cid,
    decode_strict,
    encode_feed_reference,
    encode_manifest_reference,
    encode_reference,
)
from .multibase import Multibase

__all__ = [
    "Cid",
    "ClusterCodec",
    "DecodeOutcome",
    "DecodeResult",
    "Multibase",
    "Multihash",
    "ReferenceType",
    "decode_cid",
    "decode_feed_cid",
    "decode_manifest_cid",
    "decode_strict",
    "encode_feed_reference",
    "encode_manifest_reference",
    "encode_reference",
]

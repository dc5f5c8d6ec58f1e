"""
Client library for the cluster's content-addressed reference subsystem.

- `cluster_client.cid`: references as self-describing CIDs
- `cluster_client.feed`: feed update addresses and feed retrievability
- `cluster_client.http`: chunk downloads from a node
- `cluster_client.types`: byte types, hex codec and errors
"""

from .cid import (
    Cid,
    DecodeResult,
    ReferenceType,
    decode_cid,
    decode_feed_cid,
    decode_manifest_cid,
    encode_feed_reference,
    encode_manifest_reference,
    encode_reference,
)
from .config import ClusterClientConfig, RequestOptions
from .feed import (
    are_all_sequential_feeds_update_retrievable,
    derive_feed_update_address,
    make_topic,
)
from .http import ClusterClient
from .types import ChunkNotFoundError, ClusterError

__all__ = [
    "Cid",
    "ChunkNotFoundError",
    "ClusterClient",
    "ClusterClientConfig",
    "ClusterError",
    "DecodeResult",
    "ReferenceType",
    "RequestOptions",
    "are_all_sequential_feeds_update_retrievable",
    "decode_cid",
    "decode_feed_cid",
    "decode_manifest_cid",
    "derive_feed_update_address",
    "encode_feed_reference",
    "encode_manifest_reference",
    "encode_reference",
    "make_topic",
]

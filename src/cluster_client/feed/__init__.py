"""
Sequential feeds.

Address derivation for feed updates and verification that a feed's whole
history is still retrievable from the cluster.
"""

from .address import derive_feed_update_address, derive_feed_update_reference, make_feed_identifier
from .index import (
    BigEndianIndex,
    DecimalIndex,
    Index,
    IndexValue,
    IntegerIndex,
    as_index_value,
    make_index_bytes,
    normalize_index,
)
from .retrievable import (
    ChunkProbe,
    DownloadProbe,
    are_all_sequential_feeds_update_retrievable,
    get_all_sequence_update_references,
)
from .topic import make_topic, make_topic_from_hex

__all__ = [
    # Indices
    "BigEndianIndex",
    "DecimalIndex",
    "IntegerIndex",
    "Index",
    "IndexValue",
    "as_index_value",
    "make_index_bytes",
    "normalize_index",
    # Addresses
    "derive_feed_update_address",
    "derive_feed_update_reference",
    "make_feed_identifier",
    "make_topic",
    "make_topic_from_hex",
    # Retrievability
    "ChunkProbe",
    "DownloadProbe",
    "are_all_sequential_feeds_update_retrievable",
    "get_all_sequence_update_references",
]

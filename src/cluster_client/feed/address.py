"""
Chunk addresses of sequential feed updates.

Every update of a feed lives in a single owner chunk whose address is a
pure function of (owner, topic, index). Derivation is a two stage hash::

    identifier = keccak256(topic || index_be8)
    address    = keccak256(owner || identifier)

The identifier binds a topic to a position and can be checked without
knowing the owner. The address additionally needs the owner, so only the
owner's feed resolves to it.
"""

from __future__ import annotations

from typing import Any

from cluster_client.crypto import keccak256_hash
from cluster_client.types import REFERENCE_HEX_LENGTH, Bytes32, EthAddress, bytes_to_hex

from .index import Index, make_index_bytes


def make_feed_identifier(topic: Bytes32 | Any, index: Index) -> Bytes32:
    """
    Compute the identifier of the update at `index` under `topic`.

    Args:
        topic: 32-byte topic (anything `Bytes32` accepts).
        index: Feed index in any accepted shape.
    """
    return keccak256_hash(Bytes32(topic), make_index_bytes(index))


def derive_feed_update_address(
    owner: EthAddress | Any, topic: Bytes32 | Any, index: Index
) -> Bytes32:
    """
    Compute the chunk address of the update at `index`.

    The same (owner, topic, index) always yields the same address, whichever
    shape the index was given in.

    Args:
        owner: 20-byte account address of the feed publisher.
        topic: 32-byte topic.
        index: Feed index in any accepted shape.

    Raises:
        ClusterArgumentError: If owner or topic have the wrong length.
        TypeError: If the index has an unsupported shape.
    """
    return keccak256_hash(EthAddress(owner), make_feed_identifier(topic, index))


def derive_feed_update_reference(
    owner: EthAddress | Any, topic: Bytes32 | Any, index: Index
) -> str:
    """Hex reference of the update chunk at `index`."""
    return bytes_to_hex(derive_feed_update_address(owner, topic, index), REFERENCE_HEX_LENGTH)

"""Feed topics."""

from __future__ import annotations

from cluster_client.crypto import keccak256_hash
from cluster_client.types import Bytes32, make_hex_string


def make_topic(name: str) -> Bytes32:
    """
    Derive a topic from a human readable name.

    The topic is the keccak-256 hash of the UTF-8 encoded name, so the same
    name always selects the same feed for a given owner.
    """
    return keccak256_hash(name.encode("utf-8"))


def make_topic_from_hex(value: str) -> Bytes32:
    """
    Parse a topic given as 64 hex characters, with or without '0x'.

    Raises:
        ClusterArgumentError: If the text is not 32 bytes of hex.
    """
    return Bytes32(make_hex_string(value, 64))

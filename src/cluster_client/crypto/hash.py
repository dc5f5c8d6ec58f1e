"""
Keccak-256, the hash function behind every chunk address on the cluster.

Note this is the original Keccak submission (as used by Ethereum), not the
standardized SHA3-256: the padding differs, so `hashlib.sha3_256` produces
different digests and must never be substituted.
"""

from __future__ import annotations

from Crypto.Hash import keccak

from cluster_client.types import Bytes32


def keccak256_hash(*messages: bytes | bytearray | memoryview | str) -> Bytes32:
    """
    Hash the concatenation of all messages.

    Strings are hashed as their UTF-8 encoding.

    Args:
        *messages: Any number of byte strings or text strings.

    Returns:
        32-byte digest.
    """
    k = keccak.new(digest_bits=256)
    for message in messages:
        k.update(message.encode("utf-8") if isinstance(message, str) else bytes(message))
    return Bytes32(k.digest())

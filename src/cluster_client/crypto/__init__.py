"""Hash primitives used for chunk addressing."""

from .hash import keccak256_hash

__all__ = ["keccak256_hash"]

"""Reusable type definitions for the cluster client."""

from .base import StrictBaseModel
from .byte_arrays import BaseBytes, Bytes8, Bytes20, Bytes32, EthAddress
from .exceptions import (
    ChunkNotFoundError,
    CidCodecError,
    CidError,
    CidParseError,
    ClusterArgumentError,
    ClusterError,
    ClusterRequestError,
    ClusterResponseError,
    HexLengthError,
)
from .hex import (
    ENCRYPTED_REFERENCE_HEX_LENGTH,
    REFERENCE_HEX_LENGTH,
    assert_hex_string,
    assert_reference,
    bytes_to_hex,
    hex_to_bytes,
    is_hex_string,
    is_reference,
    make_hex_string,
)
from .uint import UINT64_MAX, is_uint64

__all__ = [
    # Core types
    "BaseBytes",
    "Bytes8",
    "Bytes20",
    "Bytes32",
    "EthAddress",
    "StrictBaseModel",
    "UINT64_MAX",
    "is_uint64",
    # Hex codec
    "REFERENCE_HEX_LENGTH",
    "ENCRYPTED_REFERENCE_HEX_LENGTH",
    "assert_hex_string",
    "assert_reference",
    "bytes_to_hex",
    "hex_to_bytes",
    "is_hex_string",
    "is_reference",
    "make_hex_string",
    # Exceptions
    "ClusterError",
    "ClusterArgumentError",
    "HexLengthError",
    "CidError",
    "CidParseError",
    "CidCodecError",
    "ClusterRequestError",
    "ClusterResponseError",
    "ChunkNotFoundError",
]

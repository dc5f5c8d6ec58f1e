"""Shared helpers for cluster client tests."""

from .mocks import MockChunkProbe, TransportError, make_chunk_transport

__all__ = ["MockChunkProbe", "TransportError", "make_chunk_transport"]

"""Unsigned 64-bit integer range."""

UINT64_MAX = 2**64 - 1
"""Largest unsigned 64-bit integer."""


def is_uint64(value: int) -> bool:
    """Return whether `value` is a plain int inside the uint64 range."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= UINT64_MAX

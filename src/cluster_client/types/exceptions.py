"""Exception hierarchy for the cluster client."""

from __future__ import annotations

from typing import Any


def _short_repr(value: Any, limit: int = 80) -> str:
    """Render a value for an error message, truncated to `limit` characters."""
    text = repr(value)
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


class ClusterError(Exception):
    """
    Base exception for every error raised by this library.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class ClusterArgumentError(ClusterError, ValueError):
    """
    Raised when a caller supplies a malformed value.

    Covers malformed hex, wrong reference length and unknown reference types.
    Always detected before any network interaction.

    Attributes:
        value: The offending value.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        super().__init__(message)


class HexLengthError(ClusterArgumentError):
    """
    Raised when a hex string does not have the expected character length.

    Attributes:
        expected: The expected number of hex characters.
        actual: The number of hex characters received.
    """

    def __init__(self, value: str, *, expected: int) -> None:
        self.expected = expected
        self.actual = len(value)
        super().__init__(
            f"Resulting HexString does not have expected length {expected}: {value}",
            value,
        )


class CidError(ClusterError):
    """Base class for content identifier errors."""


class CidParseError(CidError, ValueError):
    """
    Raised when a textual or binary CID cannot be decoded.

    Attributes:
        value: The input that failed to parse.
        detail: Description of what went wrong.
    """

    def __init__(self, value: Any, detail: str) -> None:
        self.value = value
        self.detail = detail
        super().__init__(f"Failed to parse CID {_short_repr(value)}: {detail}")


class CidCodecError(CidError):
    """
    Raised when a strict decode finds a codec other than the expected one.

    Attributes:
        expected: The reference type the caller asked for.
        actual: The reference type carried by the CID (None if not a cluster codec).
        codec: The raw codec number found in the CID.
    """

    def __init__(self, message: str, *, expected: Any, actual: Any, codec: int) -> None:
        self.expected = expected
        self.actual = actual
        self.codec = codec
        super().__init__(message)


class ClusterRequestError(ClusterError):
    """
    Raised when a request never produced a response (connection, DNS, timeout).

    Attributes:
        url: The URL being requested.
    """

    def __init__(self, message: str, *, url: str) -> None:
        self.url = url
        super().__init__(message)


class ClusterResponseError(ClusterError):
    """
    Raised when a node answered with an unexpected HTTP status.

    Attributes:
        status: HTTP status code.
        url: The URL that was requested.
        body: Beginning of the response body, for diagnostics.
    """

    def __init__(self, message: str, *, status: int, url: str, body: str = "") -> None:
        self.status = status
        self.url = url
        self.body = body
        super().__init__(message)


class ChunkNotFoundError(ClusterResponseError):
    """
    Raised when the node has no chunk at the requested address.

    This is the not-found signal of the retrievability probe.
    The feed verifier converts it to `False` instead of failing.

    Attributes:
        reference: Hex reference of the missing chunk.
    """

    def __init__(self, reference: str, *, url: str = "", body: str = "") -> None:
        self.reference = reference
        super().__init__(f"Chunk not found: {reference}", status=404, url=url, body=body)

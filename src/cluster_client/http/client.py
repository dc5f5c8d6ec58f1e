"""
HTTP access to a node's chunk endpoint.

Only what feed verification needs lives here: downloading a raw chunk by
reference, and turning that download into a retrievability answer.

Error mapping:

- 2xx: chunk bytes are returned
- 404: `ChunkNotFoundError` (the not-found signal, never retried)
- other statuses: `ClusterResponseError` with status and body excerpt
- no response at all: `ClusterRequestError`
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Final

import httpx
from typing_extensions import Self

from cluster_client.config import ClusterClientConfig, RequestOptions
from cluster_client.feed.retrievable import DownloadProbe
from cluster_client.types import (
    ChunkNotFoundError,
    ClusterRequestError,
    ClusterResponseError,
    assert_reference,
)

logger = logging.getLogger(__name__)

CHUNKS_ENDPOINT: Final = "/chunks"
"""Path prefix of the raw chunk endpoint."""

_BODY_EXCERPT: Final = 200
"""Characters of an error body kept for diagnostics."""


class ClusterClient:
    """
    Async client for a single node.

    Owns one `httpx.AsyncClient` (and its connection pool). Use it as an
    async context manager, or call `aclose` when done.
    """

    def __init__(
        self,
        config: ClusterClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Node URL and default timeout. Defaults come from the environment.
            transport: Optional httpx transport, e.g. `httpx.MockTransport` in tests.
        """
        self.config = config or ClusterClientConfig()
        self._http = httpx.AsyncClient(
            base_url=self.config.url,
            timeout=self.config.timeout,
            transport=transport,
        )
        self._probe = DownloadProbe(self.download_chunk)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._http.aclose()

    async def download_chunk(self, reference: str, options: RequestOptions | None = None) -> bytes:
        """
        Download the raw bytes of a chunk.

        Args:
            reference: 64-character hex reference of the chunk.
            options: Optional per-call timeout.

        Raises:
            ClusterArgumentError: If the reference is malformed.
            ChunkNotFoundError: If the node has no such chunk.
            ClusterResponseError: On any other non-success status.
            ClusterRequestError: If no response was received.
        """
        assert_reference(reference)

        timeout = (
            options.timeout
            if options is not None and options.timeout is not None
            else httpx.USE_CLIENT_DEFAULT
        )
        path = f"{CHUNKS_ENDPOINT}/{reference}"

        try:
            response = await self._http.get(path, timeout=timeout)
        except httpx.RequestError as exc:
            raise ClusterRequestError(
                f"Network error while connecting to {exc.request.url}: {exc}",
                url=str(exc.request.url),
            ) from exc

        url = str(response.request.url)
        if response.status_code == 404:
            logger.debug(f"Chunk {reference} not found")
            raise ChunkNotFoundError(reference, url=url, body=response.text[:_BODY_EXCERPT])
        if response.is_error:
            raise ClusterResponseError(
                f"HTTP error {response.status_code} for {url}: {response.text[:_BODY_EXCERPT]}",
                status=response.status_code,
                url=url,
                body=response.text[:_BODY_EXCERPT],
            )

        logger.debug(f"Downloaded {len(response.content)} bytes of chunk {reference}")
        return response.content

    async def is_retrievable(self, reference: str, options: RequestOptions | None = None) -> bool:
        """
        Check that a chunk can be fetched by actually downloading it.

        Returns:
            False if the node answers 404, True if the download succeeds.

        Raises:
            ClusterResponseError: On any other non-success status.
            ClusterRequestError: If no response was received.
        """
        return await self._probe.is_retrievable(reference, options)

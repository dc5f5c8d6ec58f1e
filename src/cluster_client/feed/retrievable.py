"""
Retrievability of a whole sequential feed.

The node's stewardship check only understands manifest references, not the
single owner chunks that carry feed updates. The only way to know whether a
feed can still be read end to end is therefore to fetch every update chunk
directly:

1. Derive the address of every index in [0, index].
2. Probe all of them concurrently.
3. The feed is retrievable only if every probe says so.

A probe that signals "not found" makes its index `False`. Any other
failure aborts the whole verification: outstanding probes are cancelled
and the first error is raised to the caller, once.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias, runtime_checkable

from cluster_client.config import RequestOptions
from cluster_client.types import ChunkNotFoundError, ClusterResponseError

from .address import derive_feed_update_reference
from .index import Index, normalize_index

logger = logging.getLogger(__name__)


@runtime_checkable
class ChunkProbe(Protocol):
    """
    Anything that can tell whether a chunk is currently retrievable.

    Implementers should:
    - Return False, or raise `ChunkNotFoundError`, when the chunk is missing
    - Raise on any other failure (transport errors, unexpected statuses)
    - Not retry on their own behalf unless that is their documented policy
    """

    async def is_retrievable(self, reference: str, options: RequestOptions | None = None) -> bool:
        """Return whether the chunk at `reference` can be fetched."""
        ...


ProbeFunction: TypeAlias = Callable[[str, RequestOptions | None], Awaitable[bool]]
"""A bare coroutine function usable as a probe."""

ChunkFetcher: TypeAlias = Callable[[str, RequestOptions | None], Awaitable[Any]]
"""A coroutine function that downloads a chunk, raising when it cannot."""


@dataclass(frozen=True, slots=True)
class DownloadProbe:
    """
    Probe that decides retrievability by downloading the chunk.

    A download that succeeds means retrievable. A 404 means not retrievable.
    Everything else propagates.
    """

    fetch: ChunkFetcher
    """Download function, e.g. `ClusterClient.download_chunk`."""

    async def is_retrievable(self, reference: str, options: RequestOptions | None = None) -> bool:
        """Download the chunk and report whether it exists."""
        try:
            await self.fetch(reference, options)
        except ClusterResponseError as exc:
            if exc.status == 404:
                return False
            raise
        return True


def get_all_sequence_update_references(owner: Any, topic: Any, index: Index) -> list[str]:
    """
    List the references of every update from 0 up to and including `index`.

    Args:
        owner: 20-byte account address of the feed publisher.
        topic: 32-byte topic.
        index: Last index to include, in any accepted shape.
    """
    last = normalize_index(index)
    return [derive_feed_update_reference(owner, topic, i) for i in range(last + 1)]


def _as_probe_function(probe: ChunkProbe | ProbeFunction) -> ProbeFunction:
    if isinstance(probe, ChunkProbe):
        return probe.is_retrievable
    if callable(probe):
        return probe
    raise TypeError(f"Expected a ChunkProbe or coroutine function, got {type(probe).__name__}")


async def _probe_update(
    probe: ProbeFunction,
    position: int,
    reference: str,
    options: RequestOptions,
    limiter: asyncio.Semaphore | None,
) -> bool:
    """Probe one update, turning the not-found signal into False."""
    try:
        if limiter is None:
            retrievable = await probe(reference, options)
        else:
            async with limiter:
                retrievable = await probe(reference, options)
    except ChunkNotFoundError:
        retrievable = False

    if retrievable:
        logger.debug(f"Feed update {position} is retrievable: {reference}")
    else:
        logger.warning(f"Feed update {position} is not retrievable: {reference}")
    return bool(retrievable)


async def are_all_sequential_feeds_update_retrievable(
    probe: ChunkProbe | ProbeFunction,
    owner: Any,
    topic: Any,
    index: Index,
    options: RequestOptions | None = None,
) -> bool:
    """
    Check that every update of a sequential feed up to `index` is retrievable.

    Args:
        probe: Chunk probe, or a coroutine function `(reference, options) -> bool`.
        owner: 20-byte account address of the feed publisher.
        topic: 32-byte topic.
        index: Index of the latest update, in any accepted shape.
        options: Timeout for the whole check and an optional concurrency cap.
            Passed unchanged to every probe.

    Returns:
        True only if all updates in [0, index] are retrievable.

    Raises:
        TimeoutError: If `options.timeout` elapses first. No partial result is returned.
        Exception: The first probe failure that was not a not-found signal.
    """
    options = options or RequestOptions()
    probe_fn = _as_probe_function(probe)
    references = get_all_sequence_update_references(owner, topic, index)

    limiter = (
        asyncio.Semaphore(options.max_concurrency) if options.max_concurrency is not None else None
    )

    logger.info(
        f"Verifying {len(references)} feed updates "
        f"(max_concurrency={options.max_concurrency}, timeout={options.timeout})"
    )

    async with asyncio.timeout(options.timeout):
        try:
            # A failing task cancels its siblings before the group exits.
            async with asyncio.TaskGroup() as tg:
                tasks = [
                    tg.create_task(_probe_update(probe_fn, i, ref, options, limiter))
                    for i, ref in enumerate(references)
                ]
        except ExceptionGroup as group:
            first, *rest = group.exceptions
            if rest:
                logger.debug(f"Suppressed {len(rest)} further probe failures")
            logger.error(f"Feed verification aborted: {first!r}")
            raise first from None

    results = [task.result() for task in tasks]
    missing = results.count(False)
    logger.info(f"Feed verification done: {len(results) - missing}/{len(results)} retrievable")
    return missing == 0

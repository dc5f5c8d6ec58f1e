"""Validation of node API URLs."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

from cluster_client.types import ClusterArgumentError


def is_valid_cluster_url(url: Any) -> bool:
    """Return whether `url` is an absolute http or https URL."""
    if not isinstance(url, str):
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def assert_cluster_url(url: Any) -> None:
    """
    Verify that `url` can be used to reach a node.

    Raises:
        ClusterArgumentError: If the URL is not http or https.
    """
    if not is_valid_cluster_url(url):
        raise ClusterArgumentError(f"URL is not valid: {url!r}", url)


def strip_last_slash(url: str) -> str:
    """Remove a single trailing slash."""
    return url[:-1] if url.endswith("/") else url

"""
Configuration for the cluster client.

Environment settings are read once, at import time:

- `CLUSTER_API_URL`: base URL of the node API (default `http://localhost:1633`)
- `CLUSTER_REQUEST_TIMEOUT`: per-request timeout in seconds (default 30)

Per-client and per-call settings are pydantic models so that bad values are
rejected where they are constructed, not deep inside a request.
"""

import os
from typing import Final

from pydantic import Field, field_validator

from cluster_client.types import StrictBaseModel
from cluster_client.url import assert_cluster_url, strip_last_slash

DEFAULT_API_URL: Final = "http://localhost:1633"
"""Where a locally running node serves its API."""

DEFAULT_REQUEST_TIMEOUT: Final = 30.0
"""Seconds to wait for a single HTTP request."""

CLUSTER_API_URL = os.environ.get("CLUSTER_API_URL", DEFAULT_API_URL)
"""Node API URL from the environment."""

try:
    CLUSTER_REQUEST_TIMEOUT = float(
        os.environ.get("CLUSTER_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT))
    )
except ValueError:
    raise ValueError(
        "Invalid CLUSTER_REQUEST_TIMEOUT environment variable: "
        f"'{os.environ['CLUSTER_REQUEST_TIMEOUT']}'. Expected a number of seconds."
    ) from None

if CLUSTER_REQUEST_TIMEOUT <= 0:
    raise ValueError(
        f"Invalid CLUSTER_REQUEST_TIMEOUT environment variable: '{CLUSTER_REQUEST_TIMEOUT}'. "
        "Must be positive."
    )


class ClusterClientConfig(StrictBaseModel):
    """Connection settings for a `ClusterClient`."""

    url: str = CLUSTER_API_URL
    """Base URL of the node API, without trailing slash."""

    timeout: float = Field(default=CLUSTER_REQUEST_TIMEOUT, gt=0)
    """Default per-request timeout in seconds."""

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        assert_cluster_url(value)
        return strip_last_slash(value)


class RequestOptions(StrictBaseModel):
    """Per-call options threaded through requests and feed verification."""

    timeout: float | None = Field(default=None, gt=0)
    """
    Deadline in seconds.

    For a single request it replaces the client default. For feed
    verification it bounds the whole operation, and every probe receives
    the same options.
    """

    max_concurrency: int | None = Field(default=None, ge=1)
    """Cap on in-flight probes during feed verification. None means unbounded."""

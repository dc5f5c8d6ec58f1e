"""HTTP access to cluster nodes."""

from .client import ClusterClient

__all__ = ["ClusterClient"]

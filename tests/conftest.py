"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

# Keep the suite independent of the developer's node configuration.
os.environ.pop("CLUSTER_API_URL", None)
os.environ.pop("CLUSTER_REQUEST_TIMEOUT", None)

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")

"""Mock providers for testing."""

from .bluesky import MockBlueskyProvider
from .container import build_test_container

__all__ = [
    "MockBlueskyProvider",
    "build_test_container",
]

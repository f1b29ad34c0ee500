"""Infrastructure providers."""

# Import bases
from .bluesky import BlueskyProvider

# Import implementations (needed for __subclasses__())
from .bluesky import ProdBlueskyProvider  # noqa: F401

__all__ = [
    "BlueskyProvider",
    "ProdBlueskyProvider",
]

"""Repository interfaces for thread processing.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the adapter layer.
"""

from skythread.domain.repository.thread import ThreadRepository

__all__ = [
    "ThreadRepository",
]

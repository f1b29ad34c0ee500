"""Thread repository interface."""

from abc import ABC, abstractmethod

from skythread.domain.model import ThreadDocument
from skythread.domain.value import AtUri


class ThreadRepository(ABC):
    """Repository for thread documents.

    Defines the contract for retrieving a post thread. Implementations live
    in the adapter layer. Nothing is stored; every call is a fresh fetch.
    """

    @abstractmethod
    async def get_post_thread(self, uri: AtUri) -> ThreadDocument:
        """Fetch the thread rooted at a post.

        Args:
            uri: AT URI of the root post

        Returns:
            Parsed thread document (shape not yet validated)

        Raises:
            ProviderError: If the retrieval fails
        """
        pass

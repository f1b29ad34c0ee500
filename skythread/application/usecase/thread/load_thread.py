"""Load thread use case."""

import logfire
from pydantic import BaseModel, ValidationError

from skythread.application.usecase.base import BaseUseCase
from skythread.domain.error import InvalidReferenceError, ThreadStructureError
from skythread.domain.model import FlatComment, PostView, ThreadPostNode, ThreadStats
from skythread.domain.repository import ThreadRepository
from skythread.domain.service import PresentationService, ThreadService
from skythread.domain.value import AtUri


class LoadThreadRequest(BaseModel):
    """Load thread request."""

    uri: str | None


class LoadThreadResponse(BaseModel):
    """Loaded thread: the parent post and its flattened replies."""

    uri: str
    root: PostView
    comments: list[FlatComment]
    stats: ThreadStats

    @property
    def post_count(self) -> int:
        """Flattened entries that are posts, placeholders excluded."""
        return sum(1 for comment in self.comments if comment.is_post)


class LoadThreadUseCase(BaseUseCase):
    """Use case for fetching and flattening a thread."""

    def __init__(
        self,
        thread_repository: ThreadRepository,
        thread_service: ThreadService,
        presentation_service: PresentationService,
    ) -> None:
        """Initialize load thread use case.

        Args:
            thread_repository: Thread document source
            thread_service: Flattens the reply tree
            presentation_service: Builds parent-post statistics
        """
        self.thread_repository = thread_repository
        self.thread_service = thread_service
        self.presentation_service = presentation_service

    async def execute(self, request: LoadThreadRequest) -> LoadThreadResponse:
        """Execute load thread flow.

        The reference is validated before any I/O. The document must have a
        thread whose root is a post with payload.

        Args:
            request: Load request with the root post's AT URI

        Returns:
            Root post, flattened comments and parent-post stats

        Raises:
            InvalidReferenceError: If the URI is missing or not an AT URI
            ThreadStructureError: If the document has no root post
            ProviderError: If the retrieval fails
        """
        try:
            uri = AtUri(request.uri)
        except ValidationError as e:
            logfire.warn("Rejected thread reference", uri=request.uri)
            raise InvalidReferenceError(request.uri) from e

        with logfire.span("load_thread", uri=uri.root):
            document = await self.thread_repository.get_post_thread(uri)

            root = document.thread
            if not isinstance(root, ThreadPostNode) or root.post is None:
                logfire.error(
                    "Thread document has no root post",
                    uri=uri.root,
                    root_type=type(root).__name__,
                )
                raise ThreadStructureError(
                    "Invalid API response structure (missing thread or post)"
                )

            comments = self.thread_service.flatten(root)
            stats = self.presentation_service.build_stats(root.post)

            logfire.info(
                "Thread loaded",
                uri=uri.root,
                comment_count=len(comments),
            )

            return LoadThreadResponse(
                uri=uri.root,
                root=root.post,
                comments=comments,
                stats=stats,
            )

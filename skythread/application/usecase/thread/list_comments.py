"""List comments use case."""

from pydantic import BaseModel, Field

from skythread.application.usecase.base import BaseUseCase
from skythread.application.usecase.thread.load_thread import (
    LoadThreadRequest,
    LoadThreadUseCase,
)
from skythread.config import DisplaySettings
from skythread.domain.model import CommentView, DisplayState, ThreadStats
from skythread.domain.service import DisplayService, PresentationService
from skythread.domain.value import SortMode


class ListCommentsRequest(BaseModel):
    """List comments request.

    ``sort`` falls back to the configured default and ``revealed`` to the
    initial page size.
    """

    uri: str | None
    search: str = ""
    sort: SortMode | None = None
    revealed: int | None = Field(default=None, ge=1)


class ListCommentsResponse(BaseModel):
    """One rendered page of a thread's comments."""

    thread_uri: str
    stats: ThreadStats
    comments: list[CommentView]
    total: int
    has_more: bool
    next_batch_size: int
    revealed_count: int
    sort: SortMode
    search: str
    empty_message: str | None
    join_url: str | None


class ListCommentsUseCase(BaseUseCase):
    """Use case for rendering the visible comments of a thread."""

    def __init__(
        self,
        load_thread_use_case: LoadThreadUseCase,
        display_service: DisplayService,
        presentation_service: PresentationService,
        display_settings: DisplaySettings,
    ) -> None:
        """Initialize list comments use case.

        Args:
            load_thread_use_case: Fetches and flattens the thread
            display_service: Filters, sorts and paginates
            presentation_service: Renders comments
            display_settings: Page sizes and default sort
        """
        self.load_thread_use_case = load_thread_use_case
        self.display_service = display_service
        self.presentation_service = presentation_service
        self.display_settings = display_settings

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Args:
            request: Thread URI and display parameters

        Returns:
            Rendered revealed comments and pagination state
        """
        thread = await self.load_thread_use_case.execute(
            LoadThreadRequest(uri=request.uri)
        )

        state = DisplayState.initial(
            initial_page_size=self.display_settings.initial_page_size,
            page_increment=self.display_settings.page_increment,
            sort_mode=request.sort or SortMode(self.display_settings.default_sort),
        ).with_search(request.search)
        if request.revealed is not None:
            state = state.model_copy(update={"revealed_count": request.revealed})

        result = self.display_service.compute(thread.comments, state)
        comments = [
            self.presentation_service.render_comment(comment)
            for comment in result.revealed
        ]

        empty_message = None
        if not comments:
            empty_message = self.presentation_service.empty_message(
                state.search_term, thread.post_count, result.total
            )

        return ListCommentsResponse(
            thread_uri=thread.uri,
            stats=thread.stats,
            comments=comments,
            total=result.total,
            has_more=result.has_more,
            next_batch_size=result.next_batch_size,
            revealed_count=len(result.revealed),
            sort=state.sort_mode,
            search=state.search_term,
            empty_message=empty_message,
            join_url=thread.stats.join_url,
        )

"""Interactive thread viewer.

A ThreadViewer holds one comment-list session: the loaded thread, the current
DisplayState and the outcome of the last load. Every call to ``load`` starts
a new generation; a fetch that completes after a newer load started is
dropped, so an older response can never overwrite a newer one.
"""

from dataclasses import dataclass, field

import logfire

from skythread.adapter.error import ProviderError
from skythread.application.usecase.thread import (
    LoadThreadRequest,
    LoadThreadResponse,
    LoadThreadUseCase,
)
from skythread.config import DisplaySettings
from skythread.domain.error import InvalidReferenceError, ThreadStructureError
from skythread.domain.model import CommentView, DisplayState, ThreadStats
from skythread.domain.service import DisplayResult, DisplayService, PresentationService
from skythread.domain.value import SortMode

INVALID_REFERENCE_MESSAGE = "Invalid post reference provided. Cannot load comments."


@dataclass(frozen=True)
class ViewerSnapshot:
    """What the viewer currently shows."""

    loading: bool
    error: str | None = None
    stats: ThreadStats | None = None
    comments: list[CommentView] = field(default_factory=list)
    total: int = 0
    has_more: bool = False
    next_batch_size: int = 0
    empty_message: str | None = None
    sort_mode: SortMode = SortMode.OLDEST
    search_term: str = ""


class ThreadViewer:
    """Single-session comment viewer.

    Search, sort and reveal are synchronous and recompute the display list
    from the flattened thread. Only ``load`` awaits.
    """

    def __init__(
        self,
        load_thread_use_case: LoadThreadUseCase,
        display_service: DisplayService,
        presentation_service: PresentationService,
        display_settings: DisplaySettings,
    ) -> None:
        """Initialize thread viewer.

        Args:
            load_thread_use_case: Fetches and flattens threads
            display_service: Filters, sorts and paginates
            presentation_service: Renders comments and messages
            display_settings: Page sizes and default sort
        """
        self.load_thread_use_case = load_thread_use_case
        self.display_service = display_service
        self.presentation_service = presentation_service
        self.display_settings = display_settings

        self.generation = 0
        self.uri: str | None = None
        self.thread: LoadThreadResponse | None = None
        self.error: str | None = None
        self.loading = False
        self.state = self._initial_state()
        self._result: DisplayResult | None = None

    async def load(self, uri: str | None) -> bool:
        """Load a thread, replacing whatever was shown before.

        Args:
            uri: AT URI of the root post

        Returns:
            True if this load's outcome was applied, False if a newer load
            superseded it
        """
        self.generation += 1
        generation = self.generation

        self.uri = uri
        self.thread = None
        self.error = None
        self._result = None
        self.state = self._initial_state()
        self.loading = True

        try:
            thread = await self.load_thread_use_case.execute(LoadThreadRequest(uri=uri))
        except InvalidReferenceError:
            return self._fail(generation, INVALID_REFERENCE_MESSAGE)
        except (ProviderError, ThreadStructureError) as e:
            return self._fail(generation, f"Failed to load comments: {e}.")

        if generation != self.generation:
            logfire.info(
                "Discarding stale thread load",
                uri=uri,
                generation=generation,
                current_generation=self.generation,
            )
            return False

        self.thread = thread
        self.loading = False
        self._recompute()
        return True

    async def reload(self) -> bool:
        """Load the current thread again from scratch."""
        return await self.load(self.uri)

    def search(self, term: str) -> None:
        """Apply a settled search term."""
        self.state = self.state.with_search(term)
        self._recompute()

    def sort(self, sort_mode: SortMode) -> None:
        """Change the sort mode."""
        self.state = self.state.with_sort(sort_mode)
        self._recompute()

    def reveal_more(self) -> None:
        """Reveal the next page of comments."""
        if self._result is None:
            return
        self.state = self.state.reveal_more(self._result.total)
        self._recompute()

    def view(self) -> ViewerSnapshot:
        """Render the current state."""
        if self.thread is None or self._result is None:
            return ViewerSnapshot(
                loading=self.loading,
                error=self.error,
                sort_mode=self.state.sort_mode,
                search_term=self.state.search_term,
            )

        result = self._result
        comments = [
            self.presentation_service.render_comment(comment)
            for comment in result.revealed
        ]
        empty_message = None
        if not comments:
            empty_message = self.presentation_service.empty_message(
                self.state.search_term, self.thread.post_count, result.total
            )

        return ViewerSnapshot(
            loading=False,
            stats=self.thread.stats,
            comments=comments,
            total=result.total,
            has_more=result.has_more,
            next_batch_size=result.next_batch_size,
            empty_message=empty_message,
            sort_mode=self.state.sort_mode,
            search_term=self.state.search_term,
        )

    def _initial_state(self) -> DisplayState:
        return DisplayState.initial(
            initial_page_size=self.display_settings.initial_page_size,
            page_increment=self.display_settings.page_increment,
            sort_mode=SortMode(self.display_settings.default_sort),
        )

    def _recompute(self) -> None:
        if self.thread is None:
            return
        self._result = self.display_service.compute(self.thread.comments, self.state)

    def _fail(self, generation: int, message: str) -> bool:
        if generation != self.generation:
            logfire.info(
                "Discarding stale thread load failure",
                generation=generation,
                current_generation=self.generation,
            )
            return False
        logfire.warn("Thread load failed", uri=self.uri, error=message)
        self.error = message
        self.loading = False
        return True

"""Application layer DI providers."""

from dishka import Scope, provide

from skythread.application.usecase.thread import (
    GetStatsUseCase,
    ListCommentsUseCase,
    LoadThreadUseCase,
)
from skythread.application.viewer import ThreadViewer
from skythread.config import DisplaySettings
from skythread.domain.repository import ThreadRepository
from skythread.domain.service import (
    DisplayService,
    PresentationService,
    ThreadService,
)
from skythread.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_load_thread_use_case(
        self,
        thread_repository: ThreadRepository,
        thread_service: ThreadService,
        presentation_service: PresentationService,
    ) -> LoadThreadUseCase:
        """Provide load thread use case."""
        return LoadThreadUseCase(
            thread_repository=thread_repository,
            thread_service=thread_service,
            presentation_service=presentation_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self,
        load_thread_use_case: LoadThreadUseCase,
        display_service: DisplayService,
        presentation_service: PresentationService,
        display_settings: DisplaySettings,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            load_thread_use_case=load_thread_use_case,
            display_service=display_service,
            presentation_service=presentation_service,
            display_settings=display_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_stats_use_case(
        self, load_thread_use_case: LoadThreadUseCase
    ) -> GetStatsUseCase:
        """Provide get stats use case."""
        return GetStatsUseCase(load_thread_use_case=load_thread_use_case)

    @provide(scope=Scope.REQUEST)
    def get_thread_viewer(
        self,
        load_thread_use_case: LoadThreadUseCase,
        display_service: DisplayService,
        presentation_service: PresentationService,
        display_settings: DisplaySettings,
    ) -> ThreadViewer:
        """Provide an interactive thread viewer session."""
        return ThreadViewer(
            load_thread_use_case=load_thread_use_case,
            display_service=display_service,
            presentation_service=presentation_service,
            display_settings=display_settings,
        )

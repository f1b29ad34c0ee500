"""Domain layer DI providers."""

from dishka import Scope, provide

from skythread.config import BlueskySettings, DisplaySettings
from skythread.domain.service import (
    DisplayService,
    PresentationService,
    RichTextService,
    ThreadService,
)
from skythread.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services hold configuration only, so they are APP-scoped and
    shared across requests.
    """

    scope = Scope.APP

    @provide
    def get_richtext_service(
        self, bluesky_settings: BlueskySettings
    ) -> RichTextService:
        """Provide rich-text segmentation service."""
        return RichTextService(bluesky_settings=bluesky_settings)

    @provide
    def get_thread_service(self, display_settings: DisplaySettings) -> ThreadService:
        """Provide thread flattening service."""
        return ThreadService(
            filter_labeled_comments=display_settings.filter_labeled_comments
        )

    @provide
    def get_display_service(self) -> DisplayService:
        """Provide display pipeline service."""
        return DisplayService()

    @provide
    def get_presentation_service(
        self,
        richtext_service: RichTextService,
        bluesky_settings: BlueskySettings,
        display_settings: DisplaySettings,
    ) -> PresentationService:
        """Provide presentation service."""
        return PresentationService(
            richtext_service=richtext_service,
            bluesky_settings=bluesky_settings,
            indent_size_px=display_settings.indent_size_px,
        )

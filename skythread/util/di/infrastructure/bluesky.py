"""Bluesky infrastructure providers."""

from dishka import Scope, provide

from skythread.adapter.bluesky.thread import RealBlueskyThreadClient
from skythread.config import Settings
from skythread.domain.repository import ThreadRepository
from skythread.util.di.base import ProviderBase


class BlueskyProvider(ProviderBase):
    """Bluesky component base."""

    __mock_component__ = "bluesky"


class ProdBlueskyProvider(BlueskyProvider):
    """Production Bluesky provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_thread_repository(self, settings: Settings) -> ThreadRepository:
        """Provide the public-API thread client.

        Returns:
            Thread repository backed by app.bsky.feed.getPostThread
        """
        return RealBlueskyThreadClient(
            thread_url=settings.bluesky.thread_url,
            timeout=settings.bluesky.request_timeout,
        )

"""Mock Bluesky providers for testing."""

from dishka import Scope, provide

from skythread.adapter.bluesky.thread import MockBlueskyThreadClient
from skythread.domain.repository import ThreadRepository
from skythread.util.di.infrastructure.bluesky import BlueskyProvider


class MockBlueskyProvider(BlueskyProvider):
    """Mock Bluesky provider serving threads from memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_thread_repository(self) -> ThreadRepository:
        """Provide in-memory thread client."""
        return MockBlueskyThreadClient()

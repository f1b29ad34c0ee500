"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from skythread.config import BlueskySettings, DisplaySettings, Settings
from skythread.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_bluesky_settings(self, settings: Settings) -> BlueskySettings:
        """Provide Bluesky API settings."""
        return settings.bluesky

    @provide(scope=Scope.APP)
    def provide_display_settings(self, settings: Settings) -> DisplaySettings:
        """Provide comment display settings."""
        return settings.display

"""Application configuration."""

from pathlib import Path
from typing import Literal
from pydantic import BaseModel, Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BlueskySettings(BaseModel):
    """Bluesky public API and web app configuration."""

    # Public AppView, no authentication required
    api_base_url: str = "https://public.api.bsky.app/xrpc"
    get_post_thread_endpoint: str = "app.bsky.feed.getPostThread"

    # Per-request timeout in seconds for the thread fetch
    request_timeout: float = 10.0

    # Web app URLs used to build links in rendered comments
    profile_url_base: str = "https://bsky.app/profile/"
    hashtag_url_base: str = "https://bsky.app/hashtag/"
    post_url_base: str = "https://bsky.app/profile/"
    default_avatar_url: str = (
        "https://raw.githubusercontent.com/romiojoseph/bluesky/refs/heads/main/"
        "photo-stream/assets/default-avatar.png"
    )

    @computed_field
    @property
    def thread_url(self) -> str:
        """Full URL of the getPostThread endpoint."""
        return f"{self.api_base_url.rstrip('/')}/{self.get_post_thread_endpoint}"


class DisplaySettings(BaseModel):
    """Comment list display configuration."""

    # Number of comments revealed after every search or sort change
    initial_page_size: int = Field(default=20, ge=1)

    # Number of additional comments revealed per "load more"
    page_increment: int = Field(default=30, ge=1)

    # When True, posts carrying labels applied by anyone other than the
    # author are dropped from the flattened thread
    filter_labeled_comments: bool = False

    default_sort: Literal["newest", "oldest", "likes", "reposts", "quotes", "replies"] = (
        "oldest"
    )

    # Horizontal indent per nesting level in rendered output
    indent_size_px: int = 20


class APISettings(BaseModel):
    """API configuration."""

    host: str
    port: int
    protocol: Literal["http", "https"]

    @computed_field
    @property
    def base_url(self) -> str:
        """Construct base URL from host.

        In development: http://localhost:8000
        In production the standard port is implied.
        """
        if self.host == "localhost":
            return f"{self.protocol}://{self.host}:{self.port}"
        else:
            return f"{self.protocol}://{self.host}"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, nested values use the ``__``
    delimiter:

        ENVIRONMENT=production
        HOST=threads.example.com
        BLUESKY__API_BASE_URL=https://public.api.bsky.app/xrpc
        DISPLAY__INITIAL_PAGE_SIZE=10
        DISPLAY__FILTER_LABELED_COMMENTS=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows BLUESKY__API_BASE_URL syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Git commit SHA (loaded from version.txt file or defaults to "unknown")
    git_sha: str = "unknown"

    host: str = "localhost"
    port: int = 8000

    # Nested settings
    bluesky: BlueskySettings = BlueskySettings()
    display: DisplaySettings = DisplaySettings()
    api: APISettings = APISettings(
        host="localhost", port=8000, protocol="http"
    )  # Overwritten in validator
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def initialize_api_settings(self) -> "Settings":
        """Initialize API settings from host and environment."""
        protocol: Literal["http", "https"] = (
            "http" if self.environment in ("test", "development") else "https"
        )

        self.api = APISettings(host=self.host, port=self.port, protocol=protocol)
        self.git_sha = self._load_git_sha()

        return self

    @staticmethod
    def _load_git_sha() -> str:
        """Load git SHA from version file.

        Returns:
            Git SHA if version file exists, otherwise "unknown"
        """
        version_file = Path("/app/version.txt")
        if version_file.exists():
            try:
                return version_file.read_text().strip()
            except OSError:
                return "unknown"
        return "unknown"

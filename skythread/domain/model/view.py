"""Render-ready views of comments and thread statistics.

Every string in these views is already escaped for embedding in markup;
``body_html`` is markup. Views serialize with snake_case keys.
"""

from pydantic import BaseModel, ConfigDict

from skythread.domain.value import NodeType


class ViewModel(BaseModel):
    """Base class for presentation views."""

    model_config = ConfigDict(frozen=True)


class AuthorView(ViewModel):
    """Rendered author header of a comment."""

    display_name: str
    handle: str
    profile_url: str
    avatar_url: str


class EmbedImage(ViewModel):
    thumb_url: str
    fullsize_url: str | None
    alt: str


class ExternalCard(ViewModel):
    uri: str
    title: str
    description: str
    thumb_url: str | None = None


class EmbedSummary(ViewModel):
    """Summary of a post embed.

    ``kind`` is one of images, external, quote, video, attachment. Images and
    external cards carry their content; the other kinds carry a notice and
    optionally a link (to the quoted post).
    """

    kind: str
    images: list[EmbedImage] = []
    external: ExternalCard | None = None
    notice: str | None = None
    link: str | None = None


class Counters(ViewModel):
    """Engagement counters with their display form."""

    likes: int = 0
    reposts: int = 0
    replies: int = 0
    quotes: int = 0
    likes_display: str = "0"
    reposts_display: str = "0"
    replies_display: str = "0"
    quotes_display: str = "0"


class CommentView(ViewModel):
    """One renderable comment.

    Placeholders (blocked, not found) and posts too broken to render carry
    only ``notice`` besides the position fields.
    """

    uri: str | None
    variant: NodeType
    depth: int
    indent_px: int
    notice: str | None = None
    author: AuthorView | None = None
    created_at: str | None = None
    timestamp: str | None = None
    body_html: str = ""
    embed: EmbedSummary | None = None
    counters: Counters | None = None
    permalink: str | None = None


class StatItem(ViewModel):
    """One non-zero parent-post counter, e.g. ``3 Likes``."""

    kind: str
    count: int
    count_display: str
    label: str
    link: str | None
    title: str


class ThreadStats(ViewModel):
    """Parent-post statistics.

    ``message`` is set instead of items when every counter is zero.
    """

    items: list[StatItem]
    message: str | None = None
    join_url: str | None = None

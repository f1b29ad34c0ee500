"""Presentation service: render-ready views of comments and stats."""

from datetime import timezone
from typing import Any

import logfire

from skythread.config import BlueskySettings
from skythread.domain.model import (
    AuthorView,
    CommentView,
    Counters,
    EmbedImage,
    EmbedSummary,
    ExternalCard,
    FlatComment,
    PostView,
    StatItem,
    ThreadStats,
)
from skythread.domain.value import NodeType

from .base import Service
from .display_service import parse_timestamp
from .richtext_service import RichTextService
from .sanitizer import sanitize

_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# (kind, singular, plural, link suffix, link title); an empty suffix links the post
_STAT_FIELDS = [
    ("likes", "Like", "Likes", "/liked-by", "View Likes on Bluesky"),
    ("reposts", "Repost", "Reposts", "/reposted-by", "View Reposts on Bluesky"),
    ("replies", "Reply", "Replies", "", "View Post on Bluesky"),
    ("quotes", "Quote", "Quotes", "/quotes", "View Quotes on Bluesky"),
]

BLOCKED_NOTICE = "Blocked Post"
NOT_FOUND_NOTICE = "Post Not Found"
DISPLAY_ERROR_NOTICE = "Error displaying comment."
RENDER_ERROR_NOTICE = "Error rendering comment details."
NO_INTERACTIONS_MESSAGE = "No interactions yet."

NO_SEARCH_MATCH_MESSAGE = "No comments match your search."
FILTERED_OUT_MESSAGE = "No comments available based on current filters."
NO_COMMENTS_MESSAGE = "No comments yet. Be the first to reply on Bluesky!"
NOTHING_TO_DISPLAY_MESSAGE = "No comments to display."


def format_timestamp(raw: str | None) -> str:
    """Format an ISO timestamp as ``DD Mon YYYY hh:mm AM`` in UTC."""
    if not raw:
        return "Unknown date"
    parsed = parse_timestamp(raw)
    if parsed is None:
        return "Invalid Date"
    parsed = parsed.astimezone(timezone.utc)
    hour = parsed.hour % 12 or 12
    meridiem = "PM" if parsed.hour >= 12 else "AM"
    return (
        f"{parsed.day:02d} {_MONTHS[parsed.month - 1]} {parsed.year} "
        f"{hour:02d}:{parsed.minute:02d} {meridiem}"
    )


def format_number(value: Any) -> str:
    """Thousands-separated integer; anything else renders as 0."""
    if isinstance(value, bool) or not isinstance(value, int):
        return "0"
    return f"{value:,}"


def rkey_from_uri(uri: str | None) -> str | None:
    """Last path segment of an AT URI."""
    if not uri:
        return None
    return uri.rstrip("/").split("/")[-1] or None


class PresentationService(Service):
    """Domain service building CommentView and ThreadStats views."""

    def __init__(
        self,
        richtext_service: RichTextService,
        bluesky_settings: BlueskySettings,
        indent_size_px: int = 20,
    ) -> None:
        """Initialize presentation service.

        Args:
            richtext_service: Renders comment bodies
            bluesky_settings: Web app URL bases and default avatar
            indent_size_px: Horizontal indent per nesting level
        """
        self.richtext_service = richtext_service
        self.profile_url_base = bluesky_settings.profile_url_base
        self.post_url_base = bluesky_settings.post_url_base
        self.default_avatar_url = bluesky_settings.default_avatar_url
        self.indent_size_px = indent_size_px

    def post_url(self, did: str | None, uri: str | None) -> str | None:
        """Web URL of a post, None if the DID or record key is missing."""
        rkey = rkey_from_uri(uri)
        if not did or not rkey:
            return None
        return f"{self.post_url_base}{sanitize(did)}/post/{sanitize(rkey)}"

    def render_comment(self, comment: FlatComment) -> CommentView:
        """Build the view of one display item.

        Args:
            comment: Flattened comment (post or placeholder)

        Returns:
            Render-ready comment view; broken posts get an error notice
        """
        position = {
            "uri": comment.uri,
            "variant": comment.variant,
            "depth": comment.depth,
            "indent_px": comment.depth * self.indent_size_px,
        }

        if comment.variant is NodeType.BLOCKED_POST:
            return CommentView(**position, notice=BLOCKED_NOTICE)
        if comment.variant is NodeType.NOT_FOUND_POST:
            return CommentView(**position, notice=NOT_FOUND_NOTICE)

        post = comment.post
        if post is None:
            logfire.warn("Comment has no post data", uri=comment.uri)
            return CommentView(**position, notice=DISPLAY_ERROR_NOTICE)
        if not post.author.did or not post.created_at or not post.uri:
            logfire.warn(
                "Comment is missing essential post fields",
                uri=post.uri,
                has_did=bool(post.author.did),
                has_created_at=bool(post.created_at),
            )
            return CommentView(**position, notice=RENDER_ERROR_NOTICE)

        return CommentView(
            **position,
            author=self._author_view(post),
            created_at=sanitize(post.created_at),
            timestamp=format_timestamp(post.created_at),
            body_html=self.richtext_service.to_html(post.text, post.record.facets),
            embed=self.summarize_embed(post.embed),
            counters=self._counters(post),
            permalink=self.post_url(post.author.did, post.uri),
        )

    def summarize_embed(self, embed: dict[str, Any] | None) -> EmbedSummary | None:
        """Summarize an embed view into images, a link card or a notice.

        Args:
            embed: Raw ``embed`` mapping of a post view

        Returns:
            Embed summary, or None for no embed or an unusable one
        """
        if not embed or not isinstance(embed.get("$type"), str):
            return None
        embed_type = embed["$type"]

        images = embed.get("images")
        if "images" in embed_type and isinstance(images, list) and images:
            return EmbedSummary(kind="images", images=self._images(images))

        external = embed.get("external")
        if "external" in embed_type and isinstance(external, dict):
            uri = external.get("uri")
            if not isinstance(uri, str) or not uri:
                logfire.warn("Skipping external embed without URI")
                return None
            return EmbedSummary(
                kind="external",
                external=ExternalCard(
                    uri=sanitize(uri),
                    title=sanitize(external.get("title") or uri),
                    description=sanitize(external.get("description") or ""),
                    thumb_url=_optional_url(external.get("thumb")),
                ),
            )

        if "record" in embed_type:
            return self._quote_summary(embed, with_media="Media" in embed_type)

        if "video" in embed_type:
            return EmbedSummary(kind="video", notice="Video attachment available")

        return EmbedSummary(kind="attachment", notice="Attachment available")

    def build_stats(self, post: PostView) -> ThreadStats:
        """Summarize the parent post's counters.

        Zero counters are omitted. Links point at the post on the web app and
        are None when its URL cannot be built.

        Args:
            post: Root post of the thread

        Returns:
            Thread statistics with the join-the-conversation URL
        """
        base_url = self.post_url(post.author.did, post.uri)
        if base_url is None:
            logfire.warn("Could not construct post URL for stats links", uri=post.uri)

        counts = {
            "likes": post.like_count,
            "reposts": post.repost_count,
            "replies": post.reply_count,
            "quotes": post.quote_count,
        }

        items = []
        for kind, singular, plural, suffix, title in _STAT_FIELDS:
            count = counts[kind]
            if count == 0:
                continue
            items.append(
                StatItem(
                    kind=kind,
                    count=count,
                    count_display=format_number(count),
                    label=singular if count == 1 else plural,
                    link=f"{base_url}{suffix}" if base_url else None,
                    title=title,
                )
            )

        return ThreadStats(
            items=items,
            message=None if items else NO_INTERACTIONS_MESSAGE,
            join_url=base_url,
        )

    def empty_message(
        self, search_term: str, flat_count: int, ordered_count: int
    ) -> str:
        """Message shown when no comment is revealed.

        Args:
            search_term: Active search term
            flat_count: Posts in the flattened thread, placeholders excluded
            ordered_count: Entries left after filtering
        """
        if search_term:
            return NO_SEARCH_MATCH_MESSAGE
        if flat_count > 0 and ordered_count == 0:
            return FILTERED_OUT_MESSAGE
        if flat_count == 0:
            return NO_COMMENTS_MESSAGE
        return NOTHING_TO_DISPLAY_MESSAGE

    def _author_view(self, post: PostView) -> AuthorView:
        author = post.author
        return AuthorView(
            display_name=sanitize(author.display_name or author.handle or "Unknown User"),
            handle=sanitize(author.handle or "unknown.handle"),
            profile_url=f"{self.profile_url_base}{sanitize(author.did)}",
            avatar_url=sanitize(author.avatar) if author.avatar else self.default_avatar_url,
        )

    def _counters(self, post: PostView) -> Counters:
        return Counters(
            likes=post.like_count,
            reposts=post.repost_count,
            replies=post.reply_count,
            quotes=post.quote_count,
            likes_display=format_number(post.like_count),
            reposts_display=format_number(post.repost_count),
            replies_display=format_number(post.reply_count),
            quotes_display=format_number(post.quote_count),
        )

    def _images(self, images: list[Any]) -> list[EmbedImage]:
        result = []
        for image in images:
            if not isinstance(image, dict):
                continue
            thumb = _optional_url(image.get("thumb"))
            if thumb is None:
                logfire.warn("Skipping image embed without thumb URL")
                continue
            result.append(
                EmbedImage(
                    thumb_url=thumb,
                    fullsize_url=_optional_url(image.get("fullsize")) or thumb,
                    alt=sanitize(image.get("alt") or "Embedded image"),
                )
            )
        return result

    def _quote_summary(self, embed: dict[str, Any], with_media: bool) -> EmbedSummary:
        record = _quoted_record(embed)
        record_type = record.get("$type") if record else None

        if record_type in (NodeType.NOT_FOUND_POST.value, "app.bsky.embed.record#viewNotFound"):
            return EmbedSummary(kind="quote", notice="Quoted post not found")
        if record_type in (NodeType.BLOCKED_POST.value, "app.bsky.embed.record#viewBlocked"):
            return EmbedSummary(kind="quote", notice="Quoted post is blocked")
        if record and _is_quoted_post(record):
            author = record.get("author")
            did = author.get("did") if isinstance(author, dict) else None
            uri = record.get("uri")
            return EmbedSummary(
                kind="quote",
                notice=f"Quoted post{' & Media' if with_media else ''} available",
                link=self.post_url(
                    did if isinstance(did, str) else None,
                    uri if isinstance(uri, str) else None,
                ),
            )

        logfire.warn("Unsupported record type in embed", record_type=record_type)
        return EmbedSummary(kind="quote", notice="Embedded content available")


def _optional_url(value: Any) -> str | None:
    return sanitize(value) if isinstance(value, str) and value else None


def _quoted_record(embed: dict[str, Any]) -> dict[str, Any] | None:
    """The quoted record view of a record or recordWithMedia embed.

    recordWithMedia nests the record view one level deeper.
    """
    record = embed.get("record")
    if not isinstance(record, dict):
        return None
    inner = record.get("record")
    if isinstance(inner, dict):
        return inner
    return record


def _is_quoted_post(record: dict[str, Any]) -> bool:
    if record.get("$type") in ("app.bsky.feed.post", "app.bsky.embed.record#viewRecord"):
        return True
    value = record.get("value")
    return isinstance(value, dict) and value.get("$type") == "app.bsky.feed.post"

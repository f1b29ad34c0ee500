"""Domain value objects for thread processing.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from skythread.domain.value.common import RootValueObject

AT_URI_PREFIX = "at://"


class NodeType(str, Enum):
    """Lexicon type of a node in a getPostThread response."""

    THREAD_POST = "app.bsky.feed.defs#threadViewPost"
    BLOCKED_POST = "app.bsky.feed.defs#blockedPost"
    NOT_FOUND_POST = "app.bsky.feed.defs#notFoundPost"


class FeatureType(str, Enum):
    """Lexicon type of a rich-text facet feature."""

    LINK = "app.bsky.richtext.facet#link"
    MENTION = "app.bsky.richtext.facet#mention"
    TAG = "app.bsky.richtext.facet#tag"


class SpanKind(str, Enum):
    """Kind of a segmented rich-text span."""

    TEXT = "text"
    LINK = "link"
    MENTION = "mention"
    TAG = "tag"


class SortMode(str, Enum):
    """Comment list ordering.

    Engagement modes sort descending by their counter. Chronological modes
    keep each reply chain next to its top-level comment.
    """

    NEWEST = "newest"
    OLDEST = "oldest"
    LIKES = "likes"
    REPOSTS = "reposts"
    QUOTES = "quotes"
    REPLIES = "replies"

    @property
    def is_chronological(self) -> bool:
        return self in (SortMode.NEWEST, SortMode.OLDEST)


class AtUri(RootValueObject[str]):
    """AT Protocol URI of a record.

    Format: at://<authority>/<collection>/<rkey>
    Example: at://did:plc:abc123/app.bsky.feed.post/3kxyz
    """

    @field_validator("root")
    @classmethod
    def validate_at_uri(cls, v: str) -> str:
        """Validate the URI uses the at:// scheme."""
        if not v.startswith(AT_URI_PREFIX):
            raise ValueError("AT URI must start with 'at://'")
        if len(v) == len(AT_URI_PREFIX):
            raise ValueError("AT URI must name an authority")
        return v

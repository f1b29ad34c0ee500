"""Post view entity.

Mirrors ``app.bsky.feed.defs#postView`` as returned inside a thread. Only the
fields the comment list needs are modeled; the embed is kept as the raw
mapping because it is only summarized, never interpreted further.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator

from skythread.domain.model.common import (
    Count,
    DomainModel,
    OptionalStr,
    Text,
    mapping_items,
    mapping_items_or_empty,
    mapping_or_empty,
    mapping_or_none,
)
from skythread.domain.model.facet import Facet


class Author(DomainModel):
    """Profile summary of a post's author."""

    did: OptionalStr = None
    handle: OptionalStr = None
    display_name: OptionalStr = None
    avatar: OptionalStr = None


class PostRecord(DomainModel):
    """The ``app.bsky.feed.post`` record itself.

    ``created_at`` is kept as the raw string; it is parsed where it is
    compared or displayed so that an unparsable value degrades gracefully.
    """

    text: Text = ""
    created_at: OptionalStr = None
    facets: Annotated[list[Facet], BeforeValidator(mapping_items_or_empty)] = []


class Label(DomainModel):
    """Moderation label applied to a post by ``src``."""

    src: OptionalStr = None
    val: OptionalStr = None


class PostView(DomainModel):
    """A post with its author, record and engagement counters."""

    uri: OptionalStr = None
    cid: OptionalStr = None
    author: Annotated[Author, BeforeValidator(mapping_or_empty)] = Author()
    record: Annotated[PostRecord, BeforeValidator(mapping_or_empty)] = PostRecord()
    like_count: Count = 0
    repost_count: Count = 0
    reply_count: Count = 0
    quote_count: Count = 0
    embed: Annotated[dict[str, Any] | None, BeforeValidator(mapping_or_none)] = None
    labels: Annotated[list[Label], BeforeValidator(mapping_items)] = []

    @property
    def text(self) -> str:
        return self.record.text

    @property
    def created_at(self) -> str | None:
        return self.record.created_at

    def has_external_label(self) -> bool:
        """Whether any label was applied by someone other than the author."""
        return any(label.src != self.author.did for label in self.labels)

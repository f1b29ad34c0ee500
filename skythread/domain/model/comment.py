"""Flattened comment entities.

A FlatComment is one entry of the pre-order walk over a thread. It is
created once per load and never mutated; a new load rebuilds the list.
"""

from pydantic import Field

from skythread.domain.model.common import DomainModel
from skythread.domain.model.post import PostView
from skythread.domain.value import NodeType


class RootGroupKey(DomainModel):
    """Creation time and URI of the depth-1 comment a reply descends from.

    Chronological sorts order by this key first so a reply chain stays
    together however its own timestamps compare with other chains.
    """

    created_at: str | None = None
    uri: str | None = None


class FlatComment(DomainModel):
    """One entry of a flattened thread.

    ``post`` is only set for the THREAD_POST variant. Blocked and not-found
    entries are placeholders.
    """

    variant: NodeType
    uri: str | None = None
    depth: int = Field(ge=1)
    post: PostView | None = None
    root_group: RootGroupKey | None = None

    @property
    def is_post(self) -> bool:
        return self.variant is NodeType.THREAD_POST and self.post is not None

    def matches(self, term: str) -> bool:
        """Case-insensitive search over text, handle and display name."""
        if self.post is None:
            return False
        needle = term.lower()
        author = self.post.author
        return any(
            needle in field.lower()
            for field in (self.post.text, author.handle, author.display_name)
            if field
        )

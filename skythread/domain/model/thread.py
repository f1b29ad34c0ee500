"""Thread tree entities.

A getPostThread response is a tree of nodes. Each node is exactly one of
the variants below, selected by its ``$type``. Nodes whose type is missing or
unrecognized parse as UnknownPostNode so consumers can match every case
explicitly instead of checking for optional fields.
"""

from typing import Annotated, Any, ClassVar, Optional, Union

from pydantic import BeforeValidator, Discriminator, Field, Tag

from skythread.domain.model.common import (
    DomainModel,
    OptionalStr,
    mapping_items,
    mapping_or_none,
)
from skythread.domain.model.post import PostView
from skythread.domain.value import NodeType

Replies = Annotated[list["PostNode"], BeforeValidator(mapping_items)]


class ThreadPostNode(DomainModel):
    """A visible post. ``post`` is None when the payload is missing."""

    node_type: ClassVar[NodeType | None] = NodeType.THREAD_POST

    post: Annotated[PostView | None, BeforeValidator(mapping_or_none)] = None
    replies: Replies = []

    @property
    def uri(self) -> str | None:
        return self.post.uri if self.post else None


class BlockedPostNode(DomainModel):
    """A post hidden by a block relationship."""

    node_type: ClassVar[NodeType | None] = NodeType.BLOCKED_POST

    uri: OptionalStr = None
    replies: Replies = []


class NotFoundPostNode(DomainModel):
    """A post that was deleted or never existed."""

    node_type: ClassVar[NodeType | None] = NodeType.NOT_FOUND_POST

    uri: OptionalStr = None
    replies: Replies = []


class UnknownPostNode(DomainModel):
    """A node of unexpected shape; never displayed, replies still walked."""

    node_type: ClassVar[NodeType | None] = None

    type: OptionalStr = Field(default=None, alias="$type")
    uri: OptionalStr = None
    replies: Replies = []


_NODE_TAGS = {
    NodeType.THREAD_POST.value: "thread_post",
    NodeType.BLOCKED_POST.value: "blocked",
    NodeType.NOT_FOUND_POST.value: "not_found",
}

_NODE_CLASS_TAGS = {
    ThreadPostNode: "thread_post",
    BlockedPostNode: "blocked",
    NotFoundPostNode: "not_found",
}


def _node_tag(value: Any) -> str:
    if isinstance(value, dict):
        node_type = value.get("$type")
        if not isinstance(node_type, str):
            return "unknown"
        return _NODE_TAGS.get(node_type, "unknown")
    return _NODE_CLASS_TAGS.get(type(value), "unknown")


PostNode = Annotated[
    Union[
        Annotated[ThreadPostNode, Tag("thread_post")],
        Annotated[BlockedPostNode, Tag("blocked")],
        Annotated[NotFoundPostNode, Tag("not_found")],
        Annotated[UnknownPostNode, Tag("unknown")],
    ],
    Discriminator(_node_tag),
]


class ThreadDocument(DomainModel):
    """Top-level getPostThread response: ``{"thread": <PostNode>}``."""

    thread: Annotated[Optional[PostNode], BeforeValidator(mapping_or_none)] = None


ThreadPostNode.model_rebuild()
BlockedPostNode.model_rebuild()
NotFoundPostNode.model_rebuild()
UnknownPostNode.model_rebuild()
ThreadDocument.model_rebuild()

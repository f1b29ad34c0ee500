"""Domain model entities for thread processing."""

from skythread.domain.model.comment import FlatComment, RootGroupKey
from skythread.domain.model.display import DisplayState
from skythread.domain.model.facet import (
    Facet,
    FacetIndex,
    LinkFeature,
    MentionFeature,
    TagFeature,
    UnknownFeature,
)
from skythread.domain.model.post import Author, Label, PostRecord, PostView
from skythread.domain.model.richtext import Span
from skythread.domain.model.thread import (
    BlockedPostNode,
    NotFoundPostNode,
    PostNode,
    ThreadDocument,
    ThreadPostNode,
    UnknownPostNode,
)
from skythread.domain.model.view import (
    AuthorView,
    CommentView,
    Counters,
    EmbedImage,
    EmbedSummary,
    ExternalCard,
    StatItem,
    ThreadStats,
)

__all__ = [
    "Author",
    "AuthorView",
    "CommentView",
    "Counters",
    "EmbedImage",
    "EmbedSummary",
    "ExternalCard",
    "StatItem",
    "ThreadStats",
    "BlockedPostNode",
    "DisplayState",
    "Facet",
    "FacetIndex",
    "FlatComment",
    "Label",
    "LinkFeature",
    "MentionFeature",
    "NotFoundPostNode",
    "PostNode",
    "PostRecord",
    "PostView",
    "RootGroupKey",
    "Span",
    "TagFeature",
    "ThreadDocument",
    "ThreadPostNode",
    "UnknownFeature",
    "UnknownPostNode",
]

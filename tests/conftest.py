"""Test configuration and fixtures."""

from typing import Any

import logfire
import pytest

from skythread.config import BlueskySettings
from skythread.domain.model import (
    FlatComment,
    PostNode,
    PostView,
    RootGroupKey,
    ThreadDocument,
)
from skythread.domain.service import RichTextService
from skythread.domain.value import NodeType

# Tests never ship telemetry; console output would drown pytest's
logfire.configure(send_to_logfire=False, console=False)


def post_json(
    uri: str,
    text: str = "",
    created_at: str | None = "2024-01-01T00:00:00.000Z",
    handle: str = "user.bsky.social",
    did: str = "did:plc:user",
    display_name: str | None = None,
    likes: int = 0,
    reposts: int = 0,
    replies: int = 0,
    quotes: int = 0,
    facets: list[dict[str, Any]] | None = None,
    labels: list[dict[str, Any]] | None = None,
    embed: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Raw ``postView`` as the API returns it."""
    record: dict[str, Any] = {"$type": "app.bsky.feed.post", "text": text}
    if created_at is not None:
        record["createdAt"] = created_at
    if facets is not None:
        record["facets"] = facets

    author: dict[str, Any] = {"did": did, "handle": handle}
    if display_name is not None:
        author["displayName"] = display_name

    post: dict[str, Any] = {
        "uri": uri,
        "cid": "bafyreitest",
        "author": author,
        "record": record,
        "likeCount": likes,
        "repostCount": reposts,
        "replyCount": replies,
        "quoteCount": quotes,
    }
    if labels is not None:
        post["labels"] = labels
    if embed is not None:
        post["embed"] = embed
    return post


def thread_node(post: dict[str, Any] | None, *replies: dict[str, Any]) -> dict[str, Any]:
    """Raw ``threadViewPost`` node."""
    node: dict[str, Any] = {
        "$type": NodeType.THREAD_POST.value,
        "replies": list(replies),
    }
    if post is not None:
        node["post"] = post
    return node


def blocked_node(uri: str, *replies: dict[str, Any]) -> dict[str, Any]:
    return {
        "$type": NodeType.BLOCKED_POST.value,
        "uri": uri,
        "blocked": True,
        "replies": list(replies),
    }


def not_found_node(uri: str, *replies: dict[str, Any]) -> dict[str, Any]:
    return {
        "$type": NodeType.NOT_FOUND_POST.value,
        "uri": uri,
        "notFound": True,
        "replies": list(replies),
    }


def facet_json(
    byte_start: Any, byte_end: Any, feature: dict[str, Any] | None
) -> dict[str, Any]:
    return {
        "index": {"byteStart": byte_start, "byteEnd": byte_end},
        "features": [feature] if feature is not None else [],
    }


def parse_node(data: dict[str, Any]) -> PostNode:
    """Parse a raw node the way a thread document would."""
    return ThreadDocument.model_validate({"thread": data}).thread


def make_comment(
    uri: str,
    created_at: str | None = "2024-01-01T00:00:00.000Z",
    group: tuple[str | None, str] | None = None,
    depth: int = 1,
    text: str = "",
    handle: str = "user.bsky.social",
    display_name: str | None = None,
    likes: int = 0,
    reposts: int = 0,
    replies: int = 0,
    quotes: int = 0,
) -> FlatComment:
    """A flattened post entry.

    ``group`` is (root created_at, root uri); it defaults to the comment
    itself, which is what a depth-1 comment gets.
    """
    post = PostView.model_validate(
        post_json(
            uri,
            text=text,
            created_at=created_at,
            handle=handle,
            display_name=display_name,
            likes=likes,
            reposts=reposts,
            replies=replies,
            quotes=quotes,
        )
    )
    group_created_at, group_uri = group if group is not None else (created_at, uri)
    return FlatComment(
        variant=NodeType.THREAD_POST,
        uri=uri,
        depth=depth,
        post=post,
        root_group=RootGroupKey(created_at=group_created_at, uri=group_uri),
    )


@pytest.fixture
def bluesky_settings() -> BlueskySettings:
    return BlueskySettings()


@pytest.fixture
def richtext_service(bluesky_settings) -> RichTextService:
    return RichTextService(bluesky_settings=bluesky_settings)

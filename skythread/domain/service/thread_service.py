"""Thread flattening service."""

import logfire

from skythread.domain.model import (
    BlockedPostNode,
    FlatComment,
    NotFoundPostNode,
    PostNode,
    RootGroupKey,
    ThreadPostNode,
    UnknownPostNode,
)
from skythread.domain.value import NodeType

from .base import Service


class ThreadService(Service):
    """Domain service for turning a reply tree into a flat comment list."""

    def __init__(self, filter_labeled_comments: bool = False) -> None:
        """Initialize thread service.

        Args:
            filter_labeled_comments: Drop posts carrying labels applied by
                anyone other than their author
        """
        self.filter_labeled_comments = filter_labeled_comments

    def flatten(self, root: PostNode) -> list[FlatComment]:
        """Flatten a thread into pre-order comment entries.

        The root (depth 0) is not emitted. Siblings keep the order the API
        returned them in, which already encodes its reply ranking.

        Algorithm:
        1. Walk the root's replies at depth 1 with no group key
        2. A post at depth 1 becomes the group key of itself and its subtree
        3. Emit posts and blocked/not-found placeholders with their depth
        4. Skip posts without payload, unknown nodes and label-filtered posts,
           but keep walking their replies with the inherited key

        Args:
            root: Root node of the thread (the post being commented on)

        Returns:
            Flat comments in pre-order
        """
        with logfire.span(
            "thread_service.flatten",
            filter_labeled_comments=self.filter_labeled_comments,
        ):
            comments: list[FlatComment] = []
            for reply in root.replies:
                self._walk(reply, 1, None, comments)

            logfire.info("Thread flattened", comment_count=len(comments))
            return comments

    def _walk(
        self,
        node: PostNode,
        depth: int,
        group: RootGroupKey | None,
        out: list[FlatComment],
    ) -> None:
        if isinstance(node, (BlockedPostNode, NotFoundPostNode)):
            out.append(
                FlatComment(
                    variant=node.node_type,
                    uri=node.uri,
                    depth=depth,
                    root_group=group,
                )
            )

        elif isinstance(node, ThreadPostNode):
            post = node.post
            if post is None:
                logfire.debug(
                    "Thread node has no post data, walking its replies",
                    depth=depth,
                    reply_count=len(node.replies),
                )
            else:
                if depth == 1:
                    group = RootGroupKey(created_at=post.created_at, uri=post.uri)

                if self.filter_labeled_comments and post.has_external_label():
                    logfire.debug("Skipping labeled post", uri=post.uri)
                else:
                    out.append(
                        FlatComment(
                            variant=NodeType.THREAD_POST,
                            uri=post.uri,
                            depth=depth,
                            post=post,
                            root_group=group,
                        )
                    )

        elif isinstance(node, UnknownPostNode):
            logfire.warn(
                "Skipping thread node of unexpected type",
                node_type=node.type,
                depth=depth,
            )

        for reply in node.replies:
            self._walk(reply, depth + 1, group, out)

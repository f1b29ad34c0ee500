"""Unit tests for ThreadService."""

from skythread.domain.model import RootGroupKey
from skythread.domain.service import ThreadService
from skythread.domain.value import NodeType
from tests.conftest import (
    blocked_node,
    not_found_node,
    parse_node,
    post_json,
    thread_node,
)


def root_with(*replies):
    return parse_node(thread_node(post_json("at://root/p/0", text="root"), *replies))


class TestFlatten:
    """Tests for flatten method."""

    def test_root_is_not_emitted(self):
        service = ThreadService()

        assert service.flatten(root_with()) == []

    def test_pre_order_with_depths(self):
        """Children follow their parent before the parent's next sibling."""
        service = ThreadService()
        root = root_with(
            thread_node(
                post_json("at://a/p/1", created_at="2024-01-01T10:00:00Z"),
                thread_node(
                    post_json("at://b/p/2"),
                    thread_node(post_json("at://c/p/3")),
                ),
            ),
            thread_node(post_json("at://d/p/4", created_at="2024-01-01T11:00:00Z")),
        )

        comments = service.flatten(root)

        assert [c.uri for c in comments] == [
            "at://a/p/1",
            "at://b/p/2",
            "at://c/p/3",
            "at://d/p/4",
        ]
        assert [c.depth for c in comments] == [1, 2, 3, 1]

    def test_siblings_keep_api_order(self):
        service = ThreadService()
        root = root_with(
            thread_node(post_json("at://z/p/1", created_at="2024-03-01T00:00:00Z")),
            thread_node(post_json("at://a/p/2", created_at="2024-01-01T00:00:00Z")),
        )

        comments = service.flatten(root)

        assert [c.uri for c in comments] == ["at://z/p/1", "at://a/p/2"]

    def test_length_counts_posts_and_placeholders(self):
        service = ThreadService()
        root = root_with(
            thread_node(post_json("at://a/p/1"), blocked_node("at://b/p/2")),
            not_found_node("at://c/p/3"),
        )

        comments = service.flatten(root)

        assert len(comments) == 3

    def test_group_key_comes_from_depth_one_ancestor(self):
        service = ThreadService()
        root = root_with(
            thread_node(
                post_json("at://a/p/1", created_at="2024-01-01T10:00:00Z"),
                thread_node(
                    post_json("at://b/p/2", created_at="2024-01-02T00:00:00Z"),
                    thread_node(post_json("at://c/p/3", created_at="2024-01-03T00:00:00Z")),
                ),
            ),
        )

        comments = service.flatten(root)

        expected = RootGroupKey(created_at="2024-01-01T10:00:00Z", uri="at://a/p/1")
        assert all(c.root_group == expected for c in comments)

    def test_placeholders_emitted_without_post(self):
        service = ThreadService()
        root = root_with(
            blocked_node("at://b/p/1", thread_node(post_json("at://c/p/2"))),
            not_found_node("at://n/p/3"),
        )

        comments = service.flatten(root)

        assert [c.variant for c in comments] == [
            NodeType.BLOCKED_POST,
            NodeType.THREAD_POST,
            NodeType.NOT_FOUND_POST,
        ]
        assert comments[0].post is None
        assert comments[0].uri == "at://b/p/1"
        assert comments[2].post is None

    def test_placeholder_at_depth_one_has_no_group_key(self):
        service = ThreadService()
        root = root_with(blocked_node("at://b/p/1", thread_node(post_json("at://c/p/2"))))

        comments = service.flatten(root)

        assert comments[0].root_group is None
        assert comments[1].root_group is None
        assert comments[1].depth == 2

    def test_node_without_post_is_skipped_but_replies_walked(self):
        """A deleted post with surviving replies."""
        service = ThreadService()
        root = root_with(thread_node(None, thread_node(post_json("at://c/p/2"))))

        comments = service.flatten(root)

        assert [c.uri for c in comments] == ["at://c/p/2"]
        assert comments[0].depth == 2
        assert comments[0].root_group is None

    def test_non_mapping_post_treated_as_missing(self):
        service = ThreadService()
        raw = thread_node(None, thread_node(post_json("at://c/p/2")))
        raw["post"] = "garbage"

        comments = service.flatten(root_with(raw))

        assert [c.uri for c in comments] == ["at://c/p/2"]

    def test_unknown_node_is_skipped_but_replies_walked(self):
        service = ThreadService()
        unknown = {
            "$type": "app.bsky.feed.defs#somethingNew",
            "replies": [thread_node(post_json("at://c/p/2"))],
        }

        comments = service.flatten(root_with(unknown))

        assert [c.uri for c in comments] == ["at://c/p/2"]
        assert comments[0].depth == 2

    def test_node_without_type_is_unknown(self):
        service = ThreadService()

        comments = service.flatten(root_with({"post": post_json("at://a/p/1")}))

        assert comments == []

    def test_non_mapping_replies_are_dropped(self):
        service = ThreadService()
        raw = thread_node(post_json("at://a/p/1"))
        raw["replies"] = ["junk", None, thread_node(post_json("at://b/p/2"))]

        comments = service.flatten(root_with(raw))

        assert [c.uri for c in comments] == ["at://a/p/1", "at://b/p/2"]


class TestLabelFiltering:
    """Tests for label filtering."""

    def labeled_thread(self):
        return root_with(
            thread_node(
                post_json(
                    "at://a/p/1",
                    did="did:plc:a",
                    labels=[{"src": "did:plc:moderator", "val": "spam"}],
                ),
                thread_node(post_json("at://b/p/2")),
            ),
            thread_node(
                post_json(
                    "at://s/p/3",
                    did="did:plc:self",
                    labels=[{"src": "did:plc:self", "val": "!no-unauthenticated"}],
                )
            ),
        )

    def test_disabled_by_default(self):
        comments = ThreadService().flatten(self.labeled_thread())

        assert [c.uri for c in comments] == ["at://a/p/1", "at://b/p/2", "at://s/p/3"]

    def test_drops_externally_labeled_posts_keeps_replies(self):
        service = ThreadService(filter_labeled_comments=True)

        comments = service.flatten(self.labeled_thread())

        assert [c.uri for c in comments] == ["at://b/p/2", "at://s/p/3"]
        # The reply still belongs to the filtered post's group
        assert comments[0].root_group.uri == "at://a/p/1"

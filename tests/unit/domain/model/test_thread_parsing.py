"""Unit tests for tolerant thread document parsing."""

from skythread.adapter.bluesky.thread import sample_thread_document
from skythread.domain.model import (
    BlockedPostNode,
    Facet,
    LinkFeature,
    NotFoundPostNode,
    PostView,
    TagFeature,
    ThreadDocument,
    ThreadPostNode,
    UnknownFeature,
    UnknownPostNode,
)
from tests.conftest import blocked_node, not_found_node, parse_node, post_json, thread_node


class TestNodeVariants:
    """Each node parses as exactly one variant."""

    def test_variants_selected_by_type(self):
        root = parse_node(
            thread_node(
                post_json("at://r/p/0"),
                blocked_node("at://b/p/1"),
                not_found_node("at://n/p/2"),
                {"$type": "app.bsky.feed.defs#mystery", "uri": "at://m/p/3"},
                thread_node(post_json("at://t/p/4")),
            )
        )

        assert isinstance(root, ThreadPostNode)
        assert [type(reply) for reply in root.replies] == [
            BlockedPostNode,
            NotFoundPostNode,
            UnknownPostNode,
            ThreadPostNode,
        ]
        assert root.replies[2].type == "app.bsky.feed.defs#mystery"
        assert root.replies[3].uri == "at://t/p/4"

    def test_non_string_type_is_unknown(self):
        root = parse_node(
            thread_node(
                post_json("at://r/p/0"),
                {"$type": ["x"], "replies": [thread_node(post_json("at://t/p/1"))]},
                {"$type": {"a": 1}, "uri": "at://m/p/2"},
            )
        )

        assert [type(reply) for reply in root.replies] == [UnknownPostNode, UnknownPostNode]
        assert root.replies[0].type is None
        assert root.replies[0].replies[0].uri == "at://t/p/1"
        assert root.replies[1].uri == "at://m/p/2"

    def test_sample_document_parses(self):
        document = ThreadDocument.model_validate(sample_thread_document())

        assert isinstance(document.thread, ThreadPostNode)
        assert len(document.thread.replies) == 3

    def test_missing_thread_is_none(self):
        assert ThreadDocument.model_validate({}).thread is None
        assert ThreadDocument.model_validate({"thread": "nope"}).thread is None


class TestPostView:
    """Tests for PostView parsing."""

    def test_camel_case_fields(self):
        post = PostView.model_validate(
            post_json("at://a/p/1", text="hi", display_name="Al", likes=3, quotes=1)
        )

        assert post.text == "hi"
        assert post.author.display_name == "Al"
        assert post.like_count == 3
        assert post.quote_count == 1
        assert post.created_at == "2024-01-01T00:00:00.000Z"

    def test_bad_counters_become_zero(self):
        post = PostView.model_validate(
            {"likeCount": "many", "repostCount": -2, "replyCount": None, "quoteCount": True}
        )

        assert (post.like_count, post.repost_count, post.reply_count, post.quote_count) == (
            0,
            0,
            0,
            0,
        )

    def test_non_mapping_parts_degrade(self):
        post = PostView.model_validate(
            {"author": "x", "record": 5, "embed": [], "labels": "none"}
        )

        assert post.author.did is None
        assert post.text == ""
        assert post.embed is None
        assert post.labels == []

    def test_external_label_detection(self):
        own = PostView.model_validate(
            post_json("at://a/p/1", did="did:plc:a", labels=[{"src": "did:plc:a", "val": "x"}])
        )
        external = PostView.model_validate(
            post_json("at://a/p/1", did="did:plc:a", labels=[{"src": "did:plc:mod", "val": "x"}])
        )

        assert not own.has_external_label()
        assert external.has_external_label()


class TestFacetParsing:
    """Tests for Facet parsing."""

    def test_features_by_type(self):
        facet = Facet.model_validate(
            {
                "index": {"byteStart": 0, "byteEnd": 4},
                "features": [
                    {"$type": "app.bsky.richtext.facet#link", "uri": "https://x"},
                    {"$type": "app.bsky.richtext.facet#tag", "tag": "x"},
                    {"$type": "app.bsky.richtext.facet#other"},
                ],
            }
        )

        assert [type(f) for f in facet.features] == [LinkFeature, TagFeature, UnknownFeature]
        assert facet.byte_start == 0
        assert facet.byte_end == 4

    def test_offsets_coerced(self):
        facet = Facet.model_validate({"index": {"byteStart": "3", "byteEnd": 7.0}})

        assert facet.byte_start == 3
        assert facet.byte_end == 7

    def test_missing_index(self):
        facet = Facet.model_validate({"features": []})

        assert facet.byte_start is None
        assert facet.byte_end is None

    def test_non_string_feature_type_is_unknown(self):
        facet = Facet.model_validate(
            {
                "index": {"byteStart": 0, "byteEnd": 4},
                "features": [
                    {"$type": {"a": 1}},
                    {"$type": ["app.bsky.richtext.facet#link"], "uri": "https://x"},
                ],
            }
        )

        assert [type(f) for f in facet.features] == [UnknownFeature, UnknownFeature]
        assert facet.features[0].type is None

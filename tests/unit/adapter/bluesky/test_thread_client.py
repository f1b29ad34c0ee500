"""Unit tests for the Bluesky thread clients."""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from skythread.adapter.bluesky.thread import (
    SAMPLE_THREAD_URI,
    MockBlueskyThreadClient,
    RealBlueskyThreadClient,
    ThreadFetchError,
)
from skythread.domain.error import ThreadStructureError
from skythread.domain.model import ThreadPostNode
from skythread.domain.value import AtUri
from tests.conftest import post_json, thread_node

THREAD_URL = "https://public.api.bsky.app/xrpc/app.bsky.feed.getPostThread"
URI = AtUri("at://did:plc:abc/app.bsky.feed.post/3kxyz")


def make_response(status_code=200, json_body=None, text="", reason="OK"):
    response = MagicMock(spec=httpx.Response)
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.reason_phrase = reason
    response.text = text
    if isinstance(json_body, Exception):
        response.json.side_effect = json_body
    else:
        response.json.return_value = json_body
    return response


class TestRealBlueskyThreadClient:
    """Tests for RealBlueskyThreadClient."""

    @pytest.mark.asyncio
    async def test_fetches_and_parses_thread(self):
        body = {"thread": thread_node(post_json(URI.root, text="root"))}

        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=make_response(json_body=body))
            mock_client.return_value.__aenter__.return_value.get = get

            client = RealBlueskyThreadClient(thread_url=THREAD_URL, timeout=5.0)
            document = await client.get_post_thread(URI)

            assert isinstance(document.thread, ThreadPostNode)
            assert document.thread.post.text == "root"
            mock_client.assert_called_once_with(timeout=5.0)
            get.assert_called_once_with(
                THREAD_URL,
                params={"uri": URI.root},
                headers={"Accept": "application/json"},
            )

    @pytest.mark.asyncio
    async def test_error_status_includes_server_message(self):
        response = make_response(
            status_code=400,
            text='{"error": "NotFound", "message": "Post not found"}',
            reason="Bad Request",
        )

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=response
            )

            client = RealBlueskyThreadClient(thread_url=THREAD_URL)
            with pytest.raises(ThreadFetchError) as exc_info:
                await client.get_post_thread(URI)

        assert exc_info.value.status_code == 400
        assert str(exc_info.value) == (
            "HTTP error! Status: 400 Bad Request - Server: Post not found"
        )

    @pytest.mark.asyncio
    async def test_error_status_with_plain_body(self):
        response = make_response(
            status_code=503, text="upstream unavailable", reason="Service Unavailable"
        )

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=response
            )

            client = RealBlueskyThreadClient(thread_url=THREAD_URL)
            with pytest.raises(ThreadFetchError) as exc_info:
                await client.get_post_thread(URI)

        assert str(exc_info.value).endswith("- Body: upstream unavailable")

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("connection refused")
            )

            client = RealBlueskyThreadClient(thread_url=THREAD_URL)
            with pytest.raises(ThreadFetchError) as exc_info:
                await client.get_post_thread(URI)

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_json_is_structure_error(self):
        response = make_response(json_body=ValueError("Expecting value"))

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=response
            )

            client = RealBlueskyThreadClient(thread_url=THREAD_URL)
            with pytest.raises(ThreadStructureError):
                await client.get_post_thread(URI)

    @pytest.mark.asyncio
    async def test_non_object_body_is_structure_error(self):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=make_response(json_body=[1, 2, 3])
            )

            client = RealBlueskyThreadClient(thread_url=THREAD_URL)
            with pytest.raises(ThreadStructureError):
                await client.get_post_thread(URI)


class TestMockBlueskyThreadClient:
    """Tests for MockBlueskyThreadClient."""

    @pytest.mark.asyncio
    async def test_serves_sample_thread(self):
        client = MockBlueskyThreadClient()

        document = await client.get_post_thread(AtUri(SAMPLE_THREAD_URI))

        assert document.thread.post.uri == SAMPLE_THREAD_URI
        assert client.requested == [SAMPLE_THREAD_URI]

    @pytest.mark.asyncio
    async def test_serves_registered_thread(self):
        client = MockBlueskyThreadClient()
        client.add_thread(URI.root, {"thread": thread_node(post_json(URI.root))})

        document = await client.get_post_thread(URI)

        assert document.thread.post.uri == URI.root

    @pytest.mark.asyncio
    async def test_unknown_uri_fails_like_api(self):
        client = MockBlueskyThreadClient()

        with pytest.raises(ThreadFetchError) as exc_info:
            await client.get_post_thread(URI)

        assert exc_info.value.status_code == 400

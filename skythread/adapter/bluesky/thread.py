"""Bluesky thread retrieval adapter.

Fetches ``app.bsky.feed.getPostThread`` from the public AppView. No
credentials, no retries: one request per load.
"""

import copy
import json
from typing import Any

import httpx
import logfire
from pydantic import ValidationError

from skythread.adapter.error import ProviderError
from skythread.domain.error import ThreadStructureError
from skythread.domain.model import ThreadDocument
from skythread.domain.repository import ThreadRepository
from skythread.domain.value import AtUri

SAMPLE_THREAD_URI = "at://did:plc:sample/app.bsky.feed.post/3ksample"


class ThreadFetchError(ProviderError):
    """Thread retrieval failed at the transport or HTTP level."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class BlueskyThreadClient(ThreadRepository):
    """Base class for Bluesky thread clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealBlueskyThreadClient(BlueskyThreadClient):
    """Thread client calling the Bluesky public API over HTTP."""

    def __init__(self, thread_url: str, timeout: float = 10.0) -> None:
        """Initialize Bluesky thread client.

        Args:
            thread_url: Full URL of the getPostThread endpoint
            timeout: Request timeout in seconds
        """
        self.thread_url = thread_url
        self.timeout = timeout

    async def get_post_thread(self, uri: AtUri) -> ThreadDocument:
        """Fetch and parse the thread rooted at ``uri``.

        Args:
            uri: AT URI of the root post

        Returns:
            Parsed thread document

        Raises:
            ThreadFetchError: If the request fails or returns an error status
            ThreadStructureError: If the body is not a JSON object
        """
        with logfire.span("bluesky.get_post_thread", uri=uri.root):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(
                        self.thread_url,
                        params={"uri": uri.root},
                        headers={"Accept": "application/json"},
                    )
            except httpx.HTTPError as e:
                logfire.error("Thread request failed", uri=uri.root, error=str(e))
                raise ThreadFetchError(f"Request failed: {e}") from e

            if not response.is_success:
                message = _error_message(response)
                logfire.error(
                    "Thread request returned error status",
                    uri=uri.root,
                    status_code=response.status_code,
                    error=message,
                )
                raise ThreadFetchError(message, status_code=response.status_code)

            try:
                data = response.json()
            except ValueError as e:
                raise ThreadStructureError("Response body is not valid JSON") from e

            if not isinstance(data, dict):
                raise ThreadStructureError(
                    "Invalid API response structure (expected a JSON object)"
                )

            try:
                document = ThreadDocument.model_validate(data)
            except ValidationError as e:
                raise ThreadStructureError(f"Invalid API response structure: {e}") from e

            logfire.info("Thread fetched", uri=uri.root)
            return document


class MockBlueskyThreadClient(BlueskyThreadClient):
    """In-memory thread client for development and testing.

    Serves a built-in sample thread at SAMPLE_THREAD_URI plus anything
    registered with ``add_thread``. Unknown URIs fail like the API does.
    """

    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {
            SAMPLE_THREAD_URI: sample_thread_document(),
        }
        self.requested: list[str] = []

    def add_thread(self, uri: str, document: dict[str, Any]) -> None:
        """Register a raw getPostThread response for ``uri``."""
        self._documents[uri] = document

    async def get_post_thread(self, uri: AtUri) -> ThreadDocument:
        """Return the registered document for ``uri``."""
        self.requested.append(uri.root)
        document = self._documents.get(uri.root)
        if document is None:
            raise ThreadFetchError(
                "HTTP error! Status: 400 Bad Request - Server: Post not found: "
                f"{uri.root}",
                status_code=400,
            )
        return ThreadDocument.model_validate(copy.deepcopy(document))


def _error_message(response: httpx.Response) -> str:
    """Build an error message from a failed response, server text trimmed."""
    message = f"HTTP error! Status: {response.status_code} {response.reason_phrase}"
    body = response.text
    try:
        payload = json.loads(body)
    except ValueError:
        return f"{message} - Body: {body[:100]}"
    if isinstance(payload, dict):
        detail = payload.get("message") or payload.get("error") or body[:100]
    else:
        detail = body[:100]
    return f"{message} - Server: {detail}"


def sample_thread_document() -> dict[str, Any]:
    """A small getPostThread response exercising every node variant."""
    author = {
        "did": "did:plc:sample",
        "handle": "sample.bsky.social",
        "displayName": "Sample Author",
    }
    return {
        "thread": {
            "$type": "app.bsky.feed.defs#threadViewPost",
            "post": {
                "uri": SAMPLE_THREAD_URI,
                "author": author,
                "record": {
                    "text": "A post to comment on",
                    "createdAt": "2024-05-01T09:00:00.000Z",
                },
                "likeCount": 3,
                "repostCount": 1,
                "replyCount": 3,
                "quoteCount": 0,
            },
            "replies": [
                {
                    "$type": "app.bsky.feed.defs#threadViewPost",
                    "post": {
                        "uri": "at://did:plc:alice/app.bsky.feed.post/3kalice",
                        "author": {
                            "did": "did:plc:alice",
                            "handle": "alice.bsky.social",
                            "displayName": "Alice",
                        },
                        "record": {
                            "text": "Nice one! see example.com #bsky",
                            "createdAt": "2024-05-01T10:00:00.000Z",
                            "facets": [
                                {
                                    "index": {"byteStart": 14, "byteEnd": 25},
                                    "features": [
                                        {
                                            "$type": "app.bsky.richtext.facet#link",
                                            "uri": "example.com",
                                        }
                                    ],
                                },
                                {
                                    "index": {"byteStart": 26, "byteEnd": 31},
                                    "features": [
                                        {
                                            "$type": "app.bsky.richtext.facet#tag",
                                            "tag": "bsky",
                                        }
                                    ],
                                },
                            ],
                        },
                        "likeCount": 2,
                    },
                    "replies": [
                        {
                            "$type": "app.bsky.feed.defs#threadViewPost",
                            "post": {
                                "uri": "at://did:plc:bob/app.bsky.feed.post/3kbob",
                                "author": {"did": "did:plc:bob", "handle": "bob.bsky.social"},
                                "record": {
                                    "text": "Agreed @alice.bsky.social",
                                    "createdAt": "2024-05-01T12:00:00.000Z",
                                    "facets": [
                                        {
                                            "index": {"byteStart": 7, "byteEnd": 25},
                                            "features": [
                                                {
                                                    "$type": "app.bsky.richtext.facet#mention",
                                                    "did": "did:plc:alice",
                                                }
                                            ],
                                        }
                                    ],
                                },
                            },
                            "replies": [],
                        }
                    ],
                },
                {
                    "$type": "app.bsky.feed.defs#blockedPost",
                    "uri": "at://did:plc:blocked/app.bsky.feed.post/3kblocked",
                    "blocked": True,
                },
                {
                    "$type": "app.bsky.feed.defs#threadViewPost",
                    "post": {
                        "uri": "at://did:plc:carol/app.bsky.feed.post/3kcarol",
                        "author": {"did": "did:plc:carol", "handle": "carol.bsky.social"},
                        "record": {
                            "text": "Second thread",
                            "createdAt": "2024-05-01T11:00:00.000Z",
                        },
                        "likeCount": 5,
                    },
                    "replies": [],
                },
            ],
        }
    }

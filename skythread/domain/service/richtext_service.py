"""Rich-text segmentation service.

Facets address the UTF-8 encoding of a post's text, so segmentation works on
the encoded bytes and decodes each range separately. The algorithm follows
what the Bluesky app tolerates rather than what the lexicon promises:

- facets are sorted by start offset, ties keep their input order
- a facet outside the text or with an empty range is skipped
- overlapping facets are not rejected; the text between the cursor and a
  facet is only emitted when the facet starts after the cursor, and the
  facet's own range is always decoded from its own offsets
- only the first feature of a facet is rendered
"""

import re
from collections.abc import Sequence
from urllib.parse import quote

import logfire

from skythread.config import BlueskySettings
from skythread.domain.model import (
    Facet,
    LinkFeature,
    MentionFeature,
    Span,
    TagFeature,
)
from skythread.domain.value import SpanKind

from .base import Service
from .sanitizer import sanitize

DECODING_ERROR = "[Decoding Error]"

_KNOWN_SCHEME = re.compile(r"^(https?|mailto|ftp):", re.IGNORECASE)


class RichTextService(Service):
    """Domain service turning text plus facets into spans and markup."""

    def __init__(self, bluesky_settings: BlueskySettings) -> None:
        """Initialize rich-text service.

        Args:
            bluesky_settings: Provides the profile and hashtag URL bases
        """
        self.profile_url_base = bluesky_settings.profile_url_base
        self.hashtag_url_base = bluesky_settings.hashtag_url_base

    def segment(self, text: str | None, facets: Sequence[Facet] | None) -> list[Span]:
        """Split ``text`` into typed spans according to ``facets``.

        Args:
            text: Post text
            facets: Byte-range annotations over the UTF-8 encoding of text

        Returns:
            Spans in text order; empty for empty text
        """
        if not text:
            return []
        if not facets:
            return [Span(kind=SpanKind.TEXT, content=sanitize(text))]

        data = text.encode("utf-8", errors="surrogatepass")
        byte_length = len(data)
        ordered = sorted(
            facets,
            key=lambda facet: facet.byte_start if facet.byte_start is not None else 0,
        )

        spans: list[Span] = []
        current = 0
        for facet in ordered:
            start, end = facet.byte_start, facet.byte_end
            if start is None or end is None or start < 0 or end <= start or end > byte_length:
                logfire.warn(
                    "Skipping invalid or out-of-bounds facet",
                    byte_start=start,
                    byte_end=end,
                    byte_length=byte_length,
                )
                continue

            if start > current:
                spans.append(
                    Span(kind=SpanKind.TEXT, content=sanitize(_decode(data[current:start])))
                )

            spans.append(self._facet_span(facet, data[start:end]))
            current = end

        if current < byte_length:
            spans.append(Span(kind=SpanKind.TEXT, content=sanitize(_decode(data[current:]))))

        return spans

    def render(self, spans: Sequence[Span]) -> str:
        """Concatenate spans into markup, marking line breaks with <br>."""
        parts = []
        for span in spans:
            if span.is_link:
                parts.append(
                    f'<a href="{span.href}" target="_blank" rel="noopener noreferrer">'
                    f"{span.content}</a>"
                )
            else:
                parts.append(span.content)
        return "".join(parts).replace("\n", "<br>")

    def to_html(self, text: str | None, facets: Sequence[Facet] | None) -> str:
        """Segment and render in one step."""
        return self.render(self.segment(text, facets))

    def _facet_span(self, facet: Facet, chunk: bytes) -> Span:
        try:
            facet_text = sanitize(chunk.decode("utf-8"))
        except UnicodeDecodeError:
            logfire.warn(
                "Facet range is not valid UTF-8",
                byte_start=facet.byte_start,
                byte_end=facet.byte_end,
            )
            facet_text = DECODING_ERROR

        feature = facet.features[0] if facet.features else None

        if isinstance(feature, LinkFeature):
            href = sanitize(feature.uri) if feature.uri else "#"
            if href != "#" and not _KNOWN_SCHEME.match(href):
                href = f"https://{href}"
            return Span(kind=SpanKind.LINK, content=facet_text, href=href)

        if isinstance(feature, MentionFeature):
            href = f"{self.profile_url_base}{sanitize(feature.did)}" if feature.did else "#"
            return Span(kind=SpanKind.MENTION, content=facet_text, href=href)

        if isinstance(feature, TagFeature):
            tag_name = feature.tag or ""
            url_tag = tag_name[1:] if tag_name.startswith("#") else tag_name
            href = (
                f"{self.hashtag_url_base}{sanitize(quote(url_tag, safe=''))}"
                if url_tag
                else "#"
            )
            content = sanitize(tag_name)
            if content and not content.startswith("#"):
                content = f"#{content}"
            return Span(kind=SpanKind.TAG, content=content or facet_text, href=href)

        if feature is not None:
            logfire.warn("Unknown facet feature type", feature_type=feature.type)
        return Span(kind=SpanKind.TEXT, content=facet_text)


def _decode(chunk: bytes) -> str:
    """Decode leniently; malformed sequences become U+FFFD."""
    return chunk.decode("utf-8", errors="replace")

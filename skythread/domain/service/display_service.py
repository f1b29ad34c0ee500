"""Display pipeline: filter, sort and paginate flattened comments."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

import logfire

from skythread.domain.model import DisplayState, FlatComment
from skythread.domain.value import SortMode

from .base import Service

_COUNTERS = {
    SortMode.LIKES: "like_count",
    SortMode.REPOSTS: "repost_count",
    SortMode.QUOTES: "quote_count",
    SortMode.REPLIES: "reply_count",
}


def parse_timestamp(raw: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp, None when missing or unparsable.

    Naive timestamps are taken as UTC.
    """
    if not raw:
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class DisplayResult:
    """Result of one pipeline run.

    ``ordered`` is the full filtered and sorted list; ``revealed`` the prefix
    exposed for rendering.
    """

    ordered: list[FlatComment]
    revealed: list[FlatComment]
    has_more: bool
    next_batch_size: int

    @property
    def total(self) -> int:
        return len(self.ordered)


class DisplayService(Service):
    """Domain service computing the visible comment list from display state.

    ``compute`` is a pure function of its arguments and can run on every
    settled interaction.
    """

    def compute(
        self, comments: Sequence[FlatComment], state: DisplayState
    ) -> DisplayResult:
        """Filter, sort and paginate ``comments`` for ``state``.

        Args:
            comments: Flattened thread, in pre-order
            state: Current search term, sort mode and reveal cursor

        Returns:
            Ordered list, revealed prefix and pagination affordance
        """
        with logfire.span(
            "display_service.compute",
            sort_mode=state.sort_mode.value,
            has_search=bool(state.search_term),
            revealed_count=state.revealed_count,
        ):
            filtered = self.filter(comments, state.search_term)
            ordered = self.sort(filtered, state.sort_mode)

            revealed = ordered[: min(state.revealed_count, len(ordered))]
            remaining = len(ordered) - len(revealed)
            return DisplayResult(
                ordered=ordered,
                revealed=revealed,
                has_more=state.revealed_count < len(ordered),
                next_batch_size=min(remaining, state.page_increment),
            )

    def filter(
        self, comments: Sequence[FlatComment], search_term: str = ""
    ) -> list[FlatComment]:
        """Keep resolved posts, narrowed by a case-insensitive search term."""
        term = search_term.strip()
        return [
            comment
            for comment in comments
            if comment.is_post and (not term or comment.matches(term))
        ]

    def sort(
        self, comments: Sequence[FlatComment], sort_mode: SortMode
    ) -> list[FlatComment]:
        """Stable sort by ``sort_mode``.

        Engagement modes sort descending by their counter. Chronological
        modes sort by the root group's timestamp, then by the group's first
        position in the list, then by the comment's own timestamp. Missing or
        unparsable timestamps sort last in both directions.
        """
        if not sort_mode.is_chronological:
            counter = _COUNTERS[sort_mode]
            return sorted(
                comments,
                key=lambda comment: getattr(comment.post, counter, 0),
                reverse=True,
            )

        newest_first = sort_mode is SortMode.NEWEST
        group_positions: dict[str | None, int] = {}
        for position, comment in enumerate(comments):
            group_uri = comment.root_group.uri if comment.root_group else None
            group_positions.setdefault(group_uri, position)

        def chronological_key(comment: FlatComment) -> tuple:
            group = comment.root_group
            group_uri = group.uri if group else None
            root_time = _epoch(group.created_at if group else None, newest_first)
            own_time = _epoch(comment.post.created_at if comment.post else None, newest_first)
            return (
                root_time,
                group_positions[group_uri],
                own_time,
            )

        return sorted(comments, key=chronological_key)


def _epoch(raw: str | None, descending: bool) -> tuple[int, float]:
    """Sort key for a timestamp: invalid last, then by time in direction."""
    parsed = parse_timestamp(raw)
    if parsed is None:
        return (1, math.inf)
    seconds = parsed.timestamp()
    return (0, -seconds if descending else seconds)

"""Thread use cases."""

from .get_stats import GetStatsRequest, GetStatsResponse, GetStatsUseCase
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .load_thread import LoadThreadRequest, LoadThreadResponse, LoadThreadUseCase

__all__ = [
    "GetStatsRequest",
    "GetStatsResponse",
    "GetStatsUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "LoadThreadRequest",
    "LoadThreadResponse",
    "LoadThreadUseCase",
]

"""Get thread stats use case."""

from pydantic import BaseModel

from skythread.application.usecase.base import BaseUseCase
from skythread.application.usecase.thread.load_thread import (
    LoadThreadRequest,
    LoadThreadUseCase,
)
from skythread.domain.model import ThreadStats


class GetStatsRequest(BaseModel):
    """Get stats request."""

    uri: str | None


class GetStatsResponse(BaseModel):
    """Parent-post statistics of a thread."""

    thread_uri: str
    stats: ThreadStats
    comment_count: int


class GetStatsUseCase(BaseUseCase):
    """Use case for parent-post statistics."""

    def __init__(self, load_thread_use_case: LoadThreadUseCase) -> None:
        self.load_thread_use_case = load_thread_use_case

    async def execute(self, request: GetStatsRequest) -> GetStatsResponse:
        thread = await self.load_thread_use_case.execute(
            LoadThreadRequest(uri=request.uri)
        )
        return GetStatsResponse(
            thread_uri=thread.uri,
            stats=thread.stats,
            comment_count=len(thread.comments),
        )

"""Thread comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status

from skythread.adapter.error import ProviderError
from skythread.application.usecase.thread import (
    GetStatsRequest,
    GetStatsResponse,
    GetStatsUseCase,
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from skythread.domain.error import InvalidReferenceError, ThreadStructureError
from skythread.domain.value import SortMode

router = APIRouter(prefix="/threads", tags=["threads"], route_class=DishkaRoute)


@router.get("/comments", response_model=ListCommentsResponse)
async def list_comments(
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    uri: str = Query(description="AT URI of the post being commented on"),
    search: str = Query(default="", max_length=200),
    sort: str | None = Query(default=None),
    revealed: int | None = Query(default=None, ge=1),
) -> ListCommentsResponse:
    """List the revealed comments of a thread.

    Every request loads the thread afresh and applies the display parameters
    to it; clients page by sending a larger ``revealed`` count.

    Args:
        list_comments_use_case: List comments use case from DI
        uri: Root post reference
        search: Case-insensitive search term
        sort: One of newest, oldest, likes, reposts, quotes, replies
        revealed: Number of comments to reveal

    Returns:
        Rendered comments, stats and pagination state

    Raises:
        HTTPException: 400 for a bad reference or sort, 502 if Bluesky fails
    """
    sort_mode = None
    if sort is not None:
        try:
            sort_mode = SortMode(sort)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid sort mode: {sort}",
            )

    try:
        return await list_comments_use_case.execute(
            ListCommentsRequest(
                uri=uri, search=search, sort=sort_mode, revealed=revealed
            )
        )
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (ProviderError, ThreadStructureError) as e:
        logfire.error("Failed to load comments", uri=uri, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to load comments: {e}",
        )


@router.get("/stats", response_model=GetStatsResponse)
async def get_stats(
    get_stats_use_case: FromDishka[GetStatsUseCase],
    uri: str = Query(description="AT URI of the post being commented on"),
) -> GetStatsResponse:
    """Get parent-post statistics of a thread.

    Args:
        get_stats_use_case: Get stats use case from DI
        uri: Root post reference

    Returns:
        Likes, reposts, replies and quotes of the root post

    Raises:
        HTTPException: 400 for a bad reference, 502 if Bluesky fails
    """
    try:
        return await get_stats_use_case.execute(GetStatsRequest(uri=uri))
    except InvalidReferenceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (ProviderError, ThreadStructureError) as e:
        logfire.error("Failed to load stats", uri=uri, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to load comments: {e}",
        )

"""Creator dashboard endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth import CurrentUser
from vidtube.db import get_db
from vidtube.db.views import get_channel_stats, get_channel_videos
from vidtube.models.schemas import ApiResponse, ChannelStats, ChannelVideoItem, ok

router = APIRouter()


@router.get("/stats", response_model=ApiResponse[ChannelStats])
async def channel_stats(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[ChannelStats]:
    return ok(await get_channel_stats(db, user.id), "Channel stats fetched successfully")


@router.get("/videos", response_model=ApiResponse[list[ChannelVideoItem]])
async def channel_videos(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[ChannelVideoItem]]:
    """All of the caller's videos, including unpublished ones."""
    return ok(await get_channel_videos(db, user.id), "Channel videos fetched successfully")

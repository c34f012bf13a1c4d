"""Like endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth import CurrentUser
from vidtube.db import crud, get_db
from vidtube.db.toggle import ToggleResult
from vidtube.db.views import get_liked_videos
from vidtube.errors import parse_id
from vidtube.models import Like
from vidtube.models.schemas import ApiResponse, LikedVideoItem, LikeRead, LikeStatus, ok

router = APIRouter()


def _like_status(result: ToggleResult[Like]) -> ApiResponse[LikeStatus]:
    like = LikeRead.model_validate(result.record) if result.record is not None else None
    message = "Liked successfully" if result.active else "Like removed successfully"
    return ok(LikeStatus(liked=result.active, like=like), message)


@router.post("/toggle/v/{video_id}", response_model=ApiResponse[LikeStatus])
async def toggle_video_like(
    video_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[LikeStatus]:
    return _like_status(await crud.toggle_video_like(db, parse_id(video_id, "videoId"), user.id))


@router.post("/toggle/c/{comment_id}", response_model=ApiResponse[LikeStatus])
async def toggle_comment_like(
    comment_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[LikeStatus]:
    return _like_status(await crud.toggle_comment_like(db, parse_id(comment_id, "commentId"), user.id))


@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse[LikeStatus])
async def toggle_tweet_like(
    tweet_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[LikeStatus]:
    return _like_status(await crud.toggle_tweet_like(db, parse_id(tweet_id, "tweetId"), user.id))


@router.get("/videos", response_model=ApiResponse[list[LikedVideoItem]])
async def liked_videos(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[LikedVideoItem]]:
    return ok(await get_liked_videos(db, user.id), "Liked videos fetched successfully")

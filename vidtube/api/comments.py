"""Comment endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth import CurrentUser
from vidtube.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from vidtube.db import crud, get_db
from vidtube.db.views import get_video_comments
from vidtube.errors import parse_id
from vidtube.models.schemas import ApiResponse, CommentCreate, CommentPage, CommentRead, Empty, ok

router = APIRouter()


@router.get("/{video_id}", response_model=ApiResponse[CommentPage])
async def list_comments(
    video_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> ApiResponse[CommentPage]:
    comments = await get_video_comments(db, parse_id(video_id, "videoId"), page=page, limit=limit)
    return ok(comments, "Comments fetched successfully")


@router.post("/{video_id}", response_model=ApiResponse[CommentRead], status_code=201)
async def add_comment(
    video_id: str,
    data: CommentCreate,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[CommentRead]:
    comment = await crud.add_comment(db, parse_id(video_id, "videoId"), user.id, data.content)
    return ok(CommentRead.model_validate(comment), "Comment added successfully", status_code=201)


@router.patch("/c/{comment_id}", response_model=ApiResponse[CommentRead])
async def update_comment(
    comment_id: str,
    data: CommentCreate,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[CommentRead]:
    comment = await crud.update_comment(db, parse_id(comment_id, "commentId"), user.id, data.content)
    return ok(CommentRead.model_validate(comment), "Comment updated successfully")


@router.delete("/c/{comment_id}", response_model=ApiResponse[Empty])
async def delete_comment(
    comment_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[Empty]:
    await crud.delete_comment(db, parse_id(comment_id, "commentId"), user.id)
    return ok(Empty(), "Comment deleted successfully")

"""Video endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth import CurrentUser, OptionalUser
from vidtube.config import Settings, get_settings
from vidtube.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from vidtube.db import crud, get_db
from vidtube.db.views import get_video_feed
from vidtube.db.views.common import video_read
from vidtube.errors import parse_id
from vidtube.models.schemas import ApiResponse, Empty, PublishStatus, VideoDetail, VideoPage, VideoRead, ok
from vidtube.services.blobs import BlobStore, get_blob_store

router = APIRouter()


@router.get("", response_model=ApiResponse[VideoPage])
async def list_videos(
    db: Annotated[AsyncSession, Depends(get_db)],
    user_id: Annotated[str | None, Query(alias="userId")] = None,
    query: Annotated[str | None, Query()] = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_type: Annotated[str | None, Query(alias="sortType")] = None,
    page: Annotated[int, Query(ge=1)] = DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> ApiResponse[VideoPage]:
    """Published videos of a channel, searchable and sortable."""
    owner_id = parse_id(user_id, "userId")
    videos = await get_video_feed(
        db,
        owner_id,
        query=query,
        sort_by=sort_by,
        sort_type=sort_type,
        page=page,
        limit=limit,
    )
    return ok(videos, "Videos fetched successfully")


@router.post("", response_model=ApiResponse[VideoRead], status_code=201)
async def publish_video(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[BlobStore, Depends(get_blob_store)],
    settings: Annotated[Settings, Depends(get_settings)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    video_file: Annotated[UploadFile | None, File(alias="videoFile")] = None,
    thumbnail: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse[VideoRead]:
    """Upload a new video. It stays unpublished until toggled."""
    video = await crud.publish_video(
        db,
        store,
        settings.max_upload_bytes,
        user.id,
        title=title,
        description=description,
        video_file=video_file,
        thumbnail=thumbnail,
    )
    return ok(video_read(video), "Video uploaded successfully", status_code=201)


@router.get("/{video_id}", response_model=ApiResponse[VideoDetail])
async def get_video(
    video_id: str,
    viewer: OptionalUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[VideoDetail]:
    """Watch a video: counts a view and records it in the viewer's history."""
    video = await crud.watch_video(db, parse_id(video_id, "videoId"), viewer.id if viewer else None)
    return ok(video, "Video fetched successfully")


@router.patch("/{video_id}", response_model=ApiResponse[VideoRead])
async def update_video(
    video_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[BlobStore, Depends(get_blob_store)],
    settings: Annotated[Settings, Depends(get_settings)],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    thumbnail: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse[VideoRead]:
    video = await crud.update_video(
        db,
        store,
        settings.max_upload_bytes,
        parse_id(video_id, "videoId"),
        user.id,
        title=title,
        description=description,
        thumbnail=thumbnail,
    )
    return ok(video_read(video), "Video updated successfully")


@router.delete("/{video_id}", response_model=ApiResponse[Empty])
async def delete_video(
    video_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[BlobStore, Depends(get_blob_store)],
) -> ApiResponse[Empty]:
    await crud.delete_video(db, store, parse_id(video_id, "videoId"), user.id)
    return ok(Empty(), "Video deleted successfully")


@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse[PublishStatus])
async def toggle_publish_status(
    video_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[PublishStatus]:
    video = await crud.toggle_publish_status(db, parse_id(video_id, "videoId"), user.id)
    return ok(PublishStatus(id=video.id, is_published=video.is_published), "Publish status toggled")

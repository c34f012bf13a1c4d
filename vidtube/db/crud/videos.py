"""Video publishing, viewing and lifecycle."""

import uuid

from fastapi import UploadFile
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.constants import RESOURCE_TYPE_IMAGE, RESOURCE_TYPE_VIDEO
from vidtube.db.guards import get_or_404, get_owned_or_404, is_owner
from vidtube.db.views import get_video_detail
from vidtube.errors import InvalidArgument, NotFound, require_text
from vidtube.models import Comment, Like, Video, playlist_videos, watch_history
from vidtube.models.base import utcnow
from vidtube.models.schemas import VideoDetail
from vidtube.services.blobs import BlobStore, delete_blobs, uploaded_blobs
from vidtube.utils.logging import LogContext, get_logger

logger = get_logger(__name__)


async def publish_video(
    db: AsyncSession,
    store: BlobStore,
    max_bytes: int,
    owner_id: uuid.UUID,
    *,
    title: str | None,
    description: str | None,
    video_file: UploadFile | None,
    thumbnail: UploadFile | None,
) -> Video:
    """Upload a video and its thumbnail and create the record.

    New videos start unpublished. ``duration`` is whatever the blob store
    measured for the uploaded file.
    """
    require_text(title=title, description=description)
    if video_file is None or thumbnail is None:
        raise InvalidArgument("videoFile and thumbnail are required")

    async with uploaded_blobs(store, max_bytes) as batch:
        video_blob = await batch.put(video_file, "videoFile")
        thumbnail_blob = await batch.put(thumbnail, "thumbnail")

        video = Video(
            owner_id=owner_id,
            video_file_url=video_blob.url,
            video_file_public_id=video_blob.public_id,
            thumbnail_url=thumbnail_blob.url,
            thumbnail_public_id=thumbnail_blob.public_id,
            title=title.strip(),
            description=description.strip(),
            duration=video_blob.duration or 0.0,
            views=0,
            is_published=False,
        )
        db.add(video)
        await db.commit()

    logger.info(f"User {owner_id} published video {video.id}")
    return video


async def record_watch(db: AsyncSession, user_id: uuid.UUID, video_id: uuid.UUID) -> None:
    """Add ``video_id`` to the user's history, or refresh ``watched_at``."""
    now = utcnow()
    result = await db.execute(
        update(watch_history)
        .where(watch_history.c.user_id == user_id, watch_history.c.video_id == video_id)
        .values(watched_at=now)
    )
    if result.rowcount:
        return

    try:
        async with db.begin_nested():
            await db.execute(watch_history.insert().values(user_id=user_id, video_id=video_id, watched_at=now))
    except IntegrityError:
        # A parallel request for the same video inserted the row first
        logger.debug(f"Watch history row for {user_id}/{video_id} already present")


async def watch_video(db: AsyncSession, video_id: uuid.UUID, viewer_id: uuid.UUID | None = None) -> VideoDetail:
    """Count a view, remember it in the viewer's history and return the video."""
    video = await get_or_404(db, Video, video_id, "Video")
    if not video.is_published and not is_owner(video, viewer_id):
        raise NotFound("Video not found")

    await db.execute(update(Video).where(Video.id == video_id).values(views=Video.views + 1))
    if viewer_id is not None:
        await record_watch(db, viewer_id, video_id)
    await db.commit()

    return await get_video_detail(db, video_id, viewer_id)


async def update_video(
    db: AsyncSession,
    store: BlobStore,
    max_bytes: int,
    video_id: uuid.UUID,
    principal_id: uuid.UUID,
    *,
    title: str | None = None,
    description: str | None = None,
    thumbnail: UploadFile | None = None,
) -> Video:
    """Change title, description and/or thumbnail of an owned video."""
    title = title.strip() if title else None
    description = description.strip() if description else None
    if not (title or description or thumbnail):
        raise InvalidArgument("At least one of title, description or thumbnail is required")

    video = await get_owned_or_404(db, Video, video_id, principal_id, "Video")
    log = LogContext(logger, user=principal_id, video=video_id)
    old_thumbnail = video.thumbnail_public_id if thumbnail else None

    async with uploaded_blobs(store, max_bytes) as batch:
        if thumbnail is not None:
            blob = await batch.put(thumbnail, "thumbnail")
            video.thumbnail_url = blob.url
            video.thumbnail_public_id = blob.public_id
        if title:
            video.title = title
        if description:
            video.description = description
        await db.commit()

    log.info("Video updated")
    await delete_blobs(store, (old_thumbnail, RESOURCE_TYPE_IMAGE))
    return video


async def delete_video(db: AsyncSession, store: BlobStore, video_id: uuid.UUID, principal_id: uuid.UUID) -> None:
    """Delete an owned video with everything that references it, then its files."""
    video = await get_owned_or_404(db, Video, video_id, principal_id, "Video")
    blobs = (
        (video.video_file_public_id, RESOURCE_TYPE_VIDEO),
        (video.thumbnail_public_id, RESOURCE_TYPE_IMAGE),
    )

    comment_ids = select(Comment.id).where(Comment.video_id == video_id)
    await db.execute(delete(Like).where(Like.comment_id.in_(comment_ids)))
    await db.execute(delete(Like).where(Like.video_id == video_id))
    await db.execute(delete(Comment).where(Comment.video_id == video_id))
    await db.execute(delete(playlist_videos).where(playlist_videos.c.video_id == video_id))
    await db.execute(delete(watch_history).where(watch_history.c.video_id == video_id))
    await db.delete(video)
    await db.commit()

    logger.info(f"User {principal_id} deleted video {video_id}")
    await delete_blobs(store, *blobs)


async def toggle_publish_status(db: AsyncSession, video_id: uuid.UUID, principal_id: uuid.UUID) -> Video:
    video = await get_owned_or_404(db, Video, video_id, principal_id, "Video")
    video.is_published = not video.is_published
    await db.commit()
    logger.info(f"Video {video_id} is_published={video.is_published}")
    return video

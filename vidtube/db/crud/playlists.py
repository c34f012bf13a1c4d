"""Playlist mutations."""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.guards import get_or_404, get_owned_or_404
from vidtube.errors import require_text
from vidtube.models import Playlist, Video, playlist_videos
from vidtube.models.base import utcnow
from vidtube.models.schemas import PlaylistRead
from vidtube.utils.logging import LogContext, get_logger

logger = get_logger(__name__)


async def playlist_read(db: AsyncSession, playlist: Playlist) -> PlaylistRead:
    """Stored playlist fields plus its video ids in insertion order."""
    result = await db.execute(
        select(playlist_videos.c.video_id)
        .where(playlist_videos.c.playlist_id == playlist.id)
        .order_by(playlist_videos.c.added_at.asc())
    )
    return PlaylistRead(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        owner_id=playlist.owner_id,
        video_ids=list(result.scalars().all()),
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )


async def create_playlist(db: AsyncSession, owner_id: uuid.UUID, name: str | None, description: str | None) -> Playlist:
    require_text(name=name, description=description)
    playlist = Playlist(name=name.strip(), description=description.strip(), owner_id=owner_id)
    db.add(playlist)
    await db.commit()
    logger.info(f"User {owner_id} created playlist {playlist.id}")
    return playlist


async def update_playlist(
    db: AsyncSession,
    playlist_id: uuid.UUID,
    principal_id: uuid.UUID,
    name: str | None,
    description: str | None,
) -> Playlist:
    require_text(name=name, description=description)
    playlist = await get_owned_or_404(db, Playlist, playlist_id, principal_id, "Playlist")
    playlist.name = name.strip()
    playlist.description = description.strip()
    await db.commit()
    return playlist


async def delete_playlist(db: AsyncSession, playlist_id: uuid.UUID, principal_id: uuid.UUID) -> None:
    playlist = await get_owned_or_404(db, Playlist, playlist_id, principal_id, "Playlist")
    await db.execute(delete(playlist_videos).where(playlist_videos.c.playlist_id == playlist_id))
    await db.delete(playlist)
    await db.commit()
    logger.info(f"User {principal_id} deleted playlist {playlist_id}")


async def add_video_to_playlist(
    db: AsyncSession, playlist_id: uuid.UUID, video_id: uuid.UUID, principal_id: uuid.UUID
) -> Playlist:
    """Add a video to an owned playlist. Adding it twice keeps one entry."""
    playlist = await get_owned_or_404(db, Playlist, playlist_id, principal_id, "Playlist")
    await get_or_404(db, Video, video_id, "Video")
    log = LogContext(logger, playlist=playlist_id, video=video_id)

    playlist.updated_at = utcnow()
    await db.flush()

    exists = await db.execute(
        select(playlist_videos.c.video_id).where(
            playlist_videos.c.playlist_id == playlist_id, playlist_videos.c.video_id == video_id
        )
    )
    if exists.first() is None:
        try:
            async with db.begin_nested():
                await db.execute(
                    playlist_videos.insert().values(playlist_id=playlist_id, video_id=video_id, added_at=utcnow())
                )
            log.info("Video added")
        except IntegrityError:
            log.debug("Video added concurrently")

    await db.commit()
    return playlist


async def remove_video_from_playlist(
    db: AsyncSession, playlist_id: uuid.UUID, video_id: uuid.UUID, principal_id: uuid.UUID
) -> Playlist:
    """Remove a video from an owned playlist; absent videos are ignored."""
    playlist = await get_owned_or_404(db, Playlist, playlist_id, principal_id, "Playlist")
    result = await db.execute(
        delete(playlist_videos).where(
            playlist_videos.c.playlist_id == playlist_id, playlist_videos.c.video_id == video_id
        )
    )
    if result.rowcount:
        playlist.updated_at = utcnow()
        LogContext(logger, playlist=playlist_id, video=video_id).info("Video removed")
    await db.commit()
    return playlist

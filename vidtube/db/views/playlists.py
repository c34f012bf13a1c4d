"""Playlist views."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.views.common import blob, owner_summary, playlist_videos_count, playlists_count, present
from vidtube.errors import NotFound
from vidtube.models import Playlist, User, Video, playlist_videos
from vidtube.models.schemas import (
    PlaylistDetail,
    PlaylistOwner,
    PlaylistVideo,
    UserPlaylistItem,
    UserPlaylistOwner,
)


async def get_playlist_detail(db: AsyncSession, playlist_id: uuid.UUID) -> PlaylistDetail:
    """Playlist with its owner and videos in insertion order."""
    stmt = select(Playlist, User).outerjoin(User, User.id == Playlist.owner_id).where(Playlist.id == playlist_id)
    rows = present((await db.execute(stmt)).all(), "playlist detail", "owner")
    if not rows:
        raise NotFound("Playlist not found")
    playlist, owner = rows[0]

    video_rows = await db.execute(
        select(Video)
        .join(playlist_videos, playlist_videos.c.video_id == Video.id)
        .where(playlist_videos.c.playlist_id == playlist.id)
        .order_by(playlist_videos.c.added_at.asc())
    )
    videos = [
        PlaylistVideo(
            id=video.id,
            video_file=blob(video.video_file_url, video.video_file_public_id),
            thumbnail=blob(video.thumbnail_url, video.thumbnail_public_id),
            title=video.title,
            description=video.description,
            duration=video.duration,
            views=video.views,
            owner_id=video.owner_id,
            created_at=video.created_at,
        )
        for video in video_rows.scalars().all()
    ]

    return PlaylistDetail(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        created_at=playlist.created_at,
        owner_details=PlaylistOwner(
            id=owner.id,
            username=owner.username,
            fullname=owner.fullname,
            avatar=owner.avatar_url,
            cover_image=owner.cover_image_url,
        ),
        videos=videos,
        num_of_videos=len(videos),
    )


async def get_user_playlists(db: AsyncSession, user_id: uuid.UUID) -> list[UserPlaylistItem]:
    """Playlists owned by ``user_id``, newest first."""
    stmt = (
        select(
            Playlist,
            User,
            playlists_count().label("num_of_playlists"),
            playlist_videos_count().label("num_of_videos"),
        )
        .outerjoin(User, User.id == Playlist.owner_id)
        .where(Playlist.owner_id == user_id)
        .order_by(Playlist.created_at.desc(), Playlist.id.desc())
    )
    rows = present((await db.execute(stmt)).all(), "user playlists", "owner")

    return [
        UserPlaylistItem(
            id=playlist.id,
            name=playlist.name,
            description=playlist.description,
            created_at=playlist.created_at,
            owner_details=UserPlaylistOwner(**owner_summary(owner).model_dump(), num_of_playlists=n_playlists),
            num_of_videos=n_videos,
        )
        for playlist, owner, n_playlists, n_videos in rows
    ]

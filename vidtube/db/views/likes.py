"""Videos liked by a user."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from vidtube.db.views.common import owner_summary, present, video_fields
from vidtube.models import Like, User, Video
from vidtube.models.schemas import LikedVideoItem, VideoWithOwner


async def get_liked_videos(db: AsyncSession, user_id: uuid.UUID) -> list[LikedVideoItem]:
    """One entry per video like of ``user_id``, newest like first.

    Comment and tweet likes are not included.
    """
    owner = aliased(User)
    stmt = (
        select(Like, Video, owner)
        .outerjoin(Video, Video.id == Like.video_id)
        .outerjoin(owner, owner.id == Video.owner_id)
        .where(Like.liked_by_id == user_id, Like.video_id.is_not(None))
        .order_by(Like.created_at.desc(), Like.id.desc())
    )
    rows = (await db.execute(stmt)).all()
    rows = present(present(rows, "liked videos", "video"), "liked videos", "owner", index=2)

    return [
        LikedVideoItem(
            liked_at=like.created_at,
            video=VideoWithOwner(**video_fields(video), owner_details=owner_summary(user)),
        )
        for like, video, user in rows
    ]

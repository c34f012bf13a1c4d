"""Creator dashboard views."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.views.common import video_comments_count, video_fields, video_likes_count
from vidtube.models import Like, Subscription, Video
from vidtube.models.schemas import ChannelStats, ChannelVideoItem


async def get_channel_stats(db: AsyncSession, user_id: uuid.UUID) -> ChannelStats:
    """Totals for a channel: subscribers, likes on its videos, videos and views.

    Always one row; a channel with no videos reports zeros.
    """
    video_totals = select(
        func.count(Video.id).label("total_videos"),
        func.coalesce(func.sum(Video.views), 0).label("total_views"),
    ).where(Video.owner_id == user_id)

    total_likes = (
        select(func.count(Like.id)).join(Video, Video.id == Like.video_id).where(Video.owner_id == user_id)
    )
    total_subscribers = select(func.count()).select_from(Subscription).where(Subscription.channel_id == user_id)

    videos_row = (await db.execute(video_totals)).one()
    likes = (await db.execute(total_likes)).scalar_one()
    subscribers = (await db.execute(total_subscribers)).scalar_one()

    return ChannelStats(
        total_subscribers=subscribers,
        total_likes=likes,
        total_videos=videos_row.total_videos,
        total_views=videos_row.total_views,
    )


async def get_channel_videos(db: AsyncSession, user_id: uuid.UUID) -> list[ChannelVideoItem]:
    """Every video of the channel, published or not, newest first."""
    stmt = (
        select(
            Video,
            video_likes_count().label("likes"),
            video_comments_count().label("num_of_comments"),
        )
        .where(Video.owner_id == user_id)
        .order_by(Video.created_at.desc(), Video.id.desc())
    )
    rows = (await db.execute(stmt)).all()
    return [
        ChannelVideoItem(**video_fields(video), likes=likes, num_of_comments=num_of_comments)
        for video, likes, num_of_comments in rows
    ]

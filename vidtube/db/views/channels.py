"""Channel (user) views: profile, subscribers, subscriptions, watch history."""

import uuid

from sqlalchemy import func, literal, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from vidtube.db.views.common import (
    owner_summary,
    present,
    profile_fields,
    subscribed_to_count,
    subscribers_count,
    subscription_exists,
    video_fields,
    video_read,
    videos_count,
)
from vidtube.errors import InvalidArgument, NotFound
from vidtube.models import Subscription, User, Video, watch_history
from vidtube.models.schemas import (
    ChannelProfile,
    SubscribedChannelItem,
    SubscriberItem,
    VideoRead,
    VideoWithOwner,
)


async def _ensure_user(db: AsyncSession, user_id: uuid.UUID, name: str = "Channel") -> None:
    if await db.get(User, user_id) is None:
        raise NotFound(f"{name} not found")


async def get_channel_profile(
    db: AsyncSession,
    username: str,
    viewer_id: uuid.UUID | None = None,
) -> ChannelProfile:
    """Channel header looked up by username (case-insensitive).

    ``is_subscribed`` is true iff ``viewer_id`` has a subscription row for
    this channel; it is always false for anonymous viewers.
    """
    username = (username or "").strip()
    if not username:
        raise InvalidArgument("username is missing")

    is_subscribed = literal(False) if viewer_id is None else subscription_exists(viewer_id, User.id)
    stmt = select(
        User,
        subscribers_count().label("subscribers_count"),
        subscribed_to_count().label("channels_subscribed_to_count"),
        is_subscribed.label("is_subscribed"),
    ).where(func.lower(User.username) == username.lower())

    row = (await db.execute(stmt)).first()
    if row is None:
        raise NotFound("Channel does not exist")

    user, subs, subscribed_to, subscribed = row
    return ChannelProfile(
        **profile_fields(user),
        subscribers_count=subs,
        channels_subscribed_to_count=subscribed_to,
        is_subscribed=bool(subscribed),
    )


async def get_channel_subscribers(db: AsyncSession, channel_id: uuid.UUID) -> list[SubscriberItem]:
    """Users subscribed to ``channel_id``, newest subscription first.

    Each entry says whether the channel subscribes back to that user.
    """
    await _ensure_user(db, channel_id)

    stmt = (
        select(
            Subscription,
            User,
            subscribers_count(User.id).label("subscribers_count"),
            subscription_exists(channel_id, User.id).label("is_subscribed_to_subscriber"),
        )
        .outerjoin(User, User.id == Subscription.subscriber_id)
        .where(Subscription.channel_id == channel_id)
        .order_by(Subscription.created_at.desc())
    )
    rows = present((await db.execute(stmt)).all(), "channel subscribers", "subscriber")
    return [
        SubscriberItem(
            **profile_fields(user),
            subscribers_count=subs,
            is_subscribed_to_subscriber=bool(subscribed_back),
        )
        for _, user, subs, subscribed_back in rows
    ]


async def _latest_videos(db: AsyncSession, owner_ids: list[uuid.UUID]) -> dict[uuid.UUID, VideoRead]:
    """Most recent video per owner, in a single query."""
    if not owner_ids:
        return {}

    ranked = (
        select(
            Video,
            func.row_number()
            .over(partition_by=Video.owner_id, order_by=(Video.created_at.desc(), Video.id.desc()))
            .label("rank"),
        )
        .where(Video.owner_id.in_(owner_ids))
        .subquery()
    )
    latest = aliased(Video, ranked)
    result = await db.execute(select(latest).where(ranked.c.rank == 1))
    return {video.owner_id: video_read(video) for video in result.scalars().all()}


async def get_subscribed_channels(db: AsyncSession, subscriber_id: uuid.UUID) -> list[SubscribedChannelItem]:
    """Channels ``subscriber_id`` subscribes to, newest subscription first."""
    await _ensure_user(db, subscriber_id, "Subscriber")

    stmt = (
        select(
            Subscription,
            User,
            subscribers_count(User.id).label("subscribers_count"),
            subscribed_to_count(User.id).label("channels_subscribed_to_count"),
            videos_count(User.id).label("videos_count"),
        )
        .outerjoin(User, User.id == Subscription.channel_id)
        .where(Subscription.subscriber_id == subscriber_id)
        .order_by(Subscription.created_at.desc())
    )
    rows = present((await db.execute(stmt)).all(), "subscribed channels", "channel")
    latest = await _latest_videos(db, [user.id for _, user, *_ in rows])

    return [
        SubscribedChannelItem(
            **profile_fields(user),
            subscribers_count=subs,
            channels_subscribed_to_count=subscribed_to,
            videos_count=n_videos,
            latest_video=latest.get(user.id),
        )
        for _, user, subs, subscribed_to, n_videos in rows
    ]


async def get_watch_history(db: AsyncSession, user_id: uuid.UUID) -> list[VideoWithOwner]:
    """Videos the user watched, most recently watched first."""
    stmt = (
        select(Video, User)
        .join(watch_history, watch_history.c.video_id == Video.id)
        .outerjoin(User, User.id == Video.owner_id)
        .where(watch_history.c.user_id == user_id)
        .order_by(watch_history.c.watched_at.desc())
    )
    rows = present((await db.execute(stmt)).all(), "watch history", "owner")
    return [VideoWithOwner(**video_fields(video), owner_details=owner_summary(owner)) for video, owner in rows]

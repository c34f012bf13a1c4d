"""Like and subscription toggles."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.guards import get_or_404
from vidtube.db.toggle import ToggleResult, toggle
from vidtube.errors import InvalidArgument
from vidtube.models import Comment, Like, Subscription, Tweet, User, Video
from vidtube.utils.logging import get_logger

logger = get_logger(__name__)


async def _toggle_like(db: AsyncSession, user_id: uuid.UUID, **target: uuid.UUID) -> ToggleResult[Like]:
    result = await toggle(db, Like, liked_by_id=user_id, **target)
    await db.commit()
    logger.info(f"User {user_id} {'liked' if result.active else 'unliked'} {target}")
    return result


async def toggle_video_like(db: AsyncSession, video_id: uuid.UUID, user_id: uuid.UUID) -> ToggleResult[Like]:
    await get_or_404(db, Video, video_id, "Video")
    return await _toggle_like(db, user_id, video_id=video_id)


async def toggle_comment_like(db: AsyncSession, comment_id: uuid.UUID, user_id: uuid.UUID) -> ToggleResult[Like]:
    await get_or_404(db, Comment, comment_id, "Comment")
    return await _toggle_like(db, user_id, comment_id=comment_id)


async def toggle_tweet_like(db: AsyncSession, tweet_id: uuid.UUID, user_id: uuid.UUID) -> ToggleResult[Like]:
    await get_or_404(db, Tweet, tweet_id, "Tweet")
    return await _toggle_like(db, user_id, tweet_id=tweet_id)


async def toggle_subscription(
    db: AsyncSession, channel_id: uuid.UUID, subscriber_id: uuid.UUID
) -> ToggleResult[Subscription]:
    """Subscribe to ``channel_id`` or cancel an existing subscription."""
    if channel_id == subscriber_id:
        raise InvalidArgument("You cannot subscribe to your own channel")
    await get_or_404(db, User, channel_id, "Channel")

    result = await toggle(db, Subscription, subscriber_id=subscriber_id, channel_id=channel_id)
    await db.commit()
    logger.info(f"User {subscriber_id} {'subscribed to' if result.active else 'unsubscribed from'} {channel_id}")
    return result

"""Tweets posted by a user."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.views.common import owner_summary, present, tweet_likes_count, tweets_count
from vidtube.errors import NotFound
from vidtube.models import Tweet, User
from vidtube.models.schemas import TweetItem


async def get_user_tweets(db: AsyncSession, user_id: uuid.UUID) -> list[TweetItem]:
    """Tweets of ``user_id``, newest first."""
    if await db.get(User, user_id) is None:
        raise NotFound("User not found")

    stmt = (
        select(
            Tweet,
            User,
            tweets_count().label("num_of_tweets_by_owner"),
            tweet_likes_count().label("likes"),
        )
        .outerjoin(User, User.id == Tweet.owner_id)
        .where(Tweet.owner_id == user_id)
        .order_by(Tweet.created_at.desc(), Tweet.id.desc())
    )
    rows = present((await db.execute(stmt)).all(), "user tweets", "owner")
    return [
        TweetItem(
            id=tweet.id,
            content=tweet.content,
            created_at=tweet.created_at,
            owner_details=owner_summary(owner),
            num_of_tweets_by_owner=n_tweets,
            likes=likes,
        )
        for tweet, owner, n_tweets, likes in rows
    ]

"""Tweet mutations."""

import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.guards import get_owned_or_404
from vidtube.errors import require_text
from vidtube.models import Like, Tweet
from vidtube.utils.logging import get_logger

logger = get_logger(__name__)


async def create_tweet(db: AsyncSession, owner_id: uuid.UUID, content: str | None) -> Tweet:
    require_text(content=content)
    tweet = Tweet(content=content.strip(), owner_id=owner_id)
    db.add(tweet)
    await db.commit()
    logger.info(f"User {owner_id} posted tweet {tweet.id}")
    return tweet


async def update_tweet(db: AsyncSession, tweet_id: uuid.UUID, principal_id: uuid.UUID, content: str | None) -> Tweet:
    require_text(content=content)
    tweet = await get_owned_or_404(db, Tweet, tweet_id, principal_id, "Tweet")
    tweet.content = content.strip()
    await db.commit()
    return tweet


async def delete_tweet(db: AsyncSession, tweet_id: uuid.UUID, principal_id: uuid.UUID) -> None:
    tweet = await get_owned_or_404(db, Tweet, tweet_id, principal_id, "Tweet")
    await db.execute(delete(Like).where(Like.tweet_id == tweet_id))
    await db.delete(tweet)
    await db.commit()
    logger.info(f"User {principal_id} deleted tweet {tweet_id}")

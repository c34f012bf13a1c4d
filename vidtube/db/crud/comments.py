"""Comment mutations."""

import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.db.guards import get_or_404, get_owned_or_404
from vidtube.errors import require_text
from vidtube.models import Comment, Like, Video
from vidtube.utils.logging import get_logger

logger = get_logger(__name__)


async def add_comment(db: AsyncSession, video_id: uuid.UUID, owner_id: uuid.UUID, content: str | None) -> Comment:
    require_text(content=content)
    await get_or_404(db, Video, video_id, "Video")

    comment = Comment(content=content.strip(), video_id=video_id, owner_id=owner_id)
    db.add(comment)
    await db.commit()
    logger.info(f"User {owner_id} commented on video {video_id}")
    return comment


async def update_comment(
    db: AsyncSession, comment_id: uuid.UUID, principal_id: uuid.UUID, content: str | None
) -> Comment:
    require_text(content=content)
    comment = await get_owned_or_404(db, Comment, comment_id, principal_id, "Comment")
    comment.content = content.strip()
    await db.commit()
    return comment


async def delete_comment(db: AsyncSession, comment_id: uuid.UUID, principal_id: uuid.UUID) -> None:
    """Delete an owned comment and the likes on it."""
    comment = await get_owned_or_404(db, Comment, comment_id, principal_id, "Comment")
    await db.execute(delete(Like).where(Like.comment_id == comment_id))
    await db.delete(comment)
    await db.commit()
    logger.info(f"User {principal_id} deleted comment {comment_id}")

"""Comment listing for a video."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from vidtube.db.views.common import blob, comment_likes_count, present
from vidtube.errors import InvalidArgument, NotFound
from vidtube.models import Comment, User, Video
from vidtube.models.schemas import CommentItem, CommentOwner, CommentPage, CommentVideoSummary


async def get_video_comments(
    db: AsyncSession,
    video_id: uuid.UUID,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_PAGE_SIZE,
) -> CommentPage:
    """Comments on a video, newest first, with like counts."""
    if page < 1 or limit < 1:
        raise InvalidArgument("page and limit must be positive")
    if await db.get(Video, video_id) is None:
        raise NotFound("Video not found")

    stmt = (
        select(Comment, Video, User, comment_likes_count().label("comment_likes"))
        .outerjoin(Video, Video.id == Comment.video_id)
        .outerjoin(User, User.id == Comment.owner_id)
        .where(Comment.video_id == video_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    rows = (await db.execute(stmt)).all()
    rows = present(present(rows, "video comments", "video"), "video comments", "owner", index=2)

    comments = [
        CommentItem(
            id=comment.id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            video_details=CommentVideoSummary(
                id=video.id,
                title=video.title,
                thumbnail=blob(video.thumbnail_url, video.thumbnail_public_id),
                owner_id=video.owner_id,
            ),
            owner_details=CommentOwner(
                id=owner.id,
                username=owner.username,
                fullname=owner.fullname,
                avatar=owner.avatar_url,
                cover_image=owner.cover_image_url,
            ),
            comment_likes=likes,
        )
        for comment, video, owner, likes in rows
    ]
    return CommentPage(comments=comments, page=page, limit=limit)

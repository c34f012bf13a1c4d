"""Video feed and single-video views."""

import uuid

from sqlalchemy import func, literal, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, VIDEO_SORT_FIELDS
from vidtube.db.views.common import (
    blob,
    like_exists,
    owner_summary,
    present,
    subscribers_count,
    subscription_exists,
    video_comments_count,
    video_fields,
    video_likes_count,
)
from vidtube.errors import InvalidArgument, NotFound
from vidtube.models import User, Video
from vidtube.models.schemas import VideoDetail, VideoFeedItem, VideoOwner, VideoPage


def _sort_column(sort_by: str | None):
    if sort_by is None:
        return Video.created_at
    if sort_by not in VIDEO_SORT_FIELDS:
        raise InvalidArgument(f"Cannot sort by '{sort_by}'. Allowed: {', '.join(VIDEO_SORT_FIELDS)}")
    return getattr(Video, sort_by)


async def get_video_feed(
    db: AsyncSession,
    owner_id: uuid.UUID,
    query: str | None = None,
    sort_by: str | None = None,
    sort_type: str | None = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_PAGE_SIZE,
) -> VideoPage:
    """Published videos of one channel, with like and comment counts.

    Args:
        owner_id: Channel whose videos are listed
        query: Case-insensitive substring matched against title and description
        sort_by: One of VIDEO_SORT_FIELDS (default created_at)
        sort_type: "asc" or "desc" (default desc)
        page: 1-indexed page number
        limit: Page size
    """
    if page < 1 or limit < 1:
        raise InvalidArgument("page and limit must be positive")
    if sort_type not in (None, "asc", "desc"):
        raise InvalidArgument("sortType must be 'asc' or 'desc'")

    filters = [Video.owner_id == owner_id, Video.is_published.is_(True)]
    if query:
        pattern = f"%{query}%"
        filters.append(or_(Video.title.ilike(pattern), Video.description.ilike(pattern)))

    column = _sort_column(sort_by)
    # id as tie-breaker keeps pagination deterministic
    if sort_type == "asc":
        order = (column.asc(), Video.id.asc())
    else:
        order = (column.desc(), Video.id.desc())

    stmt = (
        select(
            Video,
            User,
            video_likes_count().label("likes"),
            video_comments_count().label("num_of_comments"),
        )
        .outerjoin(User, User.id == Video.owner_id)
        .where(*filters)
        .order_by(*order)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    total_stmt = select(func.count()).select_from(Video).where(*filters)

    rows = (await db.execute(stmt)).all()
    total = (await db.execute(total_stmt)).scalar_one()

    videos = [
        VideoFeedItem(
            id=video.id,
            video_file=blob(video.video_file_url, video.video_file_public_id),
            thumbnail=blob(video.thumbnail_url, video.thumbnail_public_id),
            title=video.title,
            description=video.description,
            duration=video.duration,
            views=video.views,
            likes=likes,
            num_of_comments=num_of_comments,
            owner_details=owner_summary(owner),
            created_at=video.created_at,
        )
        for video, owner, likes, num_of_comments in present(rows, "video feed", "owner")
    ]
    return VideoPage(videos=videos, page=page, limit=limit, total=total)


async def get_video_detail(
    db: AsyncSession,
    video_id: uuid.UUID,
    viewer_id: uuid.UUID | None = None,
) -> VideoDetail:
    """One video with owner, counts and the viewer's like/subscription state.

    Unpublished videos are only visible to their owner.
    """
    if viewer_id is None:
        is_liked = literal(False)
        is_subscribed = literal(False)
    else:
        is_liked = like_exists(viewer_id, Video.id)
        is_subscribed = subscription_exists(viewer_id, User.id)

    stmt = (
        select(
            Video,
            User,
            video_likes_count().label("likes"),
            video_comments_count().label("num_of_comments"),
            is_liked.label("is_liked"),
            subscribers_count().label("subscribers_count"),
            is_subscribed.label("is_subscribed"),
        )
        .outerjoin(User, User.id == Video.owner_id)
        .where(Video.id == video_id)
        # the view counter may have just been bumped with a bulk UPDATE
        .execution_options(populate_existing=True)
    )
    rows = present((await db.execute(stmt)).all(), "video detail", "owner")
    if not rows:
        raise NotFound("Video not found")

    video, owner, likes, num_of_comments, liked, subs, subscribed = rows[0]
    if not video.is_published and video.owner_id != viewer_id:
        raise NotFound("Video not found")

    summary = owner_summary(owner)
    return VideoDetail(
        **video_fields(video),
        likes=likes,
        num_of_comments=num_of_comments,
        is_liked=bool(liked),
        owner_details=VideoOwner(
            **summary.model_dump(),
            subscribers_count=subs,
            is_subscribed=bool(subscribed),
        ),
    )

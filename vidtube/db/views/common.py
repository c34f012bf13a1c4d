"""Building blocks shared by the read-model queries.

Counts are correlated ``COUNT(*)`` subqueries, so a parent row with no related
rows still appears with a count of 0. Single-object relations are loaded with
an outer join and flattened into a nested object; a row whose mandatory
relation is missing is dropped and logged.
"""

from collections.abc import Iterable
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, ScalarSelect, func, select

from vidtube.models import Comment, Like, Playlist, Subscription, Tweet, User, Video, playlist_videos
from vidtube.models.schemas import BlobRead, OwnerSummary, ProfileSummary, UserRead, VideoRead
from vidtube.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _count(source: Any, column: Any, key: ColumnElement) -> ScalarSelect:
    """COUNT(*) of ``source`` rows whose ``column`` equals the outer ``key``."""
    return select(func.count()).select_from(source).where(column == key).correlate_except(source).scalar_subquery()


def video_likes_count(video_id: ColumnElement = Video.id) -> ScalarSelect:
    return _count(Like, Like.video_id, video_id)


def video_comments_count(video_id: ColumnElement = Video.id) -> ScalarSelect:
    return _count(Comment, Comment.video_id, video_id)


def comment_likes_count(comment_id: ColumnElement = Comment.id) -> ScalarSelect:
    return _count(Like, Like.comment_id, comment_id)


def tweet_likes_count(tweet_id: ColumnElement = Tweet.id) -> ScalarSelect:
    return _count(Like, Like.tweet_id, tweet_id)


def subscribers_count(user_id: ColumnElement = User.id) -> ScalarSelect:
    """How many users subscribe to the channel ``user_id``."""
    return _count(Subscription, Subscription.channel_id, user_id)


def subscribed_to_count(user_id: ColumnElement = User.id) -> ScalarSelect:
    """How many channels ``user_id`` subscribes to."""
    return _count(Subscription, Subscription.subscriber_id, user_id)


def videos_count(user_id: ColumnElement = User.id) -> ScalarSelect:
    return _count(Video, Video.owner_id, user_id)


def tweets_count(user_id: ColumnElement = User.id) -> ScalarSelect:
    return _count(Tweet, Tweet.owner_id, user_id)


def playlists_count(user_id: ColumnElement = User.id) -> ScalarSelect:
    return _count(Playlist, Playlist.owner_id, user_id)


def playlist_videos_count(playlist_id: ColumnElement = Playlist.id) -> ScalarSelect:
    return _count(playlist_videos, playlist_videos.c.playlist_id, playlist_id)


def subscription_exists(subscriber_id: Any, channel_id: Any) -> ColumnElement[bool]:
    """EXISTS (subscriber_id -> channel_id)."""
    return (
        select(Subscription.id)
        .where(Subscription.subscriber_id == subscriber_id, Subscription.channel_id == channel_id)
        .correlate_except(Subscription)
        .exists()
    )


def like_exists(liked_by_id: Any, video_id: Any) -> ColumnElement[bool]:
    return select(Like.id).where(Like.liked_by_id == liked_by_id, Like.video_id == video_id).correlate_except(Like).exists()


def blob(url: str, public_id: str) -> BlobRead:
    return BlobRead(url=url, public_id=public_id)


def video_fields(video: Video) -> dict[str, Any]:
    """Stored video fields, with the blob columns folded into objects."""
    return {
        "id": video.id,
        "video_file": blob(video.video_file_url, video.video_file_public_id),
        "thumbnail": blob(video.thumbnail_url, video.thumbnail_public_id),
        "title": video.title,
        "description": video.description,
        "duration": video.duration,
        "views": video.views,
        "is_published": video.is_published,
        "owner_id": video.owner_id,
        "created_at": video.created_at,
        "updated_at": video.updated_at,
    }


def video_read(video: Video) -> VideoRead:
    return VideoRead(**video_fields(video))


def owner_summary(user: User) -> OwnerSummary:
    return OwnerSummary(id=user.id, username=user.username, fullname=user.fullname, avatar=user.avatar_url)


def profile_fields(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "fullname": user.fullname,
        "email": user.email,
        "avatar": user.avatar_url,
        "cover_image": user.cover_image_url,
    }


def profile_summary(user: User) -> ProfileSummary:
    return ProfileSummary(**profile_fields(user))


def user_read(user: User) -> UserRead:
    return UserRead(
        **profile_fields(user),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def present(rows: Iterable[T], view: str, relation: str, index: int = 1) -> list[T]:
    """Keep rows whose outer-joined ``relation`` (at ``index``) resolved.

    A missing mandatory relation means the row is malformed (dangling
    reference); it is dropped from the view rather than failing the request.
    """
    kept = []
    for row in rows:
        if row[index] is None:
            logger.warning(f"{view}: dropping row {_row_id(row[0])} with missing {relation}")
            continue
        kept.append(row)
    return kept


def _row_id(value: Any) -> Any:
    return getattr(value, "id", value)

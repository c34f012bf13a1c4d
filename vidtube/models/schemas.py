"""Pydantic schemas for API validation and serialization.

All schemas serialize with camelCase keys (``numOfComments``, ``ownerDetails``)
and accept either camelCase or snake_case on input.
"""

import uuid
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vidtube.constants import CONTENT_MAX_LENGTH, NAME_MAX_LENGTH

T = TypeVar("T")


class Schema(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Envelope
class ApiResponse(Schema, Generic[T]):
    """Uniform success envelope."""

    status_code: int = 200
    data: T
    message: str = "Success"
    success: bool = True


def ok(data: T, message: str = "Success", status_code: int = 200) -> ApiResponse[T]:
    """Wrap ``data`` in the success envelope."""
    return ApiResponse(status_code=status_code, data=data, message=message, success=status_code < 400)


class Empty(Schema):
    """Placeholder payload for endpoints that return nothing."""


# Shared pieces
class BlobRead(Schema):
    """Reference to a file in the blob store."""

    url: str
    public_id: str


class OwnerSummary(Schema):
    """Public display fields of a channel."""

    id: uuid.UUID
    username: str
    fullname: str
    avatar: str


class ProfileSummary(OwnerSummary):
    """Public profile including email and cover image."""

    email: str
    cover_image: str | None = None


# User schemas
class UserRead(Schema):
    """Current-user representation (never includes password or refresh token)."""

    id: uuid.UUID
    username: str
    email: str
    fullname: str
    avatar: str
    cover_image: str | None = None
    created_at: datetime
    updated_at: datetime


class LoginRequest(Schema):
    """Login with either email or username."""

    email: str | None = None
    username: str | None = None
    password: str


class LoginResult(Schema):
    """Login / token refresh result."""

    user: UserRead | None = None
    access_token: str
    refresh_token: str


class RefreshTokenRequest(Schema):
    refresh_token: str | None = None


class PasswordChange(Schema):
    old_password: str
    new_password: str = Field(min_length=8)
    confirm_password: str


class AccountUpdate(Schema):
    """Partial account update; at least one field must be set."""

    username: str | None = None
    fullname: str | None = None
    email: str | None = None


class ChannelProfile(ProfileSummary):
    """Channel page header."""

    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool


# Video schemas
class VideoRead(Schema):
    """Stored video fields."""

    id: uuid.UUID
    video_file: BlobRead
    thumbnail: BlobRead
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class VideoFeedItem(Schema):
    """Video summary on the public feed."""

    id: uuid.UUID
    video_file: BlobRead
    thumbnail: BlobRead
    title: str
    description: str
    duration: float
    views: int
    likes: int
    num_of_comments: int
    owner_details: OwnerSummary
    created_at: datetime


class VideoPage(Schema):
    videos: list[VideoFeedItem]
    page: int
    limit: int
    total: int


class VideoOwner(OwnerSummary):
    subscribers_count: int
    is_subscribed: bool


class VideoDetail(VideoRead):
    """Single video page."""

    likes: int
    num_of_comments: int
    is_liked: bool
    owner_details: VideoOwner


class PublishStatus(Schema):
    id: uuid.UUID
    is_published: bool


class VideoWithOwner(VideoRead):
    """Video with its flattened owner, used by history and liked lists."""

    owner_details: OwnerSummary


class ChannelVideoItem(VideoRead):
    """Dashboard row for one of the principal's own videos."""

    likes: int
    num_of_comments: int


# Subscription schemas
class SubscriptionRead(Schema):
    id: uuid.UUID
    subscriber_id: uuid.UUID
    channel_id: uuid.UUID
    created_at: datetime


class SubscriptionStatus(Schema):
    subscribed: bool
    subscription: SubscriptionRead | None = None


class SubscriberItem(ProfileSummary):
    """Someone subscribed to the queried channel."""

    subscribers_count: int
    is_subscribed_to_subscriber: bool


class SubscribedChannelItem(ProfileSummary):
    """A channel the queried user subscribes to."""

    subscribers_count: int
    channels_subscribed_to_count: int
    videos_count: int
    latest_video: VideoRead | None = None


# Comment schemas
class CommentCreate(Schema):
    content: str = Field(max_length=CONTENT_MAX_LENGTH)


class CommentRead(Schema):
    id: uuid.UUID
    content: str
    video_id: uuid.UUID
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class CommentVideoSummary(Schema):
    id: uuid.UUID
    title: str
    thumbnail: BlobRead
    owner_id: uuid.UUID


class CommentOwner(Schema):
    id: uuid.UUID
    username: str
    fullname: str
    avatar: str
    cover_image: str | None = None


class CommentItem(Schema):
    id: uuid.UUID
    content: str
    created_at: datetime
    updated_at: datetime
    video_details: CommentVideoSummary
    owner_details: CommentOwner
    comment_likes: int


class CommentPage(Schema):
    comments: list[CommentItem]
    page: int
    limit: int


# Like schemas
class LikeRead(Schema):
    id: uuid.UUID
    liked_by_id: uuid.UUID
    video_id: uuid.UUID | None = None
    comment_id: uuid.UUID | None = None
    tweet_id: uuid.UUID | None = None
    created_at: datetime


class LikeStatus(Schema):
    liked: bool
    like: LikeRead | None = None


class LikedVideoItem(Schema):
    liked_at: datetime
    video: VideoWithOwner


# Tweet schemas
class TweetCreate(Schema):
    content: str = Field(max_length=CONTENT_MAX_LENGTH)


class TweetRead(Schema):
    id: uuid.UUID
    content: str
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class TweetItem(Schema):
    id: uuid.UUID
    content: str
    created_at: datetime
    owner_details: OwnerSummary
    num_of_tweets_by_owner: int
    likes: int


# Playlist schemas
class PlaylistCreate(Schema):
    name: str = Field(max_length=NAME_MAX_LENGTH)
    description: str


class PlaylistUpdate(PlaylistCreate):
    pass


class PlaylistRead(Schema):
    id: uuid.UUID
    name: str
    description: str
    owner_id: uuid.UUID
    video_ids: list[uuid.UUID] = []
    created_at: datetime
    updated_at: datetime


class PlaylistVideo(Schema):
    """Video inside a playlist (no publish flag or update timestamp)."""

    id: uuid.UUID
    video_file: BlobRead
    thumbnail: BlobRead
    title: str
    description: str
    duration: float
    views: int
    owner_id: uuid.UUID
    created_at: datetime


class PlaylistOwner(Schema):
    id: uuid.UUID
    username: str
    fullname: str
    avatar: str
    cover_image: str | None = None


class PlaylistDetail(Schema):
    id: uuid.UUID
    name: str
    description: str
    created_at: datetime
    owner_details: PlaylistOwner
    videos: list[PlaylistVideo]
    num_of_videos: int


class UserPlaylistOwner(OwnerSummary):
    num_of_playlists: int


class UserPlaylistItem(Schema):
    id: uuid.UUID
    name: str
    description: str
    created_at: datetime
    owner_details: UserPlaylistOwner
    num_of_videos: int


# Dashboard schemas
class ChannelStats(Schema):
    total_subscribers: int
    total_likes: int
    total_videos: int
    total_views: int

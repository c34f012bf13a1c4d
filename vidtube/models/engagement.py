"""Comments, tweets, likes and subscriptions."""

import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Comment(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Comment on a video."""

    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text)
    video_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("videos.id", ondelete="CASCADE"), index=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, video_id={self.video_id})>"


class Tweet(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Short text post on a channel."""

    __tablename__ = "tweets"

    content: Mapped[str] = mapped_column(Text)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    def __repr__(self) -> str:
        return f"<Tweet(id={self.id}, owner_id={self.owner_id})>"


class Like(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A user's like on exactly one video, comment or tweet.

    The row's presence means "liked". The unique constraints make the
    (liker, target) pair the natural key used by the toggle.
    """

    __tablename__ = "likes"

    liked_by_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    video_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("videos.id", ondelete="CASCADE"), nullable=True, index=True
    )
    comment_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True
    )
    tweet_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True, index=True
    )

    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_like_single_target",
        ),
        UniqueConstraint("liked_by_id", "video_id", name="uq_like_user_video"),
        UniqueConstraint("liked_by_id", "comment_id", name="uq_like_user_comment"),
        UniqueConstraint("liked_by_id", "tweet_id", name="uq_like_user_tweet"),
    )

    def __repr__(self) -> str:
        target = self.video_id or self.comment_id or self.tweet_id
        return f"<Like(id={self.id}, liked_by_id={self.liked_by_id}, target={target})>"


class Subscription(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """subscriber follows channel (both are users)."""

    __tablename__ = "subscriptions"

    subscriber_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    channel_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscription_pair"),
        Index("ix_subscription_channel_created", "channel_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Subscription(subscriber_id={self.subscriber_id}, channel_id={self.channel_id})>"

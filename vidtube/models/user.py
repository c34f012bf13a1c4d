"""User model."""

from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidtube.constants import USERNAME_MAX_LENGTH
from vidtube.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow

if TYPE_CHECKING:
    from vidtube.models.video import Video


# Watch history: one row per (user, video), watched_at refreshed on every view
watch_history = Table(
    "watch_history",
    Base.metadata,
    Column("user_id", Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("video_id", Uuid, ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True),
    Column("watched_at", DateTime(timezone=True), default=utcnow, nullable=False),
)


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Account and channel.

    Every user is also a channel: other users subscribe to it and it owns
    videos, tweets and playlists.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    fullname: Mapped[str] = mapped_column(String(255))
    password_hash: Mapped[str] = mapped_column(String(255))

    # Blob references (public id is needed to delete the blob later)
    avatar_url: Mapped[str] = mapped_column(String(2000))
    avatar_public_id: Mapped[str] = mapped_column(String(255))
    cover_image_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    cover_image_public_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    refresh_token: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Relationships
    videos: Mapped[list["Video"]] = relationship(
        "Video",
        back_populates="owner",
        cascade="all, delete-orphan",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"


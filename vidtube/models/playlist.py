"""Playlist model."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from vidtube.constants import NAME_MAX_LENGTH
from vidtube.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow

# The composite primary key gives playlists set semantics
playlist_videos = Table(
    "playlist_videos",
    Base.metadata,
    Column("playlist_id", Uuid, ForeignKey("playlists.id", ondelete="CASCADE"), primary_key=True),
    Column("video_id", Uuid, ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True),
    Column("added_at", DateTime(timezone=True), default=utcnow, nullable=False),
)


class Playlist(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Named, ordered set of videos curated by a user."""

    __tablename__ = "playlists"

    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH))
    description: Mapped[str] = mapped_column(Text)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    def __repr__(self) -> str:
        return f"<Playlist(id={self.id}, name={self.name})>"

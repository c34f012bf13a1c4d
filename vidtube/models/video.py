"""Video model."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vidtube.constants import TITLE_MAX_LENGTH
from vidtube.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from vidtube.models.user import User


class Video(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Uploaded video owned by a channel."""

    __tablename__ = "videos"

    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    video_file_url: Mapped[str] = mapped_column(String(2000))
    video_file_public_id: Mapped[str] = mapped_column(String(255))
    thumbnail_url: Mapped[str] = mapped_column(String(2000))
    thumbnail_public_id: Mapped[str] = mapped_column(String(255))

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH))
    description: Mapped[str] = mapped_column(Text)
    duration: Mapped[float] = mapped_column(Float, default=0.0)  # seconds
    views: Mapped[int] = mapped_column(Integer, default=0)
    is_published: Mapped[bool] = mapped_column(default=False)

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="videos")

    __table_args__ = (
        Index("ix_video_owner_published_created", "owner_id", "is_published", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, title={self.title})>"

"""SQLAlchemy models."""

from vidtube.models.base import Base
from vidtube.models.engagement import Comment, Like, Subscription, Tweet
from vidtube.models.playlist import Playlist, playlist_videos
from vidtube.models.user import User, watch_history
from vidtube.models.video import Video

__all__ = [
    "Base",
    "User",
    "Video",
    "Comment",
    "Tweet",
    "Like",
    "Subscription",
    "Playlist",
    "playlist_videos",
    "watch_history",
]

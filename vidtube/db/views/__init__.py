"""Read-model queries: joined, counted and flattened views for the API."""

from vidtube.db.views.channels import (
    get_channel_profile,
    get_channel_subscribers,
    get_subscribed_channels,
    get_watch_history,
)
from vidtube.db.views.comments import get_video_comments
from vidtube.db.views.dashboard import get_channel_stats, get_channel_videos
from vidtube.db.views.likes import get_liked_videos
from vidtube.db.views.playlists import get_playlist_detail, get_user_playlists
from vidtube.db.views.tweets import get_user_tweets
from vidtube.db.views.videos import get_video_detail, get_video_feed

__all__ = [
    "get_channel_profile",
    "get_channel_stats",
    "get_channel_subscribers",
    "get_channel_videos",
    "get_liked_videos",
    "get_playlist_detail",
    "get_subscribed_channels",
    "get_user_playlists",
    "get_user_tweets",
    "get_video_comments",
    "get_video_detail",
    "get_video_feed",
    "get_watch_history",
]

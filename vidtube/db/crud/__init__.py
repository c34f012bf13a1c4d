"""CRUD operations module."""

from vidtube.db.crud.comments import add_comment, delete_comment, update_comment
from vidtube.db.crud.engagement import (
    toggle_comment_like,
    toggle_subscription,
    toggle_tweet_like,
    toggle_video_like,
)
from vidtube.db.crud.playlists import (
    add_video_to_playlist,
    create_playlist,
    delete_playlist,
    playlist_read,
    remove_video_from_playlist,
    update_playlist,
)
from vidtube.db.crud.tweets import create_tweet, delete_tweet, update_tweet
from vidtube.db.crud.users import (
    change_password,
    get_user_by_login,
    login,
    logout,
    refresh_tokens,
    register_user,
    update_account,
    update_avatar,
    update_cover_image,
)
from vidtube.db.crud.videos import (
    delete_video,
    publish_video,
    record_watch,
    toggle_publish_status,
    update_video,
    watch_video,
)

__all__ = [
    "add_comment",
    "add_video_to_playlist",
    "change_password",
    "create_playlist",
    "create_tweet",
    "delete_comment",
    "delete_playlist",
    "delete_tweet",
    "delete_video",
    "get_user_by_login",
    "login",
    "logout",
    "playlist_read",
    "publish_video",
    "record_watch",
    "refresh_tokens",
    "register_user",
    "remove_video_from_playlist",
    "toggle_comment_like",
    "toggle_publish_status",
    "toggle_subscription",
    "toggle_tweet_like",
    "toggle_video_like",
    "update_account",
    "update_avatar",
    "update_comment",
    "update_cover_image",
    "update_playlist",
    "update_tweet",
    "update_video",
    "watch_video",
]

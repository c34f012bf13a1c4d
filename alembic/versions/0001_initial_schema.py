"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('fullname', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('avatar_url', sa.String(length=2000), nullable=False),
        sa.Column('avatar_public_id', sa.String(length=255), nullable=False),
        sa.Column('cover_image_url', sa.String(length=2000), nullable=True),
        sa.Column('cover_image_public_id', sa.String(length=255), nullable=True),
        sa.Column('refresh_token', sa.String(length=1000), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_created_at', 'users', ['created_at'], unique=False)

    op.create_table(
        'videos',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('video_file_url', sa.String(length=2000), nullable=False),
        sa.Column('video_file_public_id', sa.String(length=255), nullable=False),
        sa.Column('thumbnail_url', sa.String(length=2000), nullable=False),
        sa.Column('thumbnail_public_id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_videos_owner_id', 'videos', ['owner_id'], unique=False)
    op.create_index('ix_videos_created_at', 'videos', ['created_at'], unique=False)
    # Channel page: published videos of one owner, newest first
    op.create_index(
        'ix_video_owner_published_created',
        'videos',
        ['owner_id', 'is_published', 'created_at'],
        unique=False
    )

    op.create_table(
        'comments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('video_id', sa.Uuid(), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_comments_video_id', 'comments', ['video_id'], unique=False)
    op.create_index('ix_comments_owner_id', 'comments', ['owner_id'], unique=False)
    op.create_index('ix_comments_created_at', 'comments', ['created_at'], unique=False)

    op.create_table(
        'tweets',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_tweets_owner_id', 'tweets', ['owner_id'], unique=False)
    op.create_index('ix_tweets_created_at', 'tweets', ['created_at'], unique=False)

    op.create_table(
        'likes',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('liked_by_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('video_id', sa.Uuid(), sa.ForeignKey('videos.id', ondelete='CASCADE'), nullable=True),
        sa.Column('comment_id', sa.Uuid(), sa.ForeignKey('comments.id', ondelete='CASCADE'), nullable=True),
        sa.Column('tweet_id', sa.Uuid(), sa.ForeignKey('tweets.id', ondelete='CASCADE'), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            '(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END'
            ' + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END'
            ' + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END) = 1',
            name='ck_like_single_target',
        ),
        sa.UniqueConstraint('liked_by_id', 'video_id', name='uq_like_user_video'),
        sa.UniqueConstraint('liked_by_id', 'comment_id', name='uq_like_user_comment'),
        sa.UniqueConstraint('liked_by_id', 'tweet_id', name='uq_like_user_tweet'),
    )
    op.create_index('ix_likes_liked_by_id', 'likes', ['liked_by_id'], unique=False)
    op.create_index('ix_likes_video_id', 'likes', ['video_id'], unique=False)
    op.create_index('ix_likes_comment_id', 'likes', ['comment_id'], unique=False)
    op.create_index('ix_likes_tweet_id', 'likes', ['tweet_id'], unique=False)
    op.create_index('ix_likes_created_at', 'likes', ['created_at'], unique=False)

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('subscriber_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('channel_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscription_pair'),
    )
    op.create_index('ix_subscriptions_subscriber_id', 'subscriptions', ['subscriber_id'], unique=False)
    op.create_index('ix_subscriptions_channel_id', 'subscriptions', ['channel_id'], unique=False)
    op.create_index('ix_subscriptions_created_at', 'subscriptions', ['created_at'], unique=False)
    op.create_index(
        'ix_subscription_channel_created',
        'subscriptions',
        ['channel_id', 'created_at'],
        unique=False
    )

    op.create_table(
        'playlists',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_playlists_owner_id', 'playlists', ['owner_id'], unique=False)
    op.create_index('ix_playlists_created_at', 'playlists', ['created_at'], unique=False)

    op.create_table(
        'playlist_videos',
        sa.Column('playlist_id', sa.Uuid(), sa.ForeignKey('playlists.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('video_id', sa.Uuid(), sa.ForeignKey('videos.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('added_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'watch_history',
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('video_id', sa.Uuid(), sa.ForeignKey('videos.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('watched_at', sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('watch_history')
    op.drop_table('playlist_videos')
    op.drop_table('playlists')
    op.drop_table('subscriptions')
    op.drop_table('likes')
    op.drop_table('tweets')
    op.drop_table('comments')
    op.drop_table('videos')
    op.drop_table('users')

"""Tests for /api/v1/likes endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import create_comment, create_tweet, create_video, like
from vidtube.models import Like
from vidtube.models.user import User


async def like_count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Like))).scalar_one()


class TestLikeEndpoints:
    """Tests for /api/v1/likes."""

    @pytest.mark.asyncio
    async def test_toggle_video_like_twice_restores_state(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, test_user: User, other_user: User
    ):
        video = await create_video(db_session, other_user)

        response = await authenticated_client.post(f"/api/v1/likes/toggle/v/{video.id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["liked"] is True
        assert data["like"]["videoId"] == str(video.id)
        assert data["like"]["likedById"] == str(test_user.id)
        assert await like_count(db_session) == 1

        response = await authenticated_client.post(f"/api/v1/likes/toggle/v/{video.id}")
        assert response.json()["data"] == {"liked": False, "like": None}
        assert await like_count(db_session) == 0

    @pytest.mark.asyncio
    async def test_toggle_comment_like(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, other_user: User
    ):
        video = await create_video(db_session, other_user)
        comment = await create_comment(db_session, video, other_user)

        response = await authenticated_client.post(f"/api/v1/likes/toggle/c/{comment.id}")
        data = response.json()["data"]
        assert data["liked"] is True
        assert data["like"]["commentId"] == str(comment.id)
        assert data["like"]["videoId"] is None

    @pytest.mark.asyncio
    async def test_toggle_tweet_like(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, other_user: User
    ):
        tweet = await create_tweet(db_session, other_user)

        first = await authenticated_client.post(f"/api/v1/likes/toggle/t/{tweet.id}")
        second = await authenticated_client.post(f"/api/v1/likes/toggle/t/{tweet.id}")
        assert first.json()["data"]["liked"] is True
        assert second.json()["data"]["liked"] is False

    @pytest.mark.asyncio
    async def test_likes_are_per_user(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, test_user: User, other_user: User
    ):
        """Test that toggling off only removes the caller's own like."""
        video = await create_video(db_session, other_user)
        await like(db_session, other_user, video_id=video.id)

        response = await authenticated_client.post(f"/api/v1/likes/toggle/v/{video.id}")
        assert response.json()["data"]["liked"] is True
        assert await like_count(db_session) == 2

        await authenticated_client.post(f"/api/v1/likes/toggle/v/{video.id}")
        remaining = (await db_session.execute(select(Like.liked_by_id))).scalars().all()
        assert remaining == [other_user.id]

    @pytest.mark.asyncio
    async def test_toggle_missing_targets(self, authenticated_client: AsyncClient):
        missing = "00000000-0000-0000-0000-000000000000"
        for kind in ("v", "c", "t"):
            response = await authenticated_client.post(f"/api/v1/likes/toggle/{kind}/{missing}")
            assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_toggle_malformed_id(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/likes/toggle/v/xyz")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_toggle_unauthenticated(self, client: AsyncClient, db_session: AsyncSession, other_user: User):
        video = await create_video(db_session, other_user)

        response = await client.post(f"/api/v1/likes/toggle/v/{video.id}")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_liked_videos_newest_like_first(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, test_user: User, other_user: User
    ):
        """Test that only video likes are listed, most recent like first."""
        first = await create_video(db_session, other_user, title="First")
        second = await create_video(db_session, other_user, title="Second")
        comment = await create_comment(db_session, first, other_user)
        await like(db_session, test_user, video_id=second.id)
        await like(db_session, test_user, video_id=first.id)
        await like(db_session, test_user, comment_id=comment.id)
        await like(db_session, other_user, video_id=second.id)

        response = await authenticated_client.get("/api/v1/likes/videos")
        assert response.status_code == 200
        items = response.json()["data"]
        assert [item["video"]["title"] for item in items] == ["First", "Second"]
        assert items[0]["video"]["ownerDetails"]["username"] == "otheruser"
        assert items[0]["likedAt"]

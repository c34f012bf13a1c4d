"""Tests for /api/v1/comments endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import create_comment, create_video, like
from vidtube.models import Comment, Like
from vidtube.models.user import User


class TestCommentEndpoints:
    """Tests for /api/v1/comments."""

    @pytest.mark.asyncio
    async def test_add_comment_newest_first(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, other_user: User
    ):
        """Test that a new comment is listed first with no likes."""
        video = await create_video(db_session, other_user)
        await create_comment(db_session, video, other_user, content="first!")

        response = await authenticated_client.post(f"/api/v1/comments/{video.id}", json={"content": "nice!"})
        assert response.status_code == 201
        assert response.json()["data"]["content"] == "nice!"

        response = await authenticated_client.get(f"/api/v1/comments/{video.id}")
        assert response.status_code == 200
        comments = response.json()["data"]["comments"]
        assert [c["content"] for c in comments] == ["nice!", "first!"]
        assert comments[0]["commentLikes"] == 0
        assert comments[0]["ownerDetails"]["username"] == "testuser"
        assert comments[0]["videoDetails"]["id"] == str(video.id)
        assert comments[0]["videoDetails"]["ownerId"] == str(other_user.id)

    @pytest.mark.asyncio
    async def test_empty_comment_rejected(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, test_user: User
    ):
        video = await create_video(db_session, test_user)

        response = await authenticated_client.post(f"/api/v1/comments/{video.id}", json={"content": "   "})
        assert response.status_code == 400
        count = (await db_session.execute(select(func.count()).select_from(Comment))).scalar_one()
        assert count == 0

    @pytest.mark.asyncio
    async def test_missing_content_rejected(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, test_user: User
    ):
        video = await create_video(db_session, test_user)

        response = await authenticated_client.post(f"/api/v1/comments/{video.id}", json={})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "content"

    @pytest.mark.asyncio
    async def test_comment_on_missing_video(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(
            "/api/v1/comments/00000000-0000-0000-0000-000000000000", json={"content": "hello"}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_comments_with_likes_and_pagination(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        test_user: User,
        other_user: User,
    ):
        video = await create_video(db_session, test_user)
        oldest = await create_comment(db_session, video, other_user, content="one")
        await create_comment(db_session, video, other_user, content="two")
        await create_comment(db_session, video, other_user, content="three")
        await like(db_session, test_user, comment_id=oldest.id)
        await like(db_session, other_user, comment_id=oldest.id)

        response = await client.get(f"/api/v1/comments/{video.id}", params={"page": 2, "limit": 2})
        page = response.json()["data"]
        assert page["page"] == 2
        assert page["limit"] == 2
        [item] = page["comments"]
        assert item["content"] == "one"
        assert item["commentLikes"] == 2
        assert item["ownerDetails"]["coverImage"] is None

    @pytest.mark.asyncio
    async def test_list_comments_missing_video(self, client: AsyncClient):
        response = await client.get("/api/v1/comments/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_comments_malformed_id(self, client: AsyncClient):
        response = await client.get("/api/v1/comments/123")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_comment(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, test_user: User
    ):
        video = await create_video(db_session, test_user)
        comment = await create_comment(db_session, video, test_user, content="typo")

        response = await authenticated_client.patch(f"/api/v1/comments/c/{comment.id}", json={"content": "fixed"})
        assert response.status_code == 200
        assert response.json()["data"]["content"] == "fixed"

    @pytest.mark.asyncio
    async def test_update_comment_not_owner(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, other_user: User
    ):
        video = await create_video(db_session, other_user)
        comment = await create_comment(db_session, video, other_user, content="mine")

        response = await authenticated_client.patch(f"/api/v1/comments/c/{comment.id}", json={"content": "yours"})
        assert response.status_code == 403
        assert comment.content == "mine"

    @pytest.mark.asyncio
    async def test_delete_comment_removes_its_likes(
        self,
        authenticated_client: AsyncClient,
        db_session: AsyncSession,
        test_user: User,
        other_user: User,
    ):
        video = await create_video(db_session, other_user)
        comment = await create_comment(db_session, video, test_user)
        await like(db_session, other_user, comment_id=comment.id)

        response = await authenticated_client.delete(f"/api/v1/comments/c/{comment.id}")
        assert response.status_code == 200
        assert (await db_session.execute(select(func.count()).select_from(Comment))).scalar_one() == 0
        assert (await db_session.execute(select(func.count()).select_from(Like))).scalar_one() == 0

    @pytest.mark.asyncio
    async def test_delete_comment_not_owner(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, other_user: User
    ):
        video = await create_video(db_session, other_user)
        comment = await create_comment(db_session, video, other_user)

        response = await authenticated_client.delete(f"/api/v1/comments/c/{comment.id}")
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, authenticated_client: AsyncClient):
        response = await authenticated_client.delete("/api/v1/comments/c/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404

"""Tests for /api/v1/tweets endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import create_tweet, like
from vidtube.models.user import User


class TestTweetEndpoints:
    """Tests for /api/v1/tweets."""

    @pytest.mark.asyncio
    async def test_create_tweet(self, authenticated_client: AsyncClient, test_user: User):
        response = await authenticated_client.post("/api/v1/tweets", json={"content": "first post"})
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["content"] == "first post"
        assert data["ownerId"] == str(test_user.id)

    @pytest.mark.asyncio
    async def test_create_empty_tweet(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post("/api/v1/tweets", json={"content": ""})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_user_tweets(
        self, client: AsyncClient, db_session: AsyncSession, test_user: User, other_user: User
    ):
        older = await create_tweet(db_session, test_user, content="older")
        await create_tweet(db_session, test_user, content="newer")
        await create_tweet(db_session, other_user, content="someone else")
        await like(db_session, other_user, tweet_id=older.id)

        response = await client.get(f"/api/v1/tweets/user/{test_user.id}")
        assert response.status_code == 200
        tweets = response.json()["data"]
        assert [t["content"] for t in tweets] == ["newer", "older"]
        assert all(t["numOfTweetsByOwner"] == 2 for t in tweets)
        assert [t["likes"] for t in tweets] == [0, 1]
        assert tweets[0]["ownerDetails"]["username"] == "testuser"

    @pytest.mark.asyncio
    async def test_user_tweets_unknown_user(self, client: AsyncClient):
        response = await client.get("/api/v1/tweets/user/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_tweet(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, test_user: User
    ):
        tweet = await create_tweet(db_session, test_user, content="draft")

        response = await authenticated_client.patch(f"/api/v1/tweets/{tweet.id}", json={"content": "final"})
        assert response.status_code == 200
        assert response.json()["data"]["content"] == "final"

    @pytest.mark.asyncio
    async def test_update_tweet_not_owner(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, other_user: User
    ):
        tweet = await create_tweet(db_session, other_user, content="theirs")

        response = await authenticated_client.patch(f"/api/v1/tweets/{tweet.id}", json={"content": "mine"})
        assert response.status_code == 403
        assert tweet.content == "theirs"

    @pytest.mark.asyncio
    async def test_delete_tweet(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, test_user: User, other_user: User
    ):
        tweet = await create_tweet(db_session, test_user)
        await like(db_session, other_user, tweet_id=tweet.id)

        response = await authenticated_client.delete(f"/api/v1/tweets/{tweet.id}")
        assert response.status_code == 200

        response = await authenticated_client.get(f"/api/v1/tweets/user/{test_user.id}")
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_delete_tweet_not_owner(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, other_user: User
    ):
        tweet = await create_tweet(db_session, other_user)

        response = await authenticated_client.delete(f"/api/v1/tweets/{tweet.id}")
        assert response.status_code == 403

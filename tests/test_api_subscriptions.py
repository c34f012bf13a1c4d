"""Tests for /api/v1/subscriptions endpoints."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import create_video, make_user, subscribe
from vidtube.models import Subscription
from vidtube.models.user import User


class TestSubscriptionEndpoints:
    """Tests for /api/v1/subscriptions."""

    @pytest.mark.asyncio
    async def test_toggle_subscription(
        self, authenticated_client: AsyncClient, db_session: AsyncSession, test_user: User, other_user: User
    ):
        response = await authenticated_client.post(f"/api/v1/subscriptions/c/{other_user.id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["subscribed"] is True
        assert data["subscription"]["subscriberId"] == str(test_user.id)
        assert data["subscription"]["channelId"] == str(other_user.id)

        response = await authenticated_client.post(f"/api/v1/subscriptions/c/{other_user.id}")
        assert response.json()["data"] == {"subscribed": False, "subscription": None}
        count = (await db_session.execute(select(func.count()).select_from(Subscription))).scalar_one()
        assert count == 0

    @pytest.mark.asyncio
    async def test_cannot_subscribe_to_self(self, authenticated_client: AsyncClient, test_user: User):
        response = await authenticated_client.post(f"/api/v1/subscriptions/c/{test_user.id}")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_subscribe_to_missing_channel(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(
            "/api/v1/subscriptions/c/00000000-0000-0000-0000-000000000000"
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_channel_subscribers(
        self, client: AsyncClient, db_session: AsyncSession, test_user: User, other_user: User
    ):
        """Test the subscriber list and whether the channel subscribes back."""
        third = make_user("thirduser", "third@example.com")
        db_session.add(third)
        await db_session.commit()

        await subscribe(db_session, other_user, test_user)
        await subscribe(db_session, third, test_user)
        await subscribe(db_session, test_user, other_user)

        response = await client.get(f"/api/v1/subscriptions/c/{test_user.id}")
        assert response.status_code == 200
        subscribers = response.json()["data"]
        assert [s["username"] for s in subscribers] == ["thirduser", "otheruser"]

        by_name = {s["username"]: s for s in subscribers}
        assert by_name["otheruser"]["isSubscribedToSubscriber"] is True
        assert by_name["otheruser"]["subscribersCount"] == 1
        assert by_name["thirduser"]["isSubscribedToSubscriber"] is False
        assert by_name["thirduser"]["subscribersCount"] == 0

    @pytest.mark.asyncio
    async def test_channel_subscribers_missing_channel(self, client: AsyncClient):
        response = await client.get("/api/v1/subscriptions/c/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_subscribed_channels(
        self, client: AsyncClient, db_session: AsyncSession, test_user: User, other_user: User
    ):
        await create_video(db_session, other_user, title="Older")
        await create_video(db_session, other_user, title="Latest")
        await subscribe(db_session, test_user, other_user)

        response = await client.get(f"/api/v1/subscriptions/u/{test_user.id}")
        assert response.status_code == 200
        [channel] = response.json()["data"]
        assert channel["username"] == "otheruser"
        assert channel["subscribersCount"] == 1
        assert channel["channelsSubscribedToCount"] == 0
        assert channel["videosCount"] == 2
        assert channel["latestVideo"]["title"] == "Latest"

    @pytest.mark.asyncio
    async def test_subscribed_channel_without_videos(
        self, client: AsyncClient, db_session: AsyncSession, test_user: User, other_user: User
    ):
        await subscribe(db_session, test_user, other_user)

        response = await client.get(f"/api/v1/subscriptions/u/{test_user.id}")
        [channel] = response.json()["data"]
        assert channel["videosCount"] == 0
        assert channel["latestVideo"] is None

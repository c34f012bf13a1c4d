"""Tests for the toggle helper behind likes and subscriptions."""

import pytest
from sqlalchemy import delete as sa_delete
from sqlalchemy import false, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import create_video, subscribe
from vidtube.db import toggle as toggle_module
from vidtube.db.toggle import toggle
from vidtube.models import Like, Subscription
from vidtube.models.user import User


async def count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


class TestToggle:
    @pytest.mark.asyncio
    async def test_insert_then_delete(self, db_session: AsyncSession, test_user: User, other_user: User):
        result = await toggle(db_session, Subscription, subscriber_id=test_user.id, channel_id=other_user.id)
        await db_session.commit()
        assert result.active is True
        assert result.record.channel_id == other_user.id
        assert await count(db_session, Subscription) == 1

        result = await toggle(db_session, Subscription, subscriber_id=test_user.id, channel_id=other_user.id)
        await db_session.commit()
        assert result.active is False
        assert result.record is None
        assert await count(db_session, Subscription) == 0

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, db_session: AsyncSession, test_user: User, other_user: User):
        video = await create_video(db_session, other_user)

        await toggle(db_session, Like, liked_by_id=test_user.id, video_id=video.id)
        await toggle(db_session, Like, liked_by_id=other_user.id, video_id=video.id)
        await db_session.commit()
        assert await count(db_session, Like) == 2

        await toggle(db_session, Like, liked_by_id=test_user.id, video_id=video.id)
        await db_session.commit()
        remaining = (await db_session.execute(select(Like.liked_by_id))).scalars().all()
        assert remaining == [other_user.id]

    @pytest.mark.asyncio
    async def test_concurrent_insert_keeps_single_row(
        self, db_session: AsyncSession, test_user: User, other_user: User, monkeypatch
    ):
        """Test that a row inserted between our delete and insert leaves the toggle on."""
        await subscribe(db_session, test_user, other_user)

        def delete_nothing(model):
            # The other request's row appears after our delete ran
            return sa_delete(model).where(false())

        monkeypatch.setattr(toggle_module, "delete", delete_nothing)
        result = await toggle(db_session, Subscription, subscriber_id=test_user.id, channel_id=other_user.id)
        await db_session.commit()

        assert result.active is True
        assert result.record is None
        assert await count(db_session, Subscription) == 1

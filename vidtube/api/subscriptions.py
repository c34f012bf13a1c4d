"""Subscription endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth import CurrentUser
from vidtube.db import crud, get_db
from vidtube.db.views import get_channel_subscribers, get_subscribed_channels
from vidtube.errors import parse_id
from vidtube.models.schemas import (
    ApiResponse,
    SubscribedChannelItem,
    SubscriberItem,
    SubscriptionRead,
    SubscriptionStatus,
    ok,
)

router = APIRouter()


@router.post("/c/{channel_id}", response_model=ApiResponse[SubscriptionStatus])
async def toggle_subscription(
    channel_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[SubscriptionStatus]:
    """Subscribe to a channel, or unsubscribe if already subscribed."""
    result = await crud.toggle_subscription(db, parse_id(channel_id, "channelId"), user.id)
    subscription = SubscriptionRead.model_validate(result.record) if result.record is not None else None
    message = "Subscribed successfully" if result.active else "Unsubscribed successfully"
    return ok(SubscriptionStatus(subscribed=result.active, subscription=subscription), message)


@router.get("/c/{channel_id}", response_model=ApiResponse[list[SubscriberItem]])
async def channel_subscribers(
    channel_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[SubscriberItem]]:
    subscribers = await get_channel_subscribers(db, parse_id(channel_id, "channelId"))
    return ok(subscribers, "Subscribers fetched successfully")


@router.get("/u/{subscriber_id}", response_model=ApiResponse[list[SubscribedChannelItem]])
async def subscribed_channels(
    subscriber_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[SubscribedChannelItem]]:
    channels = await get_subscribed_channels(db, parse_id(subscriber_id, "subscriberId"))
    return ok(channels, "Subscribed channels fetched successfully")

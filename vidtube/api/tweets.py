"""Tweet endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth import CurrentUser
from vidtube.db import crud, get_db
from vidtube.db.views import get_user_tweets
from vidtube.errors import parse_id
from vidtube.models.schemas import ApiResponse, Empty, TweetCreate, TweetItem, TweetRead, ok

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=ApiResponse[TweetRead], status_code=201)
async def create_tweet(
    data: TweetCreate,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[TweetRead]:
    tweet = await crud.create_tweet(db, user.id, data.content)
    return ok(TweetRead.model_validate(tweet), "Tweet created successfully", status_code=201)


@router.get("/user/{user_id}", response_model=ApiResponse[list[TweetItem]])
async def user_tweets(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[TweetItem]]:
    tweets = await get_user_tweets(db, parse_id(user_id, "userId"))
    return ok(tweets, "Tweets fetched successfully")


@router.patch("/{tweet_id}", response_model=ApiResponse[TweetRead])
async def update_tweet(
    tweet_id: str,
    data: TweetCreate,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[TweetRead]:
    tweet = await crud.update_tweet(db, parse_id(tweet_id, "tweetId"), user.id, data.content)
    return ok(TweetRead.model_validate(tweet), "Tweet updated successfully")


@router.delete("/{tweet_id}", response_model=ApiResponse[Empty])
async def delete_tweet(
    tweet_id: str,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[Empty]:
    await crud.delete_tweet(db, parse_id(tweet_id, "tweetId"), user.id)
    return ok(Empty(), "Tweet deleted successfully")

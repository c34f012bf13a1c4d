"""Account, session and channel endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth import CurrentUser, OptionalUser
from vidtube.config import Settings, get_settings
from vidtube.constants import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from vidtube.db import get_db
from vidtube.db import crud
from vidtube.db.views import get_channel_profile, get_watch_history
from vidtube.db.views.common import user_read
from vidtube.models.schemas import (
    AccountUpdate,
    ApiResponse,
    ChannelProfile,
    Empty,
    LoginRequest,
    LoginResult,
    PasswordChange,
    RefreshTokenRequest,
    UserRead,
    VideoWithOwner,
    ok,
)
from vidtube.services.blobs import BlobStore, get_blob_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _set_auth_cookies(response: Response, settings: Settings, access_token: str, refresh_token: str) -> None:
    cookie = {"httponly": True, "secure": settings.is_production, "samesite": "lax"}
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        access_token,
        max_age=settings.access_token_expiry_minutes * 60,
        **cookie,
    )
    response.set_cookie(
        REFRESH_TOKEN_COOKIE,
        refresh_token,
        max_age=settings.refresh_token_expiry_days * 24 * 60 * 60,
        **cookie,
    )


def _clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    response.delete_cookie(REFRESH_TOKEN_COOKIE)


@router.post("/register", response_model=ApiResponse[UserRead], status_code=201)
async def register(
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[BlobStore, Depends(get_blob_store)],
    settings: Annotated[Settings, Depends(get_settings)],
    username: Annotated[str | None, Form()] = None,
    email: Annotated[str | None, Form()] = None,
    fullname: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    avatar: Annotated[UploadFile | None, File()] = None,
    cover_image: Annotated[UploadFile | None, File(alias="coverImage")] = None,
) -> ApiResponse[UserRead]:
    """Create an account (multipart form with avatar and optional cover image)."""
    user = await crud.register_user(
        db,
        store,
        settings.max_upload_bytes,
        username=username,
        email=email,
        fullname=fullname,
        password=password,
        avatar=avatar,
        cover_image=cover_image,
    )
    return ok(user_read(user), "User registered successfully", status_code=201)


@router.post("/login", response_model=ApiResponse[LoginResult])
async def login(
    data: LoginRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> ApiResponse[LoginResult]:
    """Log in with email or username. Tokens are set as cookies and returned."""
    user, access_token, refresh_token = await crud.login(
        db, settings, email=data.email, username=data.username, password=data.password
    )
    _set_auth_cookies(response, settings, access_token, refresh_token)
    return ok(
        LoginResult(user=user_read(user), access_token=access_token, refresh_token=refresh_token),
        "User logged in successfully",
    )


@router.post("/refresh-token", response_model=ApiResponse[LoginResult])
async def refresh_token(
    request: Request,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    data: RefreshTokenRequest | None = None,
) -> ApiResponse[LoginResult]:
    """Rotate tokens using the refresh token from the cookie or the body."""
    token = request.cookies.get(REFRESH_TOKEN_COOKIE) or (data.refresh_token if data else None)
    _, access_token, new_refresh_token = await crud.refresh_tokens(db, settings, token)
    _set_auth_cookies(response, settings, access_token, new_refresh_token)
    return ok(
        LoginResult(access_token=access_token, refresh_token=new_refresh_token),
        "Access token refreshed",
    )


@router.post("/logout", response_model=ApiResponse[Empty])
async def logout(
    user: CurrentUser,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[Empty]:
    await crud.logout(db, user)
    _clear_auth_cookies(response)
    return ok(Empty(), "User logged out successfully")


@router.get("/current-user", response_model=ApiResponse[UserRead])
async def current_user(user: CurrentUser) -> ApiResponse[UserRead]:
    return ok(user_read(user), "Current user details")


@router.post("/change-password", response_model=ApiResponse[Empty])
async def change_password(
    data: PasswordChange,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[Empty]:
    await crud.change_password(db, user, data.old_password, data.new_password, data.confirm_password)
    return ok(Empty(), "Password changed successfully")


@router.patch("/update-account", response_model=ApiResponse[UserRead])
async def update_account(
    data: AccountUpdate,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[UserRead]:
    user = await crud.update_account(db, user, data)
    return ok(user_read(user), "Account details updated successfully")


@router.patch("/avatar", response_model=ApiResponse[UserRead])
async def update_avatar(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[BlobStore, Depends(get_blob_store)],
    settings: Annotated[Settings, Depends(get_settings)],
    avatar: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse[UserRead]:
    user = await crud.update_avatar(db, store, settings.max_upload_bytes, user, avatar)
    return ok(user_read(user), "Avatar updated successfully")


@router.patch("/cover-image", response_model=ApiResponse[UserRead])
async def update_cover_image(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    store: Annotated[BlobStore, Depends(get_blob_store)],
    settings: Annotated[Settings, Depends(get_settings)],
    cover_image: Annotated[UploadFile | None, File(alias="coverImage")] = None,
) -> ApiResponse[UserRead]:
    user = await crud.update_cover_image(db, store, settings.max_upload_bytes, user, cover_image)
    return ok(user_read(user), "Cover image updated successfully")


@router.get("/channel/{username}", response_model=ApiResponse[ChannelProfile])
async def channel_profile(
    username: str,
    viewer: OptionalUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[ChannelProfile]:
    """Public channel page; ``isSubscribed`` reflects the viewer, if any."""
    profile = await get_channel_profile(db, username, viewer.id if viewer else None)
    return ok(profile, "Channel profile fetched successfully")


@router.get("/watch-history", response_model=ApiResponse[list[VideoWithOwner]])
async def watch_history(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ApiResponse[list[VideoWithOwner]]:
    history = await get_watch_history(db, user.id)
    return ok(history, "Watch history fetched successfully")

"""Authentication dependencies for FastAPI."""

import uuid
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth.security import TokenType, decode_token
from vidtube.config import Settings, get_settings
from vidtube.constants import ACCESS_TOKEN_COOKIE
from vidtube.db import get_db
from vidtube.errors import Unauthenticated
from vidtube.models.user import User

bearer = HTTPBearer(auto_error=False)


def _access_tokens(request: Request, credentials: HTTPAuthorizationCredentials | None) -> list[str]:
    """Access tokens sent with the request, cookie first, then the Authorization header."""
    tokens = []
    cookie = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if cookie:
        tokens.append(cookie)
    if credentials and credentials.credentials:
        tokens.append(credentials.credentials)
    return tokens


def _decode_first(tokens: list[str], settings: Settings) -> uuid.UUID:
    """User id from the first token that verifies.

    Each candidate is tried in turn and the last failure is raised.
    """
    error = Unauthenticated("Unauthorized request, no access token")
    for token in tokens:
        try:
            return decode_token(token, TokenType.ACCESS, settings)
        except Unauthenticated as exc:
            error = exc
    raise error


async def get_optional_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
) -> User | None:
    """Current user if a valid access token was sent, else None."""
    try:
        user_id = _decode_first(_access_tokens(request, credentials), settings)
    except Unauthenticated:
        return None
    return await db.get(User, user_id)


async def get_current_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
) -> User:
    """Get current user, raising 401 if not authenticated."""
    user_id = _decode_first(_access_tokens(request, credentials), settings)
    user = await db.get(User, user_id)
    if not user:
        raise Unauthenticated("Invalid access token")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]

"""Password hashing and JWT helpers."""

import uuid
from datetime import UTC, datetime, timedelta
from enum import Enum

import bcrypt
import jwt

from vidtube.config import Settings
from vidtube.constants import BCRYPT_ROUNDS, JWT_ALGORITHM
from vidtube.errors import Unauthenticated


class TokenType(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed hash in the database
        return False


def _secret_for(token_type: TokenType, settings: Settings) -> str:
    if token_type is TokenType.ACCESS:
        return settings.access_token_secret
    return settings.refresh_token_secret


def create_token(user_id: uuid.UUID, token_type: TokenType, settings: Settings) -> str:
    """Create a signed access or refresh token for ``user_id``."""
    now = datetime.now(UTC)
    if token_type is TokenType.ACCESS:
        expires = now + timedelta(minutes=settings.access_token_expiry_minutes)
    else:
        expires = now + timedelta(days=settings.refresh_token_expiry_days)

    payload = {
        "sub": str(user_id),
        "type": token_type.value,
        "iat": now,
        "exp": expires,
        # jti keeps two tokens issued in the same second distinct
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, _secret_for(token_type, settings), algorithm=JWT_ALGORITHM)


def decode_token(token: str, token_type: TokenType, settings: Settings) -> uuid.UUID:
    """Verify a token and return the user id it was issued for.

    Raises:
        Unauthenticated: expired, tampered, wrong type or malformed subject.
    """
    try:
        payload = jwt.decode(token, _secret_for(token_type, settings), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthenticated("Token has expired") from None
    except jwt.InvalidTokenError:
        raise Unauthenticated(f"Invalid {token_type.value} token") from None

    if payload.get("type") != token_type.value:
        raise Unauthenticated(f"Invalid {token_type.value} token")
    try:
        return uuid.UUID(payload["sub"])
    except (KeyError, ValueError):
        raise Unauthenticated(f"Invalid {token_type.value} token") from None

"""Accounts, credentials and profile images."""

from fastapi import UploadFile
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.auth.security import TokenType, create_token, decode_token, hash_password, verify_password
from vidtube.config import Settings
from vidtube.errors import Conflict, InvalidArgument, NotFound, Unauthenticated, require_text
from vidtube.models import User
from vidtube.models.schemas import AccountUpdate
from vidtube.services.blobs import BlobStore, delete_blobs, uploaded_blobs
from vidtube.utils.logging import LogContext, get_logger

logger = get_logger(__name__)

USER_EXISTS = "User with email or username already exists"


async def get_user_by_login(db: AsyncSession, email: str | None = None, username: str | None = None) -> User | None:
    """Find a user by email, falling back to username.

    When both are given and name different users, the email match wins.
    """
    if email and email.strip():
        result = await db.execute(select(User).where(func.lower(User.email) == email.strip().lower()))
        user = result.scalar_one_or_none()
        if user is not None:
            return user
    if username and username.strip():
        result = await db.execute(select(User).where(User.username == username.strip().lower()))
        return result.scalar_one_or_none()
    return None


async def ensure_available(
    db: AsyncSession,
    username: str | None = None,
    email: str | None = None,
    exclude: User | None = None,
) -> None:
    """Raise ``Conflict`` if the username or email belongs to another user."""
    conditions = []
    if email:
        conditions.append(func.lower(User.email) == email.lower())
    if username:
        conditions.append(User.username == username.lower())
    if not conditions:
        return

    stmt = select(User.id).where(or_(*conditions))
    if exclude is not None:
        stmt = stmt.where(User.id != exclude.id)
    if (await db.execute(stmt.limit(1))).first() is not None:
        raise Conflict(USER_EXISTS)


async def _commit_unique(db: AsyncSession) -> None:
    """Commit, reporting a unique username/email race as ``Conflict``."""
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise Conflict(USER_EXISTS) from None


async def register_user(
    db: AsyncSession,
    store: BlobStore,
    max_bytes: int,
    *,
    username: str | None,
    email: str | None,
    fullname: str | None,
    password: str | None,
    avatar: UploadFile | None,
    cover_image: UploadFile | None = None,
) -> User:
    """Create an account with an avatar and an optional cover image.

    The images are uploaded before the row is written; if the write fails
    they are deleted again.
    """
    require_text(username=username, email=email, fullname=fullname, password=password)
    if avatar is None:
        raise InvalidArgument("avatar file is required")

    username = username.strip().lower()
    email = email.strip().lower()
    await ensure_available(db, username=username, email=email)

    async with uploaded_blobs(store, max_bytes) as batch:
        avatar_blob = await batch.put(avatar, "avatar")
        cover_blob = await batch.put(cover_image, "coverImage") if cover_image is not None else None

        user = User(
            username=username,
            email=email,
            fullname=fullname.strip(),
            password_hash=hash_password(password),
            avatar_url=avatar_blob.url,
            avatar_public_id=avatar_blob.public_id,
            cover_image_url=cover_blob.url if cover_blob else None,
            cover_image_public_id=cover_blob.public_id if cover_blob else None,
        )
        db.add(user)
        await _commit_unique(db)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user


async def issue_tokens(db: AsyncSession, user: User, settings: Settings) -> tuple[str, str]:
    """Create a fresh access/refresh pair and store the refresh token."""
    access_token = create_token(user.id, TokenType.ACCESS, settings)
    refresh_token = create_token(user.id, TokenType.REFRESH, settings)
    user.refresh_token = refresh_token
    await db.commit()
    return access_token, refresh_token


async def login(
    db: AsyncSession,
    settings: Settings,
    *,
    email: str | None,
    username: str | None,
    password: str,
) -> tuple[User, str, str]:
    """Check credentials and issue tokens.

    Raises:
        InvalidArgument: neither email nor username given
        NotFound: no such user
        Unauthenticated: wrong password
    """
    if not (email and email.strip()) and not (username and username.strip()):
        raise InvalidArgument("username or email is required")

    user = await get_user_by_login(db, email=email, username=username)
    if user is None:
        raise NotFound("User does not exist")
    if not verify_password(password, user.password_hash):
        raise Unauthenticated("Invalid user credentials")

    access_token, refresh_token = await issue_tokens(db, user, settings)
    logger.info(f"User {user.id} logged in")
    return user, access_token, refresh_token


async def logout(db: AsyncSession, user: User) -> None:
    user.refresh_token = None
    await db.commit()
    logger.info(f"User {user.id} logged out")


async def refresh_tokens(db: AsyncSession, settings: Settings, token: str | None) -> tuple[User, str, str]:
    """Rotate tokens for a valid refresh token that matches the stored one."""
    if not token:
        raise Unauthenticated("Unauthorized request, no refresh token")

    user_id = decode_token(token, TokenType.REFRESH, settings)
    user = await db.get(User, user_id)
    if user is None:
        raise Unauthenticated("Invalid refresh token")
    if user.refresh_token != token:
        raise Unauthenticated("Refresh token is expired or used")

    access_token, refresh_token = await issue_tokens(db, user, settings)
    return user, access_token, refresh_token


async def change_password(
    db: AsyncSession,
    user: User,
    old_password: str,
    new_password: str,
    confirm_password: str,
) -> None:
    if new_password != confirm_password:
        raise InvalidArgument("New password and confirm password do not match")
    if not verify_password(old_password, user.password_hash):
        raise InvalidArgument("Old password is incorrect")

    user.password_hash = hash_password(new_password)
    await db.commit()
    logger.info(f"User {user.id} changed password")


async def update_account(db: AsyncSession, user: User, data: AccountUpdate) -> User:
    """Update username, fullname and/or email. At least one must be set."""
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    changes = {field: value.strip() for field, value in changes.items() if value.strip()}
    if not changes:
        raise InvalidArgument("At least one of username, fullname or email is required")

    if "username" in changes:
        changes["username"] = changes["username"].lower()
    if "email" in changes:
        changes["email"] = changes["email"].lower()
    if "username" in changes or "email" in changes:
        await ensure_available(db, username=changes.get("username"), email=changes.get("email"), exclude=user)

    for field, value in changes.items():
        setattr(user, field, value)
    await _commit_unique(db)

    logger.info(f"User {user.id} updated {', '.join(sorted(changes))}")
    return user


async def _replace_image(
    db: AsyncSession,
    store: BlobStore,
    max_bytes: int,
    user: User,
    upload: UploadFile | None,
    field_name: str,
    attribute: str,
) -> User:
    """Upload a new profile image, then drop the one it replaces."""
    if upload is None:
        raise InvalidArgument(f"{field_name} file is missing")

    log = LogContext(logger, user=user.id, field=field_name)
    old_public_id = getattr(user, f"{attribute}_public_id")

    async with uploaded_blobs(store, max_bytes) as batch:
        blob = await batch.put(upload, field_name)
        setattr(user, f"{attribute}_url", blob.url)
        setattr(user, f"{attribute}_public_id", blob.public_id)
        await db.commit()

    log.bind(blob=blob.public_id).info("Image replaced")
    # Only once the new reference is stored
    await delete_blobs(store, (old_public_id, blob.resource_type))
    return user


async def update_avatar(
    db: AsyncSession, store: BlobStore, max_bytes: int, user: User, upload: UploadFile | None
) -> User:
    return await _replace_image(db, store, max_bytes, user, upload, "avatar", "avatar")


async def update_cover_image(
    db: AsyncSession, store: BlobStore, max_bytes: int, user: User, upload: UploadFile | None
) -> User:
    return await _replace_image(db, store, max_bytes, user, upload, "coverImage", "cover_image")

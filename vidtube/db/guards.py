"""Ownership checks shared by every mutating endpoint."""

import uuid
from typing import Protocol, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.errors import NotFound, PermissionDenied


class Owned(Protocol):
    owner_id: uuid.UUID


M = TypeVar("M")


def is_owner(resource: Owned, principal_id: uuid.UUID | None) -> bool:
    """True when ``principal_id`` owns ``resource``."""
    return principal_id is not None and resource.owner_id == principal_id


def ensure_owner(resource: Owned, principal_id: uuid.UUID | None, name: str) -> None:
    if not is_owner(resource, principal_id):
        raise PermissionDenied(f"{name} can only be modified by its owner")


async def get_or_404(db: AsyncSession, model: type[M], resource_id: uuid.UUID, name: str) -> M:
    """Fetch ``model`` by primary key or raise ``NotFound``."""
    resource = await db.get(model, resource_id)
    if resource is None:
        raise NotFound(f"{name} not found")
    return resource


async def get_owned_or_404(
    db: AsyncSession,
    model: type[M],
    resource_id: uuid.UUID,
    principal_id: uuid.UUID,
    name: str,
) -> M:
    """Fetch a resource and check that ``principal_id`` owns it.

    The lookup runs first so a missing resource is always ``NotFound``, never
    ``PermissionDenied``.
    """
    resource = await get_or_404(db, model, resource_id, name)
    ensure_owner(resource, principal_id, name)
    return resource

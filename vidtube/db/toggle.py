"""Create-if-absent / delete-if-present on a natural key.

Likes and subscriptions are toggled rather than set. The delete is idempotent
and the insert is guarded by the model's unique constraint, so two concurrent
toggles from the same actor can never leave duplicate rows behind.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube.utils.logging import get_logger

logger = get_logger(__name__)

M = TypeVar("M")


@dataclass
class ToggleResult(Generic[M]):
    """Outcome of a toggle: ``active`` is the state after the call."""

    active: bool
    record: M | None = None


async def toggle(db: AsyncSession, model: type[M], **natural_key: Any) -> ToggleResult[M]:
    """Flip the presence of the ``model`` row identified by ``natural_key``."""
    conditions = [getattr(model, column) == value for column, value in natural_key.items()]
    result = await db.execute(delete(model).where(*conditions))
    if result.rowcount:
        await db.flush()
        return ToggleResult(active=False)

    record = model(**natural_key)
    try:
        async with db.begin_nested():
            db.add(record)
    except IntegrityError:
        # Another request inserted the same key between our delete and insert
        logger.info(f"Concurrent toggle on {model.__name__} {natural_key}, keeping existing row")
        return ToggleResult(active=True)

    return ToggleResult(active=True, record=record)

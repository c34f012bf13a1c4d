"""Blob store interface and upload bookkeeping."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Protocol

from fastapi import Request, UploadFile

from vidtube.constants import RESOURCE_TYPE_IMAGE
from vidtube.errors import InvalidArgument
from vidtube.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class StoredBlob:
    """A file persisted in the blob store."""

    public_id: str
    url: str
    resource_type: str = RESOURCE_TYPE_IMAGE
    duration: float | None = None


class BlobStore(Protocol):
    """Where avatars, cover images, videos and thumbnails live."""

    async def put(self, filename: str, content: bytes, content_type: str | None = None) -> StoredBlob:
        """Store ``content`` and return its public id and URL."""
        ...

    async def delete(self, public_id: str, resource_type: str = RESOURCE_TYPE_IMAGE) -> bool:
        """Remove a blob. Returns False when the store reports a failure."""
        ...

    async def close(self) -> None:
        ...


def get_blob_store(request: Request) -> BlobStore:
    """Dependency returning the store built at startup."""
    return request.app.state.blob_store


async def read_upload(upload: UploadFile, field_name: str, max_bytes: int) -> bytes:
    """Read an uploaded file, rejecting empty or oversized files."""
    content = await upload.read()
    if not content:
        raise InvalidArgument(f"{field_name} file is required")
    if len(content) > max_bytes:
        raise InvalidArgument(f"{field_name} file is too large (max {max_bytes // (1024 * 1024)} MB)")
    return content


@dataclass
class UploadBatch:
    """Blobs uploaded during one request, deleted again if the request fails."""

    store: BlobStore
    max_bytes: int
    uploaded: list[StoredBlob] = field(default_factory=list)

    async def put(self, upload: UploadFile, field_name: str) -> StoredBlob:
        content = await read_upload(upload, field_name, self.max_bytes)
        blob = await self.store.put(upload.filename or field_name, content, upload.content_type)
        self.uploaded.append(blob)
        return blob

    async def discard(self) -> None:
        for blob in self.uploaded:
            if not await self.store.delete(blob.public_id, blob.resource_type):
                logger.error(f"Failed to delete orphaned blob {blob.public_id}")
        self.uploaded.clear()


@asynccontextmanager
async def uploaded_blobs(store: BlobStore, max_bytes: int) -> AsyncIterator[UploadBatch]:
    """Upload files, then run the database write inside this block.

    If the block raises, every blob uploaded through the batch is deleted so
    nothing is left orphaned in the store.
    """
    batch = UploadBatch(store=store, max_bytes=max_bytes)
    try:
        yield batch
    except Exception:
        if batch.uploaded:
            logger.warning(f"Request failed after upload, deleting {len(batch.uploaded)} blob(s)")
            await batch.discard()
        raise


async def delete_blobs(store: BlobStore, *blobs: tuple[str | None, str]) -> None:
    """Best-effort cleanup of blobs whose database rows are already gone."""
    for public_id, resource_type in blobs:
        if public_id and not await store.delete(public_id, resource_type):
            logger.error(f"Failed to delete blob {public_id} ({resource_type})")

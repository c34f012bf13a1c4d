"""Test doubles."""

import uuid

from vidtube.constants import RESOURCE_TYPE_IMAGE, RESOURCE_TYPE_VIDEO
from vidtube.errors import Internal
from vidtube.services.blobs import StoredBlob


class InMemoryBlobStore:
    """BlobStore keeping uploads in a dict.

    Files whose content type starts with ``video/`` are stored as videos and
    report ``video_duration`` seconds, like the real store does.
    """

    def __init__(self, video_duration: float = 42.5) -> None:
        self.video_duration = video_duration
        self.blobs: dict[str, StoredBlob] = {}
        self.deleted: list[str] = []
        # Number of uploads that succeed before every further one fails
        self.fail_after: int | None = None

    async def put(self, filename: str, content: bytes, content_type: str | None = None) -> StoredBlob:
        if self.fail_after is not None and len(self.blobs) >= self.fail_after:
            raise Internal("Something went wrong while uploading the file")
        is_video = (content_type or "").startswith("video/")
        public_id = f"{uuid.uuid4().hex}-{filename}"
        blob = StoredBlob(
            public_id=public_id,
            url=f"https://blobs.test/{public_id}",
            resource_type=RESOURCE_TYPE_VIDEO if is_video else RESOURCE_TYPE_IMAGE,
            duration=self.video_duration if is_video else None,
        )
        self.blobs[public_id] = blob
        return blob

    async def delete(self, public_id: str, resource_type: str = RESOURCE_TYPE_IMAGE) -> bool:
        self.deleted.append(public_id)
        return self.blobs.pop(public_id, None) is not None

    async def close(self) -> None:
        pass

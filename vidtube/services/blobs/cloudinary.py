"""Cloudinary-backed blob store.

Talks to the Cloudinary upload API directly over httpx using signed
requests: ``signature = sha1("k1=v1&k2=v2" + api_secret)`` over the sorted
parameters, excluding ``file``, ``api_key`` and ``resource_type``.
"""

import hashlib
import time
from typing import Any

import httpx

from vidtube.config import Settings
from vidtube.constants import BLOB_TIMEOUT, CLOUDINARY_API_URL, RESOURCE_TYPE_IMAGE
from vidtube.errors import Internal
from vidtube.services.blobs.base import StoredBlob
from vidtube.utils.logging import get_logger
from vidtube.utils.retry import RetryConfig, retry_async

logger = get_logger(__name__)

# Uploads are not idempotent, so only retry on connection problems
UPLOAD_RETRY = RetryConfig(max_retries=2, retryable_status_codes=(502, 503, 504))

_POOL_LIMITS = httpx.Limits(
    max_connections=20,
    max_keepalive_connections=10,
    keepalive_expiry=30,
)


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Compute the Cloudinary request signature."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params) if params[key] not in (None, ""))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


class CloudinaryBlobStore:
    """BlobStore implementation for Cloudinary."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self._client = client or httpx.AsyncClient(timeout=BLOB_TIMEOUT, limits=_POOL_LIMITS)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryBlobStore":
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )

    def _url(self, resource_type: str, action: str) -> str:
        return f"{CLOUDINARY_API_URL}/{self.cloud_name}/{resource_type}/{action}"

    def _signed(self, params: dict[str, Any]) -> dict[str, Any]:
        params = {**params, "timestamp": int(time.time())}
        return {**params, "api_key": self.api_key, "signature": sign_params(params, self.api_secret)}

    async def put(self, filename: str, content: bytes, content_type: str | None = None) -> StoredBlob:
        try:
            response = await retry_async(
                self._client.post,
                self._url("auto", "upload"),
                data=self._signed({}),
                files={"file": (filename, content, content_type or "application/octet-stream")},
                config=UPLOAD_RETRY,
                operation_name=f"cloudinary upload {filename}",
            )
        except httpx.HTTPError as e:
            logger.error(f"Cloudinary upload failed for {filename}: {e}")
            raise Internal("Something went wrong while uploading the file") from e

        if response.status_code != 200:
            logger.error(f"Cloudinary upload failed for {filename}: {response.status_code} {response.text}")
            raise Internal("Something went wrong while uploading the file")

        payload = response.json()
        logger.info(f"Uploaded {filename} to blob store as {payload['public_id']}")
        return StoredBlob(
            public_id=payload["public_id"],
            url=payload.get("secure_url") or payload["url"],
            resource_type=payload.get("resource_type", RESOURCE_TYPE_IMAGE),
            duration=payload.get("duration"),
        )

    async def delete(self, public_id: str, resource_type: str = RESOURCE_TYPE_IMAGE) -> bool:
        try:
            response = await retry_async(
                self._client.post,
                self._url(resource_type, "destroy"),
                data=self._signed({"public_id": public_id}),
                operation_name=f"cloudinary destroy {public_id}",
            )
        except httpx.HTTPError as e:
            logger.error(f"Cloudinary destroy failed for {public_id}: {e}")
            return False

        if response.status_code != 200:
            logger.error(f"Cloudinary destroy failed for {public_id}: {response.status_code}")
            return False
        return response.json().get("result") == "ok"

    async def close(self) -> None:
        await self._client.aclose()

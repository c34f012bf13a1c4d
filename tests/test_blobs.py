"""Tests for blob storage helpers and the Cloudinary client."""

import hashlib
from io import BytesIO

import httpx
import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from tests.fakes import InMemoryBlobStore
from vidtube.errors import Internal, InvalidArgument
from vidtube.services.blobs import CloudinaryBlobStore, delete_blobs, uploaded_blobs
from vidtube.services.blobs.cloudinary import sign_params


def make_upload(content: bytes, filename: str = "clip.mp4", content_type: str = "video/mp4") -> UploadFile:
    return UploadFile(BytesIO(content), filename=filename, headers=Headers({"content-type": content_type}))


class TestUploadedBlobs:
    @pytest.mark.asyncio
    async def test_blobs_kept_on_success(self):
        store = InMemoryBlobStore()
        async with uploaded_blobs(store, max_bytes=1024) as batch:
            blob = await batch.put(make_upload(b"data"), "videoFile")

        assert blob.resource_type == "video"
        assert blob.duration == 42.5
        assert list(store.blobs) == [blob.public_id]

    @pytest.mark.asyncio
    async def test_blobs_discarded_on_failure(self):
        store = InMemoryBlobStore()
        with pytest.raises(RuntimeError):
            async with uploaded_blobs(store, max_bytes=1024) as batch:
                first = await batch.put(make_upload(b"one"), "videoFile")
                second = await batch.put(make_upload(b"two", "thumb.png", "image/png"), "thumbnail")
                raise RuntimeError("database write failed")

        assert store.blobs == {}
        assert store.deleted == [first.public_id, second.public_id]

    @pytest.mark.asyncio
    async def test_empty_file_rejected(self):
        store = InMemoryBlobStore()
        with pytest.raises(InvalidArgument, match="avatar file is required"):
            async with uploaded_blobs(store, max_bytes=1024) as batch:
                await batch.put(make_upload(b"", "a.png", "image/png"), "avatar")

    @pytest.mark.asyncio
    async def test_oversized_file_rejected(self):
        store = InMemoryBlobStore()
        with pytest.raises(InvalidArgument, match="too large"):
            async with uploaded_blobs(store, max_bytes=4) as batch:
                await batch.put(make_upload(b"12345"), "videoFile")
        assert store.blobs == {}

    @pytest.mark.asyncio
    async def test_delete_blobs_skips_missing_ids(self):
        store = InMemoryBlobStore()
        await delete_blobs(store, (None, "image"), ("gone", "video"))
        assert store.deleted == ["gone"]


class TestSignParams:
    def test_sorted_and_salted(self):
        expected = hashlib.sha1(b"public_id=abc&timestamp=1700000000secret").hexdigest()
        assert sign_params({"timestamp": 1700000000, "public_id": "abc"}, "secret") == expected

    def test_empty_values_skipped(self):
        assert sign_params({"timestamp": 1, "folder": ""}, "s") == sign_params({"timestamp": 1}, "s")


def cloudinary_store(handler) -> CloudinaryBlobStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CloudinaryBlobStore("demo", "key", "secret", client=client)


class TestCloudinaryBlobStore:
    @pytest.mark.asyncio
    async def test_put(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={
                    "public_id": "abc123",
                    "secure_url": "https://res.cloudinary.com/demo/video/upload/abc123.mp4",
                    "resource_type": "video",
                    "duration": 12.5,
                },
            )

        store = cloudinary_store(handler)
        blob = await store.put("clip.mp4", b"data", "video/mp4")
        await store.close()

        assert blob.public_id == "abc123"
        assert blob.url.endswith("abc123.mp4")
        assert blob.resource_type == "video"
        assert blob.duration == 12.5
        assert str(requests[0].url) == "https://api.cloudinary.com/v1_1/demo/auto/upload"

    @pytest.mark.asyncio
    async def test_put_failure_raises_internal(self):
        store = cloudinary_store(lambda request: httpx.Response(400, json={"error": {"message": "bad"}}))
        with pytest.raises(Internal):
            await store.put("clip.mp4", b"data", "video/mp4")
        await store.close()

    @pytest.mark.asyncio
    async def test_delete(self):
        paths = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, json={"result": "ok"})

        store = cloudinary_store(handler)
        assert await store.delete("abc123", "video") is True
        await store.close()
        assert paths == ["/v1_1/demo/video/destroy"]

    @pytest.mark.asyncio
    async def test_delete_not_found(self):
        store = cloudinary_store(lambda request: httpx.Response(200, json={"result": "not found"}))
        assert await store.delete("missing") is False
        await store.close()

"""Blob storage for uploaded media."""

from vidtube.services.blobs.base import (
    BlobStore,
    StoredBlob,
    delete_blobs,
    get_blob_store,
    uploaded_blobs,
)
from vidtube.services.blobs.cloudinary import CloudinaryBlobStore

__all__ = [
    "BlobStore",
    "CloudinaryBlobStore",
    "StoredBlob",
    "delete_blobs",
    "get_blob_store",
    "uploaded_blobs",
]

"""Object store adapters exchanging image keys for time-limited URLs."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import boto3
from botocore.config import Config

from asset_api.core.config import StorageSettings

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    def locator_for(self, image_key: str) -> Optional[str]:
        """Return a freshly signed retrieval URL; never persisted."""
        ...


class NullObjectStore:
    """Used when no bucket is configured; images have no locator."""

    def locator_for(self, image_key: str) -> Optional[str]:
        return None


class S3ObjectStore:
    def __init__(self, bucket: str, client: Any, expires_in: int = 900) -> None:
        self._bucket = bucket
        self._client = client
        self._expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "S3ObjectStore":
        client = boto3.client(
            "s3",
            region_name=settings.region,
            endpoint_url=settings.endpoint_url,
            config=Config(signature_version="s3v4", retries={"max_attempts": 3, "mode": "standard"}),
        )
        return cls(settings.bucket or "", client, settings.url_expires_seconds)

    def locator_for(self, image_key: str) -> Optional[str]:
        # Signing is local; no request reaches the bucket here.
        return self._client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self._bucket, "Key": image_key},
            ExpiresIn=self._expires_in,
        )


def build_object_store(settings: StorageSettings) -> ObjectStore:
    if not settings.bucket:
        logger.info("No storage bucket configured; image URLs are disabled")
        return NullObjectStore()
    return S3ObjectStore.from_settings(settings)


__all__ = ["ObjectStore", "NullObjectStore", "S3ObjectStore", "build_object_store"]

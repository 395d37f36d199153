"""
Object storage for shared videos and thumbnails.

Cloudflare R2 speaks the S3 API, so objects are addressed through a boto3 S3
client pointed at the R2 endpoint. Only presigned URLs leave the server; the
app uploads and downloads directly against the bucket.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

import boto3
from botocore.config import Config

from lockin.core.utils import new_id
from lockin.server.core.config import ObjectStorageConfig, settings

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "video/mp4": "mp4",
    "video/quicktime": "mov",
    "image/jpeg": "jpg",
    "image/png": "png",
}


class ObjectStorage:
    """Presigned URL issuer for the video bucket.

    Args:
        config: Bucket, endpoint, credentials and URL lifetime
        client: Pre-built S3 client; one is created from ``config`` when omitted
    """

    def __init__(self, config: ObjectStorageConfig, client: Optional[Any] = None) -> None:
        self.config = config
        self.client = client or boto3.client(
            "s3",
            endpoint_url=config.endpoint,
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            region_name="auto",
            config=Config(signature_version="s3v4"),
        )

    @property
    def expires_in(self) -> int:
        return self.config.url_expiry_seconds

    def new_object_key(self, kind: str, content_type: str) -> str:
        """Fresh key such as ``videos/<hex>.mp4``."""
        extension = _EXTENSIONS.get(content_type, "bin")
        return f"{kind}s/{new_id()}.{extension}"

    def presigned_get_url(self, key: Optional[str]) -> Optional[str]:
        """Time-limited download URL, or None when there is no key."""
        if not key:
            return None
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.config.bucket, "Key": key},
            ExpiresIn=self.expires_in,
        )

    def presigned_put_url(self, key: str, content_type: str) -> str:
        """Time-limited upload URL for ``key``."""
        url = self.client.generate_presigned_url(
            "put_object",
            Params={"Bucket": self.config.bucket, "Key": key, "ContentType": content_type},
            ExpiresIn=self.expires_in,
        )
        logger.debug(f"Issued upload URL for {key}")
        return url


@lru_cache(maxsize=1)
def get_object_storage() -> ObjectStorage:
    """Process-wide storage built from settings."""
    return ObjectStorage(settings.object_storage)

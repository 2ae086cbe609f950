# File: unpacked/services/storage.py

"""
Image upload validation and storage.

Two backends:
  - LocalImageStorage writes into MEDIA_ROOT and returns /uploads/<name>
    (served by the app's static mount), used in development.
  - S3ImageStorage writes into AWS_S3_BUCKET with boto3 and returns the
    public object URL, used in production.

Uploads are not tied to any outfit transaction; an image whose outfit is
never saved just stays in storage.
"""

import logging
import time
import uuid
from pathlib import Path
from typing import Optional, Protocol

import boto3

from unpacked.core.config import Settings
from unpacked.core.errors import InvalidInputError, ServiceUnavailableError

logger = logging.getLogger(__name__)

MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MiB

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

UPLOADS_URL_PREFIX = "/uploads"
S3_KEY_PREFIX = "unpacked"


class ImageStorage(Protocol):
    def save(self, filename: str, data: bytes, content_type: str) -> str:
        """Persist ``data`` under ``filename`` and return its public URL."""
        ...


def validate_image(content_type: Optional[str], size: int) -> None:
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise InvalidInputError("Invalid file type. Only JPEG, PNG, and WebP images are allowed.")
    if size > MAX_UPLOAD_SIZE:
        raise InvalidInputError("File too large. Maximum size is 5MB.")


def generate_filename(content_type: str) -> str:
    """
    ``<epoch ms>-<random hex>.<ext>``. The extension always follows the
    validated content type; the client filename is never used, so the
    static mount only ever serves image types.
    """
    ext = ALLOWED_CONTENT_TYPES[content_type]
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:13]}.{ext}"


class LocalImageStorage:
    def __init__(self, root: Path, url_prefix: str = UPLOADS_URL_PREFIX):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / filename
        path.write_bytes(data)
        logger.info("Stored upload %s (%d bytes) on local disk", filename, len(data))
        return f"{self.url_prefix}/{filename}"


class S3ImageStorage:
    def __init__(self, bucket: str, region: Optional[str] = None, client=None):
        self.bucket = bucket
        self.region = region
        if client is None:
            client = boto3.client("s3", region_name=region)
        self.client = client

    def public_url(self, key: str) -> str:
        if self.region:
            return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"

    def save(self, filename: str, data: bytes, content_type: str) -> str:
        key = f"{S3_KEY_PREFIX}/{filename}"
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        logger.info("Stored upload %s (%d bytes) in s3://%s", key, len(data), self.bucket)
        return self.public_url(key)


def build_image_storage(settings: Settings) -> ImageStorage:
    if settings.upload_backend == "s3":
        if not settings.aws_s3_bucket:
            raise ServiceUnavailableError("Upload service not configured")
        return S3ImageStorage(settings.aws_s3_bucket, settings.aws_region)
    return LocalImageStorage(Path(settings.media_root))


def store_image(
    storage: ImageStorage,
    *,
    original_name: Optional[str],
    content_type: Optional[str],
    data: bytes,
) -> str:
    validate_image(content_type, len(data))
    filename = generate_filename(content_type)
    logger.debug("Upload %r stored as %s", original_name, filename)
    return storage.save(filename, data, content_type)

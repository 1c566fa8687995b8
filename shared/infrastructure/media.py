"""Media store adapters for property images.

A media store takes an uploaded file and returns the public URL together
with an opaque handle; the handle is all that is needed to release the
file later. Releasing is best-effort: failures are logged and reported as
``False`` so callers never fail a primary operation on cleanup.
"""

from __future__ import annotations

import hashlib
import logging
import uuid
from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO

import boto3  # type: ignore
from botocore.client import Config as BotoConfig  # type: ignore
from botocore.exceptions import BotoCoreError, ClientError  # type: ignore
from django.conf import settings  # type: ignore
from django.core.files.base import ContentFile  # type: ignore
from django.core.files.storage import FileSystemStorage  # type: ignore
from django.core.signals import setting_changed  # type: ignore
from django.utils.module_loading import import_string  # type: ignore
from PIL import Image, UnidentifiedImageError  # type: ignore

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = ("JPEG", "PNG", "WEBP")


class MediaStoreError(Exception):
    """The file was rejected or could not be stored."""


class InvalidImage(MediaStoreError):
    """The upload is not an acceptable image."""


@dataclass(frozen=True)
class StoredMedia:
    url: str
    handle: str


def _read_image(file_obj, max_size: int) -> Image.Image:
    size = getattr(file_obj, "size", None)
    if size is not None and size > max_size:
        raise InvalidImage(f"File too large. Maximum is {max_size / 1024 / 1024:.1f} MB")
    try:
        file_obj.seek(0)
        img = Image.open(file_obj)
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidImage(f"Invalid image: {exc}") from exc
    if img.format not in ALLOWED_FORMATS:
        raise InvalidImage(f"Unsupported format: {img.format}")
    return img


def _optimize_image(img: Image.Image, max_dimension: int, quality: int = 85):
    """Downscale and re-encode. Returns (bytes_io, ext, content_type)."""
    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGB")
    if img.width > max_dimension or img.height > max_dimension:
        img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

    out = BytesIO()
    if img.mode == "RGBA":
        img.save(out, format="WEBP", quality=quality, method=6)
        ext, content_type = "webp", "image/webp"
    else:
        img.save(out, format="JPEG", quality=quality, optimize=True)
        ext, content_type = "jpg", "image/jpeg"
    out.seek(0)
    return out, ext, content_type


def _generate_basename(payload: bytes) -> str:
    """properties/<md5_8>_<uuid8>, extension appended by the caller."""
    digest = hashlib.md5(payload).hexdigest()[:8]
    return f"properties/{digest}_{uuid.uuid4().hex[:8]}"


class S3MediaStore:
    """S3/MinIO-backed store. Every network call is bounded by ``timeout``."""

    def __init__(
        self,
        *,
        bucket: str,
        endpoint_url: str | None = None,
        access_key: str = "",
        secret_key: str = "",
        region: str = "us-east-1",
        public_base: str = "",
        addressing_style: str = "path",
        use_ssl: bool = False,
        timeout: float = 5.0,
        max_size: int = 5 * 1024 * 1024,
        max_dimension: int = 1920,
    ):
        self.bucket_name = bucket
        self.endpoint_url = (endpoint_url or "").rstrip("/")
        self.public_base = public_base.rstrip("/")
        self.max_size = max_size
        self.max_dimension = max_dimension
        self.s3_client = boto3.client(
            "s3",
            endpoint_url=endpoint_url or None,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=BotoConfig(
                signature_version="s3v4",
                s3={"addressing_style": addressing_style},
                connect_timeout=timeout,
                read_timeout=timeout,
                retries={"max_attempts": 2},
            ),
            use_ssl=use_ssl,
            verify=use_ssl,
        )

    @classmethod
    def from_settings(cls) -> "S3MediaStore":
        conf = settings.RENTALS
        return cls(
            bucket=conf["S3_BUCKET_NAME"],
            endpoint_url=conf["S3_ENDPOINT_URL"],
            access_key=conf["S3_ACCESS_KEY"],
            secret_key=conf["S3_SECRET_KEY"],
            region=conf["S3_REGION"],
            public_base=conf["S3_PUBLIC_BASE"],
            use_ssl=conf["S3_USE_SSL"],
            timeout=conf["MEDIA_STORE_TIMEOUT"],
            max_size=conf["IMAGE_MAX_SIZE"],
            max_dimension=conf["IMAGE_MAX_DIMENSION"],
        )

    def url(self, key: str) -> str:
        if self.public_base:
            return f"{self.public_base}/{key.lstrip('/')}"
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket_name}/{key.lstrip('/')}"
        return f"https://{self.bucket_name}.s3.amazonaws.com/{key.lstrip('/')}"

    def store(self, file_obj) -> StoredMedia:
        img = _read_image(file_obj, self.max_size)
        optimized_io, ext, content_type = _optimize_image(img, self.max_dimension)
        key = f"{_generate_basename(optimized_io.getbuffer())}.{ext}"
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=optimized_io.getvalue(),
                ContentType=content_type,
                CacheControl="max-age=31536000",
                Metadata={"original_name": getattr(file_obj, "name", "") or ""},
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error(f"S3 upload failed for {key}: {exc}")
            raise MediaStoreError("Image storage is unavailable.") from exc
        logger.info(f"Uploaded property image {key}")
        return StoredMedia(url=self.url(key), handle=key)

    def delete(self, handle: str) -> bool:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=handle)
        except (BotoCoreError, ClientError) as exc:
            logger.warning(f"Could not delete image {handle}: {exc}")
            return False
        logger.info(f"Deleted property image {handle}")
        return True


class FileSystemMediaStore:
    """Stores images under ``MEDIA_ROOT``; used in development and tests."""

    def __init__(self, *, location=None, base_url=None, max_size: int = 5 * 1024 * 1024, max_dimension: int = 1920):
        self.storage = FileSystemStorage(location=location, base_url=base_url)
        self.max_size = max_size
        self.max_dimension = max_dimension

    @classmethod
    def from_settings(cls) -> "FileSystemMediaStore":
        conf = settings.RENTALS
        return cls(
            location=settings.MEDIA_ROOT,
            base_url=settings.MEDIA_URL,
            max_size=conf["IMAGE_MAX_SIZE"],
            max_dimension=conf["IMAGE_MAX_DIMENSION"],
        )

    def store(self, file_obj) -> StoredMedia:
        img = _read_image(file_obj, self.max_size)
        optimized_io, ext, _ = _optimize_image(img, self.max_dimension)
        name = f"{_generate_basename(optimized_io.getbuffer())}.{ext}"
        try:
            saved = self.storage.save(name, ContentFile(optimized_io.getvalue()))
        except OSError as exc:
            logger.error(f"Saving image {name} failed: {exc}")
            raise MediaStoreError("Image storage is unavailable.") from exc
        return StoredMedia(url=self.storage.url(saved), handle=saved)

    def delete(self, handle: str) -> bool:
        try:
            self.storage.delete(handle)
        except OSError as exc:
            logger.warning(f"Could not delete image {handle}: {exc}")
            return False
        return True


@lru_cache(maxsize=1)
def get_media_store():
    """The configured media store, built once per process."""
    return import_string(settings.RENTALS["MEDIA_STORE"]).from_settings()


def _reset_media_store(*, setting, **kwargs):
    if setting in {"RENTALS", "MEDIA_ROOT", "MEDIA_URL"}:
        get_media_store.cache_clear()


setting_changed.connect(_reset_media_store)

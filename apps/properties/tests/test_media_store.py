"""Tests for the media store adapters."""

from __future__ import annotations

import os
import tempfile
from io import BytesIO
from unittest import mock

from botocore.exceptions import ClientError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase
from PIL import Image

from shared.infrastructure.media import FileSystemMediaStore, InvalidImage, MediaStoreError, S3MediaStore


def make_image(size=(40, 30), fmt: str = "PNG", mode: str = "RGB") -> SimpleUploadedFile:
    buffer = BytesIO()
    Image.new(mode, size, "red").save(buffer, format=fmt)
    return SimpleUploadedFile(f"photo.{fmt.lower()}", buffer.getvalue())


class FileSystemMediaStoreTests(SimpleTestCase):
    def setUp(self) -> None:
        self.root = tempfile.mkdtemp(prefix="media-store-")
        self.store = FileSystemMediaStore(location=self.root, base_url="/media/", max_size=1024 * 1024, max_dimension=16)

    def test_store_and_delete(self) -> None:
        stored = self.store.store(make_image())

        self.assertTrue(stored.handle.startswith("properties/"))
        self.assertTrue(stored.handle.endswith(".jpg"))
        self.assertEqual(stored.url, f"/media/{stored.handle}")
        path = os.path.join(self.root, stored.handle)
        with Image.open(path) as saved:
            self.assertLessEqual(max(saved.size), 16)

        self.assertTrue(self.store.delete(stored.handle))
        self.assertFalse(os.path.exists(path))

    def test_transparent_images_are_kept_as_webp(self) -> None:
        stored = self.store.store(make_image(mode="RGBA"))

        self.assertTrue(stored.handle.endswith(".webp"))

    def test_rejects_unsupported_or_oversized_files(self) -> None:
        with self.assertRaises(InvalidImage):
            self.store.store(make_image(fmt="GIF"))
        with self.assertRaises(InvalidImage):
            self.store.store(SimpleUploadedFile("notes.png", b"plain text"))

        tiny = FileSystemMediaStore(location=self.root, base_url="/media/", max_size=10)
        with self.assertRaises(InvalidImage):
            tiny.store(make_image())


class S3MediaStoreTests(SimpleTestCase):
    def setUp(self) -> None:
        self.store = S3MediaStore(
            bucket="rental-images",
            endpoint_url="http://minio:9000",
            access_key="key",
            secret_key="secret",
        )
        self.store.s3_client = mock.Mock()

    def test_store_uploads_and_builds_url(self) -> None:
        stored = self.store.store(make_image())

        call = self.store.s3_client.put_object.call_args.kwargs
        self.assertEqual(call["Bucket"], "rental-images")
        self.assertEqual(call["Key"], stored.handle)
        self.assertEqual(call["ContentType"], "image/jpeg")
        self.assertEqual(stored.url, f"http://minio:9000/rental-images/{stored.handle}")

    def test_upload_failure_is_media_store_error(self) -> None:
        self.store.s3_client.put_object.side_effect = ClientError({"Error": {"Code": "500"}}, "PutObject")

        with self.assertRaises(MediaStoreError):
            self.store.store(make_image())

    def test_delete_failure_is_reported_not_raised(self) -> None:
        self.store.s3_client.delete_object.side_effect = ClientError({"Error": {"Code": "503"}}, "DeleteObject")

        with self.assertLogs("shared.infrastructure.media", level="WARNING"):
            self.assertFalse(self.store.delete("properties/abc.jpg"))

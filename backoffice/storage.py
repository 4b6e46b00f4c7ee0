"""
Storage abstraction for S3-compatible object storage and in-memory testing.
"""

from __future__ import annotations

import re
import secrets
import string
import time
from dataclasses import dataclass, field
from typing import Optional, Protocol
from urllib.parse import unquote

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

AUTHOR_FOLDER = "authors"
TEAM_FOLDER = "team"
BLOG_FEATURED_FOLDER = "blogs/featured"
GALLERY_IMAGE_FOLDER = "gallery/images"
GALLERY_VIDEO_FOLDER = "gallery/videos"
GALLERY_THUMBNAIL_FOLDER = "gallery/thumbnails"

UPLOAD_FOLDERS = (
    AUTHOR_FOLDER,
    TEAM_FOLDER,
    BLOG_FEATURED_FOLDER,
    GALLERY_IMAGE_FOLDER,
    GALLERY_VIDEO_FOLDER,
    GALLERY_THUMBNAIL_FOLDER,
)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
_RANDOM_ALPHABET = string.ascii_lowercase + string.digits


class StorageError(RuntimeError):
    """Raised when the object store rejects or fails an operation."""


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        ...

    def presign_put(
        self,
        path: str,
        expires_in: int = 3600,
        content_type: str = "application/octet-stream",
    ) -> str:
        ...

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> None:
        ...

    def delete(self, path: str) -> None:
        ...

    def public_url(self, path: str) -> str:
        ...

    def path_from_url(self, url: str) -> Optional[str]:
        ...


def generate_object_path(filename: str, folder: str = "") -> str:
    """
    Build a unique object key: ``{folder}/{epoch_ms}-{random}-{sanitized name}``.
    """
    sanitized = _UNSAFE_NAME_CHARS.sub("_", filename or "file")
    suffix = "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(7))
    name = f"{int(time.time() * 1000)}-{suffix}-{sanitized}"
    return f"{folder.strip('/')}/{name}" if folder else name


def _path_under_base(base_url: str, url: str) -> Optional[str]:
    base = base_url.rstrip("/") + "/"
    if not url or not url.startswith(base):
        return None
    path = url[len(base) :].split("?", 1)[0]
    return unquote(path) or None


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://example.test/storage"
    stored_objects: dict = field(default_factory=dict)
    deleted_paths: list = field(default_factory=list)

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        return f"{self.base_url}/{path}?op=get&expires={expires_in}"

    def presign_put(
        self,
        path: str,
        expires_in: int = 3600,
        content_type: str = "application/octet-stream",
    ) -> str:
        return f"{self.base_url}/{path}?op=put&expires={expires_in}"

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> None:
        self.stored_objects[path] = data

    def delete(self, path: str) -> None:
        self.stored_objects.pop(path, None)
        self.deleted_paths.append(path)

    def public_url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    def path_from_url(self, url: str) -> Optional[str]:
        return _path_under_base(self.base_url, url)

    def get_bytes(self, path: str) -> bytes:
        stored = self.stored_objects.get(path)
        if stored is None:
            raise FileNotFoundError(path)
        return stored


@dataclass
class S3StorageClient:
    """
    S3-compatible storage client (AWS, R2, Sevalla, COS, MinIO...).
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    public_base_url: str = ""

    def __post_init__(self):
        config = Config(
            s3={"addressing_style": "virtual"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )
        if not self.public_base_url:
            base = (self.endpoint or f"https://s3.{self.region}.amazonaws.com").rstrip("/")
            self.public_base_url = f"{base}/{self.bucket}"

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        return self._client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self.bucket, "Key": path},
            ExpiresIn=expires_in,
        )

    def presign_put(
        self,
        path: str,
        expires_in: int = 3600,
        content_type: str = "application/octet-stream",
    ) -> str:
        return self._client.generate_presigned_url(
            ClientMethod="put_object",
            Params={
                "Bucket": self.bucket,
                "Key": path,
                "ContentType": content_type,
            },
            ExpiresIn=expires_in,
        )

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> None:
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Upload of {path} failed: {exc}") from exc

    def delete(self, path: str) -> None:
        try:
            self._client.delete_object(Bucket=self.bucket, Key=path)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Delete of {path} failed: {exc}") from exc

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/{path}"

    def path_from_url(self, url: str) -> Optional[str]:
        return _path_under_base(self.public_base_url, url)

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import PurePath
from typing import BinaryIO, Protocol

from imagekitio import ImageKit
from imagekitio.models.UploadFileRequestOptions import UploadFileRequestOptions

from tablemenu.core.config import settings
from tablemenu.core.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    url: str
    file_id: str
    name: str
    path: str


@dataclass(frozen=True)
class UploadAuth:
    token: str
    expire: int
    signature: str
    public_key: str | None = None
    url_endpoint: str | None = None


class ImageHostAdapter(Protocol):
    provider_code: str

    def upload(self, content: bytes, filename: str, folder: str) -> UploadedImage:
        ...

    def upload_auth(self) -> UploadAuth:
        ...


class ImageKitImageHost:
    """ImageKit through its SDK; ``client`` may be any object with the same two calls."""

    provider_code = "imagekit"

    def __init__(
        self,
        *,
        private_key: str | None,
        public_key: str | None = None,
        url_endpoint: str | None = None,
        auth_ttl_seconds: int = 1800,
        client=None,
    ):
        self.private_key = private_key
        self.public_key = public_key
        self.url_endpoint = url_endpoint
        self.auth_ttl_seconds = auth_ttl_seconds
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.private_key:
                raise UpstreamError("ImageKit is not configured")
            self._client = ImageKit(
                private_key=self.private_key,
                public_key=self.public_key or "",
                url_endpoint=self.url_endpoint or "",
            )
        return self._client

    def upload(self, content: bytes, filename: str, folder: str) -> UploadedImage:
        client = self.client
        try:
            result = client.upload_file(
                file=content,
                file_name=filename,
                options=UploadFileRequestOptions(folder=folder, use_unique_file_name=True),
            )
        except Exception as exc:
            logger.warning("imagekit upload failed filename=%r: %s", filename, exc)
            raise UpstreamError("Failed to upload image", details=[{"message": str(exc)}]) from exc

        try:
            return UploadedImage(
                url=result.url,
                file_id=result.file_id,
                name=result.name,
                path=result.file_path,
            )
        except AttributeError as exc:
            logger.warning("imagekit upload returned an incomplete result filename=%r", filename)
            raise UpstreamError(
                "Failed to upload image", details=[{"message": "Incomplete ImageKit upload result"}]
            ) from exc

    def upload_auth(self, token: str = "", expire: int | None = None) -> UploadAuth:
        expire = expire or int(time.time()) + self.auth_ttl_seconds
        params = self.client.get_authentication_parameters(token, expire)
        return UploadAuth(
            token=params["token"],
            expire=int(params["expire"]),
            signature=params["signature"],
            public_key=self.public_key,
            url_endpoint=self.url_endpoint,
        )


class NoopImageHost:
    provider_code = "none"

    def upload(self, content: bytes, filename: str, folder: str) -> UploadedImage:
        raise UpstreamError("No image provider configured")

    def upload_auth(self) -> UploadAuth:
        raise UpstreamError("No image provider configured")


def get_image_host() -> ImageHostAdapter:
    code = (settings.IMAGE_PROVIDER or "none").strip().lower()
    if code == "imagekit":
        return ImageKitImageHost(
            private_key=settings.IMAGEKIT_PRIVATE_KEY,
            public_key=settings.IMAGEKIT_PUBLIC_KEY,
            url_endpoint=settings.IMAGEKIT_URL_ENDPOINT,
            auth_ttl_seconds=settings.IMAGE_AUTH_TTL_SECONDS,
        )
    return NoopImageHost()


def max_upload_bytes() -> int:
    return settings.IMAGE_UPLOAD_MAX_SIZE_MB * 1024 * 1024


def read_upload(stream: BinaryIO) -> bytes:
    """Read at most one byte past the size limit so oversized files are never buffered whole."""
    return stream.read(max_upload_bytes() + 1)


def check_upload(filename: str | None, content: bytes) -> str:
    """Validate an incoming image and return its sanitised file name."""
    name = PurePath(filename or "").name.strip()
    if not name or not content:
        raise ValidationError.for_field("file", "File is required", summary="No file provided")

    allowed = {ext.strip().lower() for ext in settings.IMAGE_UPLOAD_ALLOWED_EXT.split(",") if ext.strip()}
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if ext not in allowed:
        raise ValidationError.for_field("file", f"Allowed extensions: {', '.join(sorted(allowed))}")

    if len(content) > max_upload_bytes():
        raise ValidationError.for_field("file", f"File exceeds {settings.IMAGE_UPLOAD_MAX_SIZE_MB} MB")
    return name

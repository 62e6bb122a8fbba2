from __future__ import annotations

import logging

from qrdine.application.dto.responses import UploadResponse
from qrdine.application.ports.services import ImageHost, ImageHostError

MAX_UPLOAD_BYTES = 2 * 1024 * 1024
ALLOWED_CONTENT_TYPES = frozenset({"image/png", "image/jpeg", "image/jpg"})

logger = logging.getLogger(__name__)


class InvalidUploadError(Exception):
    pass


class ImageUploadFailedError(Exception):
    pass


class UploadImage:
    def __init__(self, image_host: ImageHost) -> None:
        self._image_host = image_host

    def execute(self, filename: str, content: bytes, content_type: str | None) -> UploadResponse:
        normalized_type = (content_type or "").split(";")[0].strip().lower()
        if normalized_type not in ALLOWED_CONTENT_TYPES:
            raise InvalidUploadError(
                f"unsupported file type {content_type!r}, expected png or jpeg"
            )
        if not content:
            raise InvalidUploadError("uploaded file is empty")
        if len(content) > MAX_UPLOAD_BYTES:
            raise InvalidUploadError("file exceeds the 2 MB limit")

        try:
            url = self._image_host.upload(filename or "upload", content, normalized_type)
        except ImageHostError as exc:
            logger.warning("image_upload_failed", extra={"error": str(exc)})
            raise ImageUploadFailedError(str(exc)) from exc
        return UploadResponse(url=url)

from __future__ import annotations

import os

import httpx

from qrdine.application.ports.services import ImageHost, ImageHostError

DEFAULT_IMAGE_HOST_URL = "https://catbox.moe/user/api.php"
EXPECTED_HOST = "catbox.moe"


class CatboxImageHost(ImageHost):
    def __init__(
        self,
        upload_url: str | None = None,
        client: httpx.Client | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._upload_url = upload_url or os.getenv("IMAGE_HOST_URL", DEFAULT_IMAGE_HOST_URL)
        self._client = client
        self._timeout_seconds = timeout_seconds

    def upload(self, filename: str, content: bytes, content_type: str) -> str:
        data = {"reqtype": "fileupload"}
        files = {"fileToUpload": (filename, content, content_type)}
        try:
            if self._client is not None:
                response = self._client.post(self._upload_url, data=data, files=files)
            else:
                with httpx.Client(timeout=self._timeout_seconds) as client:
                    response = client.post(self._upload_url, data=data, files=files)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ImageHostError(f"image host upload failed: {exc}") from exc

        url = response.text.strip()
        if not url or EXPECTED_HOST not in url:
            raise ImageHostError("invalid response from image host")
        return url

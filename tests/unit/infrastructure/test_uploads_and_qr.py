from __future__ import annotations

import io
import sys
from pathlib import Path

import httpx
import pytest
from PIL import Image

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.application.ports.services import ImageHostError
from qrdine.application.use_cases.upload_image import (
    MAX_UPLOAD_BYTES,
    ImageUploadFailedError,
    InvalidUploadError,
    UploadImage,
)
from qrdine.infrastructure.qr.qrcode_encoder import QrCodePngEncoder
from qrdine.infrastructure.storage.catbox import CatboxImageHost


class FakeImageHost:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.uploads: list[tuple[str, int, str]] = []

    def upload(self, filename: str, content: bytes, content_type: str) -> str:
        if self.fail:
            raise ImageHostError("host down")
        self.uploads.append((filename, len(content), content_type))
        return f"https://files.catbox.moe/{filename}"


def _host(handler) -> CatboxImageHost:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return CatboxImageHost(upload_url="https://catbox.moe/user/api.php", client=client)


def test_upload_accepts_png_and_normalizes_type() -> None:
    host = FakeImageHost()

    result = UploadImage(host).execute("menu.png", b"\x89PNG", "image/png; charset=binary")

    assert result.url == "https://files.catbox.moe/menu.png"
    assert host.uploads == [("menu.png", 4, "image/png")]


@pytest.mark.parametrize(
    ("content", "content_type"),
    [
        (b"GIF89a", "image/gif"),
        (b"", "image/jpeg"),
        (b"x" * (MAX_UPLOAD_BYTES + 1), "image/jpeg"),
        (b"data", None),
    ],
)
def test_upload_rejects_bad_files(content: bytes, content_type: str | None) -> None:
    host = FakeImageHost()

    with pytest.raises(InvalidUploadError):
        UploadImage(host).execute("file", content, content_type)
    assert host.uploads == []


def test_host_failure_is_reported() -> None:
    with pytest.raises(ImageUploadFailedError):
        UploadImage(FakeImageHost(fail=True)).execute("a.jpg", b"data", "image/jpeg")


def test_catbox_returns_hosted_url() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="https://files.catbox.moe/abc123.png\n")

    url = _host(handler).upload("menu.png", b"\x89PNG", "image/png")

    assert url == "https://files.catbox.moe/abc123.png"
    body = seen[0].read()
    assert b'name="reqtype"' in body
    assert b'name="fileToUpload"; filename="menu.png"' in body


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="oops"),
        httpx.Response(200, text="error: file too big"),
        httpx.Response(200, text=""),
    ],
)
def test_catbox_rejects_unexpected_responses(response: httpx.Response) -> None:
    with pytest.raises(ImageHostError):
        _host(lambda request: response).upload("menu.png", b"\x89PNG", "image/png")


def test_qr_encoder_produces_square_png() -> None:
    png = QrCodePngEncoder().encode_png("http://localhost:3000/tables/7")

    assert png.startswith(b"\x89PNG\r\n\x1a\n")
    with Image.open(io.BytesIO(png)) as image:
        assert image.size == (300, 300)

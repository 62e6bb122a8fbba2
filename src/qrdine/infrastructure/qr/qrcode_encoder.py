from __future__ import annotations

import io

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_M

from qrdine.application.ports.services import QrEncoder

TARGET_WIDTH_PX = 300
BORDER_MODULES = 2


class QrCodePngEncoder(QrEncoder):
    def __init__(self, width_px: int = TARGET_WIDTH_PX) -> None:
        self._width_px = width_px

    def encode_png(self, data: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=ERROR_CORRECT_M,
            box_size=10,
            border=BORDER_MODULES,
        )
        qr.add_data(data)
        qr.make(fit=True)

        image = qr.make_image(fill_color="black", back_color="white").get_image()
        image = image.resize((self._width_px, self._width_px), Image.NEAREST)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

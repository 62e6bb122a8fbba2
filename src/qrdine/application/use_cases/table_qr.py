from __future__ import annotations

import base64
import logging
from datetime import datetime, timezone
from typing import Callable

from qrdine.application.dto.requests import GenerateQrRequest
from qrdine.application.dto.responses import QrCodeEnvelope
from qrdine.application.mappers.table_mapper import to_qr_code_response
from qrdine.application.ports.repositories import TableRepository
from qrdine.application.ports.services import QrEncoder
from qrdine.application.use_cases.manage_tables import load_table
from qrdine.domain.common.ids import TableId
from qrdine.domain.table.entities import QrCode, qr_target_url

GENERATE_QR_ACTION = "generate-qr"

logger = logging.getLogger(__name__)


class InvalidQrActionError(Exception):
    pass


class GetTableQr:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, table_id: TableId) -> QrCodeEnvelope:
        table = load_table(self._table_repository, table_id)
        if table.qr_code is None:
            return QrCodeEnvelope(message="QR code has not been generated", data=None)
        return QrCodeEnvelope(
            message="QR code found",
            data=to_qr_code_response(table, table.qr_code, is_existing=True),
        )


class GenerateTableQr:
    def __init__(
        self,
        table_repository: TableRepository,
        encoder: QrEncoder,
        base_url: str,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._table_repository = table_repository
        self._encoder = encoder
        self._base_url = base_url
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, table_id: TableId, request_dto: GenerateQrRequest) -> QrCodeEnvelope:
        if request_dto.action != GENERATE_QR_ACTION:
            raise InvalidQrActionError(f"unsupported action {request_dto.action!r}")

        table = load_table(self._table_repository, table_id)
        if table.qr_code is not None and not request_dto.force_regenerate:
            return QrCodeEnvelope(
                message="QR code already exists",
                data=to_qr_code_response(table, table.qr_code, is_existing=True),
            )

        now = self._clock()
        target_url = qr_target_url(self._base_url, table.number)
        png_base64 = base64.b64encode(self._encoder.encode_png(target_url)).decode("ascii")
        qr_code = QrCode(
            data_url=f"data:image/png;base64,{png_base64}",
            target_url=target_url,
            png_base64=png_base64,
            generated_at=now,
        )
        updated = table.with_qr_code(qr_code, now)
        self._table_repository.update(updated)
        logger.info(
            "table_qr_generated",
            extra={"table_id": str(table_id), "forced": request_dto.force_regenerate},
        )
        return QrCodeEnvelope(
            message="QR code generated",
            data=to_qr_code_response(updated, qr_code, is_existing=False),
        )


class DeleteTableQr:
    def __init__(self, table_repository: TableRepository) -> None:
        self._table_repository = table_repository

    def execute(self, table_id: TableId) -> QrCodeEnvelope:
        table = load_table(self._table_repository, table_id)
        self._table_repository.update(table.without_qr_code(datetime.now(timezone.utc)))
        return QrCodeEnvelope(message="QR code deleted", data=None)

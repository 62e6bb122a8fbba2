from __future__ import annotations

import os

from fastapi import APIRouter, Depends

from qrdine.api.security import Principal, require_admin
from qrdine.application.dto.requests import GenerateQrRequest
from qrdine.application.dto.responses import QrCodeEnvelope
from qrdine.application.use_cases.table_qr import DeleteTableQr, GenerateTableQr, GetTableQr
from qrdine.domain.common.ids import TableId
from qrdine.infrastructure.db.repositories.table_repo import SqlAlchemyTableRepository
from qrdine.infrastructure.qr.qrcode_encoder import QrCodePngEncoder

router = APIRouter(tags=["tables"])


def _customer_base_url() -> str:
    return os.getenv("PUBLIC_BASE_URL", "http://localhost:3000")


def _get_table_qr_use_case() -> GetTableQr:
    return GetTableQr(table_repository=SqlAlchemyTableRepository())


def _generate_table_qr_use_case() -> GenerateTableQr:
    return GenerateTableQr(
        table_repository=SqlAlchemyTableRepository(),
        encoder=QrCodePngEncoder(),
        base_url=_customer_base_url(),
    )


def _delete_table_qr_use_case() -> DeleteTableQr:
    return DeleteTableQr(table_repository=SqlAlchemyTableRepository())


@router.get("/v1/tables/{table_id}/qr", response_model=QrCodeEnvelope)
def get_table_qr(table_id: str, _: Principal = Depends(require_admin)) -> QrCodeEnvelope:
    return _get_table_qr_use_case().execute(table_id=TableId(table_id))


@router.post("/v1/tables/{table_id}/qr", response_model=QrCodeEnvelope)
def generate_table_qr(
    table_id: str,
    request_dto: GenerateQrRequest,
    _: Principal = Depends(require_admin),
) -> QrCodeEnvelope:
    return _generate_table_qr_use_case().execute(
        table_id=TableId(table_id),
        request_dto=request_dto,
    )


@router.delete("/v1/tables/{table_id}/qr", response_model=QrCodeEnvelope)
def delete_table_qr(table_id: str, _: Principal = Depends(require_admin)) -> QrCodeEnvelope:
    return _delete_table_qr_use_case().execute(table_id=TableId(table_id))

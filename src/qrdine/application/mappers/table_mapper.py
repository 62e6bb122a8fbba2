from __future__ import annotations

from qrdine.application.dto.responses import (
    QrCodeResponse,
    TableInfoResponse,
    TableResponse,
)
from qrdine.domain.table.entities import DiningTable, QrCode


def to_table_response(table: DiningTable) -> TableResponse:
    return TableResponse(
        tableId=str(table.table_id),
        number=str(table.number),
        name=table.name,
        capacity=table.capacity,
        location=table.location,
        status=table.status.value,
        activeOrderId=str(table.active_order_id) if table.active_order_id else None,
        hasQrCode=table.qr_code is not None,
        createdAt=table.created_at,
        updatedAt=table.updated_at,
    )


def to_qr_code_response(table: DiningTable, qr_code: QrCode, is_existing: bool) -> QrCodeResponse:
    return QrCodeResponse(
        qrCodeDataUrl=qr_code.data_url,
        qrData=qr_code.target_url,
        qrCodeBase64=qr_code.png_base64,
        generatedAt=qr_code.generated_at,
        tableInfo=TableInfoResponse(
            tableId=str(table.table_id),
            number=str(table.number),
            name=table.name,
        ),
        isExisting=is_existing,
    )

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from qrdine.application.ports.repositories import TableRepository
from qrdine.domain.common.ids import OrderId, TableId, TableNumber
from qrdine.domain.table.entities import DiningTable, QrCode, TableStatus
from qrdine.infrastructure.db.models.table import DiningTableModel
from qrdine.infrastructure.db.repositories.utc import as_utc
from qrdine.infrastructure.db.session import get_engine


class SqlAlchemyTableRepository(TableRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, table_id: TableId) -> DiningTable | None:
        with Session(self._engine) as session:
            model = session.get(DiningTableModel, str(table_id))
            return self._to_domain(model) if model is not None else None

    def get_by_number(self, number: TableNumber) -> DiningTable | None:
        statement = select(DiningTableModel).where(DiningTableModel.number == str(number))
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            return self._to_domain(model) if model is not None else None

    def list_all(self) -> list[DiningTable]:
        statement = select(DiningTableModel).order_by(DiningTableModel.created_at)
        with Session(self._engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def add(self, table: DiningTable) -> None:
        with Session(self._engine) as session:
            session.add(self._to_model(table))
            session.commit()

    def update(self, table: DiningTable) -> None:
        with Session(self._engine) as session:
            session.merge(self._to_model(table))
            session.commit()

    def delete(self, table_id: TableId) -> bool:
        with Session(self._engine) as session:
            model = session.get(DiningTableModel, str(table_id))
            if model is None:
                return False
            session.delete(model)
            session.commit()
        return True

    def _to_model(self, table: DiningTable) -> DiningTableModel:
        return DiningTableModel(
            id=str(table.table_id),
            number=str(table.number),
            name=table.name,
            capacity=table.capacity,
            location=table.location,
            status=table.status.value,
            active_order_id=str(table.active_order_id) if table.active_order_id else None,
            qr_code=_qr_to_document(table.qr_code) if table.qr_code else None,
            created_at=table.created_at,
            updated_at=table.updated_at,
        )

    def _to_domain(self, model: DiningTableModel) -> DiningTable:
        return DiningTable(
            table_id=TableId(model.id),
            number=TableNumber(model.number),
            name=model.name,
            capacity=model.capacity,
            location=model.location,
            status=TableStatus(model.status),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
            active_order_id=OrderId(model.active_order_id) if model.active_order_id else None,
            qr_code=_qr_from_document(model.qr_code) if model.qr_code else None,
        )


def _qr_to_document(qr_code: QrCode) -> dict[str, Any]:
    return {
        "qrCodeDataURL": qr_code.data_url,
        "qrData": qr_code.target_url,
        "qrCodeBase64": qr_code.png_base64,
        "generatedAt": qr_code.generated_at.isoformat(),
    }


def _qr_from_document(document: dict[str, Any]) -> QrCode:
    return QrCode(
        data_url=document["qrCodeDataURL"],
        target_url=document["qrData"],
        png_base64=document["qrCodeBase64"],
        generated_at=as_utc(datetime.fromisoformat(document["generatedAt"])),
    )

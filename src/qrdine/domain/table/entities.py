from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from qrdine.domain.common.errors import DomainValidationError
from qrdine.domain.common.ids import OrderId, TableId, TableNumber


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"


@dataclass(frozen=True)
class QrCode:
    data_url: str
    target_url: str
    png_base64: str
    generated_at: datetime


@dataclass(frozen=True)
class DiningTable:
    table_id: TableId
    number: TableNumber
    name: str
    capacity: int
    location: str
    status: TableStatus
    created_at: datetime
    updated_at: datetime
    active_order_id: OrderId | None = None
    qr_code: QrCode | None = None

    def __post_init__(self) -> None:
        if not str(self.number).strip():
            raise DomainValidationError("number must be non-empty")
        if not self.name.strip():
            raise DomainValidationError("name must be non-empty")
        if self.capacity < 1:
            raise DomainValidationError("capacity must be >= 1")

    def with_qr_code(self, qr_code: QrCode, now: datetime) -> DiningTable:
        return replace(self, qr_code=qr_code, updated_at=now)

    def without_qr_code(self, now: datetime) -> DiningTable:
        return replace(self, qr_code=None, updated_at=now)


def qr_target_url(base_url: str, number: TableNumber) -> str:
    return f"{base_url.rstrip('/')}/tables/{number}"

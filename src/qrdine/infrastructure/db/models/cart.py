from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from qrdine.infrastructure.db.models.base import Base, JsonDocument


class CartModel(Base):
    __tablename__ = "carts"

    table_number: Mapped[str] = mapped_column(String(20), primary_key=True)
    items: Mapped[list[dict[str, Any]]] = mapped_column(JsonDocument, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")
    status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

from __future__ import annotations

from typing import Any

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from qrdine.infrastructure.db.models.base import Base, JsonDocument


class RestaurantModel(Base):
    __tablename__ = "restaurants"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    tagline: Mapped[str] = mapped_column(String(255), nullable=False, server_default="")
    logo_url: Mapped[str] = mapped_column(String(1000), nullable=False, server_default="")
    cover_image_url: Mapped[str] = mapped_column(String(1000), nullable=False, server_default="")
    description: Mapped[str] = mapped_column(String(500), nullable=False, server_default="")
    contact: Mapped[dict[str, Any]] = mapped_column(JsonDocument, nullable=False)

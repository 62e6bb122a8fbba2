from __future__ import annotations

from dataclasses import asdict

from sqlalchemy import Engine, func, select
from sqlalchemy.orm import Session

from qrdine.application.ports.repositories import RestaurantRepository
from qrdine.domain.common.ids import RestaurantId
from qrdine.domain.restaurant.entities import RestaurantContact, RestaurantProfile
from qrdine.infrastructure.db.models.restaurant import RestaurantModel
from qrdine.infrastructure.db.session import get_engine

_CONTACT_FIELDS = tuple(RestaurantContact.__dataclass_fields__)


class SqlAlchemyRestaurantRepository(RestaurantRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, restaurant_id: RestaurantId) -> RestaurantProfile | None:
        with Session(self._engine) as session:
            model = session.get(RestaurantModel, str(restaurant_id))
            return self._to_domain(model) if model is not None else None

    def name_exists(self, name: str) -> bool:
        statement = (
            select(RestaurantModel.id)
            .where(func.lower(RestaurantModel.name) == name.strip().lower())
            .limit(1)
        )
        with Session(self._engine) as session:
            return session.execute(statement).scalar_one_or_none() is not None

    def list_all(self) -> list[RestaurantProfile]:
        statement = select(RestaurantModel).order_by(RestaurantModel.name)
        with Session(self._engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def add(self, profile: RestaurantProfile) -> None:
        with Session(self._engine) as session:
            session.add(self._to_model(profile))
            session.commit()

    def update(self, profile: RestaurantProfile) -> None:
        with Session(self._engine) as session:
            session.merge(self._to_model(profile))
            session.commit()

    def _to_model(self, profile: RestaurantProfile) -> RestaurantModel:
        return RestaurantModel(
            id=str(profile.restaurant_id),
            name=profile.name,
            address=profile.address,
            tagline=profile.tagline,
            logo_url=profile.logo_url,
            cover_image_url=profile.cover_image_url,
            description=profile.description,
            contact=asdict(profile.contact),
        )

    def _to_domain(self, model: RestaurantModel) -> RestaurantProfile:
        contact = model.contact or {}
        return RestaurantProfile(
            restaurant_id=RestaurantId(model.id),
            name=model.name,
            address=model.address,
            tagline=model.tagline or "",
            logo_url=model.logo_url or "",
            cover_image_url=model.cover_image_url or "",
            description=model.description or "",
            contact=RestaurantContact(
                **{key: str(contact.get(key) or "") for key in _CONTACT_FIELDS}
            ),
        )

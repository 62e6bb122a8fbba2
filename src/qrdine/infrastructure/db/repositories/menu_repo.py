from __future__ import annotations

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from qrdine.application.ports.repositories import MenuRepository
from qrdine.domain.common.ids import MenuItemId
from qrdine.domain.menu.entities import MenuItem, Nutrition
from qrdine.infrastructure.db.models.menu import MenuItemModel
from qrdine.infrastructure.db.repositories.utc import as_utc
from qrdine.infrastructure.db.session import get_engine


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, item_id: MenuItemId) -> MenuItem | None:
        with Session(self._engine) as session:
            model = session.get(MenuItemModel, str(item_id))
            return self._to_domain(model) if model is not None else None

    def list_all(self) -> list[MenuItem]:
        statement = select(MenuItemModel).order_by(MenuItemModel.category, MenuItemModel.name)
        with Session(self._engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def add(self, item: MenuItem) -> None:
        with Session(self._engine) as session:
            session.add(self._to_model(item))
            session.commit()

    def update(self, item: MenuItem) -> None:
        with Session(self._engine) as session:
            session.merge(self._to_model(item))
            session.commit()

    def delete(self, item_id: MenuItemId) -> bool:
        with Session(self._engine) as session:
            model = session.get(MenuItemModel, str(item_id))
            if model is None:
                return False
            session.delete(model)
            session.commit()
        return True

    def _to_model(self, item: MenuItem) -> MenuItemModel:
        return MenuItemModel(
            id=str(item.item_id),
            name=item.name,
            description=item.description,
            composition=item.composition,
            category=item.category,
            price=item.price,
            stock=item.stock,
            image_url=item.image_url,
            nutrition=item.nutrition.to_dict() if item.nutrition else None,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )

    def _to_domain(self, model: MenuItemModel) -> MenuItem:
        return MenuItem(
            item_id=MenuItemId(model.id),
            name=model.name,
            description=model.description or "",
            category=model.category,
            price=model.price,
            stock=model.stock,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
            composition=model.composition,
            image_url=model.image_url,
            nutrition=Nutrition.from_mapping(model.nutrition) if model.nutrition else None,
        )

from __future__ import annotations

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from qrdine.application.ports.repositories import ReviewRepository
from qrdine.domain.common.ids import OrderId, ReviewId, TableNumber
from qrdine.domain.review.entities import Review
from qrdine.infrastructure.db.models.review import ReviewModel
from qrdine.infrastructure.db.repositories.utc import as_utc
from qrdine.infrastructure.db.session import get_engine


class SqlAlchemyReviewRepository(ReviewRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, review_id: ReviewId) -> Review | None:
        with Session(self._engine) as session:
            model = session.get(ReviewModel, str(review_id))
            return self._to_domain(model) if model is not None else None

    def list_all(
        self,
        table_number: TableNumber | None = None,
        order_id: OrderId | None = None,
    ) -> list[Review]:
        statement = select(ReviewModel)
        if table_number is not None:
            statement = statement.where(ReviewModel.table_number == str(table_number))
        if order_id is not None:
            statement = statement.where(ReviewModel.order_id == str(order_id))
        statement = statement.order_by(ReviewModel.created_at.desc())
        with Session(self._engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def add(self, review: Review) -> None:
        with Session(self._engine) as session:
            session.add(self._to_model(review))
            session.commit()

    def update(self, review: Review) -> None:
        with Session(self._engine) as session:
            session.merge(self._to_model(review))
            session.commit()

    def delete(self, review_id: ReviewId) -> bool:
        with Session(self._engine) as session:
            model = session.get(ReviewModel, str(review_id))
            if model is None:
                return False
            session.delete(model)
            session.commit()
        return True

    def ratings(self) -> list[int]:
        with Session(self._engine) as session:
            return list(session.execute(select(ReviewModel.rating)).scalars().all())

    def _to_model(self, review: Review) -> ReviewModel:
        return ReviewModel(
            id=str(review.review_id),
            order_id=str(review.order_id),
            table_number=str(review.table_number),
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )

    def _to_domain(self, model: ReviewModel) -> Review:
        return Review(
            review_id=ReviewId(model.id),
            order_id=OrderId(model.order_id),
            table_number=TableNumber(model.table_number),
            rating=model.rating,
            comment=model.comment or "",
            created_at=as_utc(model.created_at),
        )

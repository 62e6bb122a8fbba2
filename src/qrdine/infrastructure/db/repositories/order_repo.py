from __future__ import annotations

from sqlalchemy import Engine, Select, select, update
from sqlalchemy.orm import Session, joinedload

from qrdine.application.ports.repositories import OptimisticConcurrencyError, OrderRepository
from qrdine.domain.cart.entities import Cart
from qrdine.domain.common.ids import MenuItemId, OrderId, TableNumber
from qrdine.domain.common.money import Money
from qrdine.domain.order.entities import Order, OrderLine, OrderStatus
from qrdine.infrastructure.db.models.order import OrderLineModel, OrderModel
from qrdine.infrastructure.db.repositories.cart_repo import cart_to_model
from qrdine.infrastructure.db.repositories.utc import as_utc
from qrdine.infrastructure.db.session import get_engine


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, order: Order) -> None:
        order_model = self._to_model(order)
        with Session(self._engine) as session:
            session.add(order_model)
            session.commit()

    def get(self, order_id: OrderId) -> Order | None:
        statement = (
            select(OrderModel)
            .options(joinedload(OrderModel.lines))
            .where(OrderModel.id == str(order_id))
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).unique().scalar_one_or_none()

            if model is None:
                return None

            return self._to_domain(model)

    def delete(self, order_id: OrderId) -> bool:
        with Session(self._engine) as session:
            model = session.get(OrderModel, str(order_id))
            if model is None:
                return False
            session.delete(model)
            session.commit()
        return True

    def update_status_with_version(self, order: Order, expected_version: int) -> Order:
        with Session(self._engine) as session:
            self._compare_and_set_status(session, order, expected_version)
            session.commit()
        return self._reload(order.order_id)

    def settle_payment(self, order: Order, expected_version: int, cart: Cart) -> Order:
        with Session(self._engine) as session:
            self._compare_and_set_status(session, order, expected_version)
            session.merge(cart_to_model(cart))
            session.commit()
        return self._reload(order.order_id)

    def list_by_statuses(self, statuses: frozenset[OrderStatus] | None) -> list[Order]:
        statement = select(OrderModel).options(joinedload(OrderModel.lines))
        if statuses is not None:
            statement = statement.where(OrderModel.status.in_([s.value for s in statuses]))
        return self._list(statement.order_by(OrderModel.created_at.desc(), OrderModel.id.desc()))

    def list_for_table(self, table_number: TableNumber) -> list[Order]:
        statement = (
            select(OrderModel)
            .options(joinedload(OrderModel.lines))
            .where(OrderModel.table_number == str(table_number))
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        return self._list(statement)

    def _list(self, statement: Select[tuple[OrderModel]]) -> list[Order]:
        with Session(self._engine) as session:
            models = list(session.execute(statement).unique().scalars().all())
            return [self._to_domain(model) for model in models]

    def _compare_and_set_status(
        self,
        session: Session,
        order: Order,
        expected_version: int,
    ) -> None:
        statement = (
            update(OrderModel)
            .where(
                OrderModel.id == str(order.order_id),
                OrderModel.version == expected_version,
            )
            .values(
                status=order.status.value,
                updated_at=order.updated_at,
                version=OrderModel.version + 1,
            )
        )
        result = session.execute(statement)
        if result.rowcount != 1:
            session.rollback()
            raise OptimisticConcurrencyError(f"order {order.order_id} version conflict")

    def _reload(self, order_id: OrderId) -> Order:
        updated = self.get(order_id)
        if updated is None:
            raise RuntimeError(f"order {order_id} not found after status update")
        return updated

    def _to_model(self, order: Order) -> OrderModel:
        order_model = OrderModel(
            id=str(order.order_id),
            table_number=str(order.table_number),
            status=order.status.value,
            version=order.version,
            subtotal=order.subtotal.amount,
            tax=order.tax.amount,
            total=order.total.amount,
            currency=order.total.currency,
            payment_method=order.payment_method,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            payment_token=order.payment_token,
            payment_redirect_url=order.payment_redirect_url,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
        order_model.lines = [
            OrderLineModel(
                order_id=str(order.order_id),
                position=position,
                item_id=str(line.item_id),
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price.amount,
                line_total=line.line_total.amount,
                currency=line.unit_price.currency,
            )
            for position, line in enumerate(order.lines)
        ]
        return order_model

    def _to_domain(self, model: OrderModel) -> Order:
        lines = [
            OrderLine(
                item_id=MenuItemId(line.item_id),
                name=line.name,
                quantity=line.quantity,
                unit_price=Money(amount=line.unit_price, currency=line.currency),
                line_total=Money(amount=line.line_total, currency=line.currency),
            )
            for line in model.lines
        ]
        return Order(
            order_id=OrderId(model.id),
            table_number=TableNumber(model.table_number),
            status=OrderStatus(model.status),
            lines=lines,
            subtotal=Money(amount=model.subtotal, currency=model.currency),
            tax=Money(amount=model.tax, currency=model.currency),
            total=Money(amount=model.total, currency=model.currency),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
            payment_method=model.payment_method,
            customer_name=model.customer_name,
            customer_phone=model.customer_phone,
            payment_token=model.payment_token,
            payment_redirect_url=model.payment_redirect_url,
            version=model.version,
        )

from __future__ import annotations

from qrdine.application.dto.responses import OrderResponse, OrdersResponse
from qrdine.application.mappers.order_mapper import to_order_response, to_orders_response
from qrdine.application.ports.repositories import OrderRepository
from qrdine.application.use_cases.order_transitions import load_order
from qrdine.domain.common.ids import OrderId, TableNumber
from qrdine.domain.order.entities import ACTIVE_STATUSES, Order, OrderStatus

ORDER_FILTERS: dict[str, frozenset[OrderStatus] | None] = {
    "active": ACTIVE_STATUSES,
    "completed": frozenset({OrderStatus.DONE}),
    "all": None,
}


class InvalidOrderFilterError(Exception):
    pass


def _newest_first(orders: list[Order]) -> list[Order]:
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


def parse_order_filter(value: str | None) -> frozenset[OrderStatus] | None:
    normalized = (value or "active").strip().lower()
    if normalized in ORDER_FILTERS:
        return ORDER_FILTERS[normalized]
    try:
        return frozenset({OrderStatus(normalized)})
    except ValueError as exc:
        allowed = sorted([*ORDER_FILTERS, *(status.value for status in OrderStatus)])
        raise InvalidOrderFilterError(
            f"unsupported status filter {value!r}, expected one of {', '.join(allowed)}"
        ) from exc


class ListOrders:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, status: str | None = None) -> OrdersResponse:
        statuses = parse_order_filter(status)
        orders = self._order_repository.list_by_statuses(statuses)
        return to_orders_response(_newest_first(orders))


class ListTableOrders:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, table_number: TableNumber) -> OrdersResponse:
        orders = self._order_repository.list_for_table(table_number)
        return to_orders_response(_newest_first(orders))


class GetOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> OrderResponse:
        return to_order_response(load_order(self._order_repository, order_id))

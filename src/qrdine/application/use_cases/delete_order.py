from __future__ import annotations

import logging

from qrdine.application.dto.responses import MessageResponse
from qrdine.application.ports.repositories import OrderRepository
from qrdine.application.use_cases.order_transitions import OrderNotFoundError, load_order
from qrdine.domain.common.ids import OrderId
from qrdine.domain.order.entities import OrderNotDeletableError

logger = logging.getLogger(__name__)


class OrderDeletionNotAllowedError(Exception):
    pass


class DeleteOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> MessageResponse:
        order = load_order(self._order_repository, order_id)
        try:
            order.ensure_deletable()
        except OrderNotDeletableError as exc:
            raise OrderDeletionNotAllowedError(str(exc)) from exc

        if not self._order_repository.delete(order_id):
            raise OrderNotFoundError(f"order {order_id} not found")
        logger.info("order_deleted", extra={"order_id": str(order_id)})
        return MessageResponse(message=f"order {order_id} deleted")

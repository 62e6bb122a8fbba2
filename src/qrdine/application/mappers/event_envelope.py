from __future__ import annotations

import json
from datetime import datetime
from typing import Any
from uuid import uuid4

from qrdine.domain.order.entities import Order


def _serialize_event(
    *,
    event_type: str,
    occurred_at: datetime,
    payload: dict[str, Any],
    trace_id: str | None,
    request_id: str | None,
) -> str:
    envelope = {
        "event_id": str(uuid4()),
        "event_type": event_type,
        "occurred_at": occurred_at.isoformat(),
        "request_id": request_id,
        "trace_id": trace_id,
        "payload": payload,
    }
    return json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)


def serialize_order_event(
    *,
    event_type: str,
    occurred_at: datetime,
    order: Order,
    trace_id: str | None,
    request_id: str | None,
    previous_status: str | None = None,
) -> str:
    return _serialize_event(
        event_type=event_type,
        occurred_at=occurred_at,
        trace_id=trace_id,
        request_id=request_id,
        payload={
            "orderId": str(order.order_id),
            "tableNumber": str(order.table_number),
            "status": order.status.value,
            "previousStatus": previous_status,
            "total": {
                "amount": order.total.amount,
                "currency": order.total.currency,
            },
            "createdAt": order.created_at.isoformat(),
            "lines": [
                {
                    "itemId": str(line.item_id),
                    "name": line.name,
                    "quantity": line.quantity,
                    "lineTotal": {
                        "amount": line.line_total.amount,
                        "currency": line.line_total.currency,
                    },
                }
                for line in order.lines
            ],
        },
    )

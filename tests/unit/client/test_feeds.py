from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.client.feeds import (
    CUSTOMER_ORDERS_INTERVAL_SECONDS,
    TRANSACTION_HISTORY_INTERVAL_SECONDS,
    CustomerOrderFeed,
    TransactionHistoryFeed,
)

ORDER = {
    "orderId": "ORDER-3-1759320000000",
    "tableNumber": "3",
    "status": "cooking",
    "lines": [
        {
            "itemId": "itm_001",
            "name": "Nasi Goreng",
            "quantity": 1,
            "unitPrice": {"amount": 25000, "currency": "IDR"},
            "lineTotal": {"amount": 25000, "currency": "IDR"},
        }
    ],
    "subtotal": {"amount": 25000, "currency": "IDR"},
    "tax": {"amount": 2750, "currency": "IDR"},
    "total": {"amount": 27750, "currency": "IDR"},
    "paymentMethod": "midtrans",
    "createdAt": "2026-10-01T12:00:00Z",
    "updatedAt": "2026-10-01T12:05:00Z",
}


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="http://backend.test",
    )


def test_customer_feed_polls_table_orders() -> None:
    seen: list[httpx.Request] = []
    updates: list[list] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"orders": [ORDER]})

    async def scenario() -> None:
        async with _client(handler) as client:
            feed = CustomerOrderFeed(client, "3", on_update=updates.append)
            await feed.poller.refresh()

    asyncio.run(scenario())

    assert seen[0].url.path == "/v1/table-numbers/3/orders"
    assert updates[0][0].status == "cooking"
    assert updates[0][0].total.amount == 27750


def test_history_feed_asks_for_completed_orders() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"orders": []})

    async def scenario() -> list:
        async with _client(handler) as client:
            return await TransactionHistoryFeed(client).fetch()

    assert asyncio.run(scenario()) == []
    assert seen[0].url.path == "/v1/orders"
    assert seen[0].url.params["status"] == "completed"


def test_http_errors_reach_on_error() -> None:
    errors: list[Exception] = []

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"code": "UNAUTHENTICATED"}})

    async def scenario() -> None:
        async with _client(handler) as client:
            await TransactionHistoryFeed(client, on_error=errors.append).poller.refresh()

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(scenario())
    assert len(errors) == 1


def test_default_intervals() -> None:
    client = httpx.AsyncClient()

    assert CustomerOrderFeed(client, "1").poller.interval_seconds == (
        CUSTOMER_ORDERS_INTERVAL_SECONDS
    )
    assert TransactionHistoryFeed(client).poller.interval_seconds == (
        TRANSACTION_HISTORY_INTERVAL_SECONDS
    )

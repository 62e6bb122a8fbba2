from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from qrdine.client.polling import Poller


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Poller(lambda: asyncio.sleep(0), interval_seconds=0)


def test_newer_fetch_supersedes_slow_one() -> None:
    results: list[str] = []

    async def scenario() -> tuple[str | None, str | None]:
        gate = asyncio.Event()
        calls = 0

        async def fetch() -> str:
            nonlocal calls
            calls += 1
            if calls == 1:
                await gate.wait()
                return "stale"
            return "fresh"

        poller: Poller[str] = Poller(fetch, interval_seconds=60, on_result=results.append)
        slow = asyncio.ensure_future(poller.refresh())
        await asyncio.sleep(0.01)
        fast = await poller.refresh()
        gate.set()
        return await slow, fast

    slow_result, fast_result = asyncio.run(scenario())

    assert slow_result is None
    assert fast_result == "fresh"
    assert results == ["fresh"]


def test_hidden_poller_does_not_fetch_until_visible() -> None:
    calls: list[int] = []

    async def scenario() -> tuple[int, int]:
        async def fetch() -> int:
            calls.append(1)
            return len(calls)

        poller: Poller[int] = Poller(fetch, interval_seconds=60)
        poller.set_visible(False)
        poller.start()
        await asyncio.sleep(0.01)
        while_hidden = len(calls)

        poller.set_visible(True)
        await asyncio.sleep(0.01)
        after_shown = len(calls)
        await poller.stop()
        return while_hidden, after_shown

    while_hidden, after_shown = asyncio.run(scenario())

    assert while_hidden == 0
    assert after_shown == 1


def test_hiding_cancels_the_request_in_flight() -> None:
    results: list[str] = []

    async def scenario() -> str | None:
        async def fetch() -> str:
            await asyncio.sleep(10)
            return "late"

        poller: Poller[str] = Poller(fetch, interval_seconds=60, on_result=results.append)
        pending = asyncio.ensure_future(poller.refresh())
        await asyncio.sleep(0)
        poller.set_visible(False)
        return await pending

    assert asyncio.run(scenario()) is None
    assert results == []


def test_loop_polls_on_interval_until_stopped() -> None:
    results: list[int] = []

    async def scenario() -> bool:
        counter = 0

        async def fetch() -> int:
            nonlocal counter
            counter += 1
            return counter

        poller: Poller[int] = Poller(fetch, interval_seconds=0.01, on_result=results.append)
        poller.start()
        await asyncio.sleep(0.1)
        await poller.stop()
        return poller.running

    assert asyncio.run(scenario()) is False
    assert len(results) >= 2
    assert results == sorted(results)


def test_refresh_reports_and_reraises_errors() -> None:
    errors: list[Exception] = []

    async def fetch() -> int:
        raise RuntimeError("backend down")

    poller: Poller[int] = Poller(fetch, interval_seconds=60, on_error=errors.append)

    with pytest.raises(RuntimeError):
        asyncio.run(poller.refresh())
    assert [str(error) for error in errors] == ["backend down"]


def test_background_errors_keep_the_loop_alive() -> None:
    attempts: list[int] = []

    async def scenario() -> None:
        async def fetch() -> int:
            attempts.append(1)
            raise RuntimeError("flaky")

        poller: Poller[int] = Poller(fetch, interval_seconds=0.01)
        poller.start()
        await asyncio.sleep(0.1)
        assert poller.running
        await poller.stop()

    asyncio.run(scenario())
    assert len(attempts) >= 2

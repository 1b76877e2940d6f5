"""Tests for rosterwatch.pipeline.scheduler."""

from __future__ import annotations

import asyncio

import pytest

from rosterwatch.pipeline.scheduler import TickScheduler, seconds_until_next_boundary


@pytest.mark.parametrize(
    "now, expected",
    [
        (1000.0, 200.0),  # 16:40 past the hour -> 20:00
        (900.0, 300.0),  # exactly on a boundary waits a full interval
        (1199.5, 0.5),
    ],
)
def test_seconds_until_next_boundary(now, expected) -> None:
    assert seconds_until_next_boundary(300, now=now) == pytest.approx(expected)


def run_ticks(scheduler: TickScheduler, count: int) -> None:
    async def run():
        for _ in range(count):
            scheduler._start_tick()
        await scheduler.wait_idle()

    asyncio.run(run())


def test_results_are_passed_to_callback() -> None:
    results = []

    async def tick():
        return "summary"

    run_ticks(TickScheduler(tick, 5, on_result=results.append), 2)
    assert results == ["summary", "summary"]


def test_skipped_tick_does_not_call_callback() -> None:
    results = []

    async def tick():
        return None

    run_ticks(TickScheduler(tick, 5, on_result=results.append), 1)
    assert results == []


def test_tick_exception_is_contained() -> None:
    results = []

    async def tick():
        raise RuntimeError("boom")

    scheduler = TickScheduler(tick, 5, on_result=results.append)
    run_ticks(scheduler, 1)
    assert results == []
    assert scheduler.interval_seconds == 300

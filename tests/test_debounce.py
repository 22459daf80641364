"""Tests for the debouncer."""

import asyncio

import pytest

from api_data_explorer.debounce import Debouncer


async def test_only_last_value_fires():
    fired = []
    debouncer = Debouncer(0.03, fired.append)

    for value in "abc":
        debouncer.push(value)
        await asyncio.sleep(0.005)

    assert fired == []
    assert debouncer.pending is True

    await debouncer.wait()

    assert fired == ["c"]
    assert debouncer.pending is False


async def test_separate_bursts_fire_separately():
    fired = []
    debouncer = Debouncer(0.01, fired.append)

    debouncer.push(1)
    await debouncer.wait()
    debouncer.push(2)
    await debouncer.wait()

    assert fired == [1, 2]


async def test_cancel_prevents_firing():
    fired = []
    debouncer = Debouncer(0.01, fired.append)

    debouncer.push("x")
    debouncer.cancel()
    await asyncio.sleep(0.03)

    assert fired == []
    assert debouncer.pending is False


async def test_wait_without_pending_returns_immediately():
    debouncer = Debouncer(10, lambda value: None)
    await asyncio.wait_for(debouncer.wait(), timeout=0.5)


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        Debouncer(-1, lambda value: None)

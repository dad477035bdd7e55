"""Tests for first-launch gate policies."""

import pytest

from referral.launch_gate import (
    FIRST_LAUNCH_AT_KEY,
    FIRST_LAUNCH_KEY,
    OnceGate,
    WindowGate,
    create_gate,
)
from referral.storage import MemoryStore


@pytest.mark.asyncio
async def test_once_gate_opens_exactly_once() -> None:
    store = MemoryStore()
    gate = OnceGate()
    assert await gate.try_enter(store) is True
    assert store.data[FIRST_LAUNCH_KEY] == "true"
    assert await gate.try_enter(store) is False


@pytest.mark.asyncio
async def test_window_gate_open_until_window_elapses() -> None:
    now = [1_000.0]
    gate = WindowGate(window_hours=24, clock=lambda: now[0])
    store = MemoryStore()

    assert await gate.try_enter(store) is True
    assert float(store.data[FIRST_LAUNCH_AT_KEY]) == 1_000.0
    assert store.data[FIRST_LAUNCH_KEY] == "true"

    now[0] += 23 * 3600
    assert await gate.try_enter(store) is True

    now[0] += 3600
    assert await gate.try_enter(store) is False


@pytest.mark.asyncio
async def test_window_gate_respects_flag_spent_by_once_policy() -> None:
    store = MemoryStore({FIRST_LAUNCH_KEY: "true"})
    gate = WindowGate(window_hours=24, clock=lambda: 5.0)
    assert await gate.try_enter(store) is False
    assert FIRST_LAUNCH_AT_KEY not in store.data


@pytest.mark.asyncio
async def test_window_gate_corrupt_timestamp_closes() -> None:
    store = MemoryStore({FIRST_LAUNCH_AT_KEY: "yesterday"})
    gate = WindowGate(window_hours=24, clock=lambda: 5.0)
    assert await gate.try_enter(store) is False


@pytest.mark.asyncio
async def test_window_gate_closes_when_clock_runs_backwards() -> None:
    store = MemoryStore({FIRST_LAUNCH_AT_KEY: "10000.0", FIRST_LAUNCH_KEY: "true"})
    gate = WindowGate(window_hours=24, clock=lambda: 5.0)
    assert await gate.try_enter(store) is False


def test_create_gate_modes() -> None:
    assert isinstance(create_gate("once"), OnceGate)
    assert isinstance(create_gate("window", 12), WindowGate)
    with pytest.raises(ValueError, match="Unknown launch_gate.mode"):
        create_gate("forever")

"""First-launch gating policies for clipboard scanning.

`once` spends the gate on the first scan attempt, forever. `window` keeps it
open for a fixed period after the first attempt.
"""

import logging
import time
from typing import Callable, Protocol

from referral.contract import KeyValueStore

logger = logging.getLogger(__name__)

FIRST_LAUNCH_KEY = "has_launched_before"
FIRST_LAUNCH_AT_KEY = "first_launch_at"

GATE_MODES = ("once", "window")


class LaunchGate(Protocol):
    async def try_enter(self, store: KeyValueStore) -> bool:
        """True when a scan may run now. Consumes the gate as a side effect."""


class OnceGate:
    """Scan only while the first-launch flag is unset."""

    async def try_enter(self, store: KeyValueStore) -> bool:
        if await store.get(FIRST_LAUNCH_KEY) == "true":
            return False
        await store.set(FIRST_LAUNCH_KEY, "true")
        return True


class WindowGate:
    """Scan while less than `window_hours` have passed since the first attempt."""

    def __init__(
        self,
        window_hours: float = 24,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._window_sec = float(window_hours) * 3600
        self._clock = clock

    async def try_enter(self, store: KeyValueStore) -> bool:
        now = self._clock()
        raw = await store.get(FIRST_LAUNCH_AT_KEY)
        if raw is None:
            # Flag spent under the once policy before switching modes.
            if await store.get(FIRST_LAUNCH_KEY) == "true":
                return False
            await store.set(FIRST_LAUNCH_AT_KEY, repr(now))
            await store.set(FIRST_LAUNCH_KEY, "true")
            return True
        try:
            first_at = float(raw)
        except ValueError:
            logger.warning("Corrupt %s value %r, closing gate", FIRST_LAUNCH_AT_KEY, raw)
            return False
        if now < first_at:
            logger.warning("Clock is behind %s, closing gate", FIRST_LAUNCH_AT_KEY)
            return False
        return now - first_at < self._window_sec


def create_gate(mode: str, window_hours: float = 24) -> LaunchGate:
    if mode == "once":
        return OnceGate()
    if mode == "window":
        return WindowGate(window_hours=window_hours)
    raise ValueError(f"Unknown launch_gate.mode: {mode}. Supports: once, window")

"""One-shot millisecond timer driven by a 32-bit millisecond clock."""

from __future__ import annotations

import time
from typing import Callable

_MASK = 0xFFFFFFFF


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Timer:
    """Expires ``timeout_ms`` milliseconds after :meth:`start`."""

    def __init__(self, timeout_ms: int = 0, clock: Callable[[], int] | None = None) -> None:
        self.timeout_ms = timeout_ms
        self._clock = clock if clock is not None else _monotonic_ms
        self._next_timeout = 0

    def _now(self) -> int:
        return self._clock() & _MASK

    def trigger_time_in_sec(self) -> int:
        """Whole seconds left until the timer expires."""
        return ((self._next_timeout - self._now()) & _MASK) // 1000

    def is_active(self) -> bool:
        return self._next_timeout != 0

    def reset(self) -> None:
        self._next_timeout = 0

    def check(self) -> bool:
        """True once the clock has passed the expiry time."""
        return self._now() > self._next_timeout

    def start(self) -> None:
        self._next_timeout = (self._now() + self.timeout_ms) & _MASK
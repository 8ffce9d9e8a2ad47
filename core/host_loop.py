"""Host-loop abstraction used to reschedule frame ticks."""

from __future__ import annotations

from collections import deque
from typing import Callable, Protocol


FrameCallback = Callable[[], None]


class HostLoop(Protocol):
    """Anything that can invoke a callback at the next refresh opportunity."""

    def request_frame(self, callback: FrameCallback) -> None:
        ...


class ManualHostLoop:
    """Queue-backed host loop pumped explicitly by the caller.

    Stands in for a display refresh when driving the scheduler without Qt,
    such as in tests.
    """

    def __init__(self) -> None:
        self._pending: deque[FrameCallback] = deque()

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def pump(self, frames: int = 1) -> int:
        """Run up to ``frames`` queued callbacks; return how many ran."""
        ran = 0
        while ran < frames and self._pending:
            callback = self._pending.popleft()
            callback()
            ran += 1
        return ran

"""Backward-jump detection over a sequence of observed timestamps."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from codec.timestamp import Duration, Timestamp


@dataclass(frozen=True)
class MonotonicResult:
    """Outcome of one guard check."""

    is_backward_jump: bool
    delta: Duration
    previous: Timestamp | None
    current: Timestamp


class MonotonicGuard:
    """Compares each timestamp against the one checked immediately before it.

    The guard never reads a clock and never corrects its input: every checked
    value becomes ``last_seen``, including one that jumped backward. Not safe
    for concurrent use; see LockedMonotonicGuard.
    """

    def __init__(self) -> None:
        self._last_seen: Timestamp | None = None

    @property
    def last_seen(self) -> Timestamp | None:
        return self._last_seen

    def check(self, current: Timestamp) -> MonotonicResult:
        previous = self._last_seen
        self._last_seen = current

        if previous is None:
            return MonotonicResult(is_backward_jump=False, delta=Duration.ZERO, previous=None, current=current)

        return MonotonicResult(
            is_backward_jump=current < previous,
            delta=current - previous,
            previous=previous,
            current=current,
        )

    def reset(self) -> None:
        self._last_seen = None


class LockedMonotonicGuard(MonotonicGuard):
    """MonotonicGuard whose check and reset are serialized by a lock."""

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.Lock()

    @property
    def last_seen(self) -> Timestamp | None:
        with self._lock:
            return self._last_seen

    def check(self, current: Timestamp) -> MonotonicResult:
        with self._lock:
            return super().check(current)

    def reset(self) -> None:
        with self._lock:
            super().reset()

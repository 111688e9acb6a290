"""Clock and id generator capabilities injected into the store and emitter."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from itertools import count
from uuid import uuid4

Clock = Callable[[], datetime]
IdGenerator = Callable[[str], str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def random_id(prefix: str) -> str:
    """Prefixed opaque id, e.g. ``aq-3f9c0d1e2b4a``."""
    return f"{prefix}-{uuid4().hex[:12]}"


class SequentialIds:
    """Deterministic ids (``aq-1``, ``coll-2``, ...) sharing one counter."""

    def __init__(self, start: int = 1):
        self._counter = count(start)

    def __call__(self, prefix: str) -> str:
        return f"{prefix}-{next(self._counter)}"


class FixedClock:
    """Clock that returns ``start`` and moves forward by ``step`` on every call."""

    def __init__(self, start: datetime, step_seconds: float = 0):
        self._current = start
        self._step = step_seconds

    def __call__(self) -> datetime:
        now = self._current
        if self._step:
            self._current = now + timedelta(seconds=self._step)
        return now

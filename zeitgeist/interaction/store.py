"""
Interaction Store: process-wide comfort/agitate counters.

Increments are read-modify-write and may arrive from several request
handlers at once (FastAPI runs sync endpoints in a threadpool), so every
mutation happens under a lock. Resets run either from the explicit schedule
(run_reset_schedule) or lazily when a snapshot finds the interval elapsed.
"""

import asyncio
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

from zeitgeist.models.interaction import InteractionKind, InteractionState

logger = logging.getLogger(__name__)


class InteractionValidationError(ValueError):
    """Raised for an interaction kind other than comfort or agitate."""
    pass


def parse_kind(kind: str) -> InteractionKind:
    try:
        return InteractionKind(kind)
    except ValueError:
        raise InteractionValidationError(f"Invalid interaction kind: {kind!r}") from None


class InteractionStore:
    """Thread-safe counters with a fixed reset interval."""

    def __init__(self, reset_interval_seconds: Optional[int] = 3600):
        self.reset_interval_seconds = reset_interval_seconds
        self._lock = threading.Lock()
        self._comfort = 0
        self._agitate = 0
        self._last_reset = datetime.now(timezone.utc)

    def record_comfort(self) -> InteractionState:
        return self.record(InteractionKind.COMFORT)

    def record_agitate(self) -> InteractionState:
        return self.record(InteractionKind.AGITATE)

    def record(self, kind) -> InteractionState:
        """Increment one counter. Invalid kinds raise without mutating state."""
        kind = parse_kind(kind.value if isinstance(kind, InteractionKind) else kind)
        with self._lock:
            self._expire_if_due(datetime.now(timezone.utc))
            if kind == InteractionKind.COMFORT:
                self._comfort += 1
            else:
                self._agitate += 1
            return self._state()

    def snapshot(self, current_time: Optional[datetime] = None) -> InteractionState:
        """Current counters; applies an overdue reset first."""
        with self._lock:
            self._expire_if_due(current_time or datetime.now(timezone.utc))
            return self._state()

    def reset(self, current_time: Optional[datetime] = None) -> InteractionState:
        with self._lock:
            self._reset(current_time or datetime.now(timezone.utc))
            return self._state()

    async def run_reset_schedule(self, stop_event: Optional[asyncio.Event] = None) -> None:
        """Reset the counters every interval until ``stop_event`` is set."""
        if not self.reset_interval_seconds:
            return
        if stop_event is None:
            stop_event = asyncio.Event()

        while not stop_event.is_set():
            try:
                await asyncio.wait_for(
                    stop_event.wait(),
                    timeout=self.reset_interval_seconds,
                )
            except asyncio.TimeoutError:
                state = self.reset()
                logger.info("Interaction counters reset at %s", state.last_reset.isoformat())

    # Callers must hold the lock.

    def _state(self) -> InteractionState:
        return InteractionState(
            comfort=self._comfort,
            agitate=self._agitate,
            last_reset=self._last_reset,
        )

    def _reset(self, current_time: datetime) -> None:
        self._comfort = 0
        self._agitate = 0
        self._last_reset = current_time

    def _expire_if_due(self, current_time: datetime) -> None:
        if not self.reset_interval_seconds:
            return
        if current_time - self._last_reset >= timedelta(seconds=self.reset_interval_seconds):
            self._reset(current_time)

"""Virtual session clock.

Live and replayed sessions are both paced from :meth:`SessionClock.now`, which
lags the wall clock by a user-controlled delay and can be frozen entirely.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

_logger = logging.getLogger(__name__)

_ZERO = timedelta(0)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ClockOperation(enum.StrEnum):
    """Operations accepted from control surfaces."""

    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE = "toggle"


class DelayStep(enum.StrEnum):
    """Size of a single delay nudge."""

    NORMAL = "normal"
    FINE = "fine"
    COARSE = "coarse"


@dataclasses.dataclass(frozen=True)
class ClockState:
    """Immutable snapshot of the clock's mutable pair."""

    delay: timedelta = _ZERO
    paused_at: datetime | None = None

    @property
    def is_paused(self) -> bool:
        return self.paused_at is not None


class SessionClock:
    """Logical session time with pause/resume and delay adjustment.

    The ``(delay, paused_at)`` pair is held in a single :class:`ClockState`
    value that is replaced under a lock, so a reader on another thread never
    sees a delay from one update combined with a pause instant from another.
    """

    def __init__(
        self,
        *,
        wall_clock: Callable[[], datetime] = _utcnow,
        delay: timedelta = _ZERO,
        step_sizes: dict[DelayStep, timedelta] | None = None,
    ) -> None:
        self._wall_clock = wall_clock
        self._lock = threading.Lock()
        self._state = ClockState(delay=max(_ZERO, delay))
        self._step_sizes = {
            DelayStep.NORMAL: timedelta(seconds=5),
            DelayStep.FINE: timedelta(seconds=1),
            DelayStep.COARSE: timedelta(seconds=30),
        }
        if step_sizes:
            self._step_sizes.update(step_sizes)

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def delay(self) -> timedelta:
        return self._state.delay

    @property
    def paused_at(self) -> datetime | None:
        return self._state.paused_at

    @property
    def is_paused(self) -> bool:
        return self._state.is_paused

    @property
    def can_adjust_delay(self) -> bool:
        """Whether :meth:`adjust_delay` may be called (only while running)."""
        return not self._state.is_paused

    def now(self) -> datetime:
        """Current logical session time."""
        return self._now_from(self._state)

    def _now_from(self, state: ClockState) -> datetime:
        if state.paused_at is not None:
            return state.paused_at
        return self._wall_clock() - state.delay

    def toggle_pause(self) -> bool:
        """Pause a running clock or resume a paused one.

        Returns the new paused state. Resuming recomputes the delay from the
        frozen instant, so wall-clock time spent paused is cut out of the
        session timeline and ``now()`` does not jump.
        """
        with self._lock:
            return self._toggle_locked()

    def pause(self) -> None:
        """Pause the clock if it is running."""
        with self._lock:
            if self._state.paused_at is None:
                self._toggle_locked()

    def resume(self) -> None:
        """Resume the clock if it is paused."""
        with self._lock:
            if self._state.paused_at is not None:
                self._toggle_locked()

    def _toggle_locked(self) -> bool:
        # Caller holds ``self._lock``.
        state = self._state
        if state.paused_at is None:
            paused_at = self._now_from(state)
            self._state = ClockState(delay=state.delay, paused_at=paused_at)
            _logger.info("Paused clock at %s", paused_at.isoformat())
            return True

        new_delay = max(_ZERO, self._wall_clock() - state.paused_at)
        self._state = ClockState(delay=new_delay)
        _logger.info(
            "Resuming clock with previous delay: %s and new delay: %s",
            state.delay,
            new_delay,
        )
        return False

    def apply_control(self, operation: ClockOperation | str) -> bool:
        """Apply a control-surface operation and return the new paused state."""
        operation = ClockOperation(operation)
        if operation is ClockOperation.PAUSE:
            self.pause()
            return True
        if operation is ClockOperation.RESUME:
            self.resume()
            return False
        return self.toggle_pause()

    def adjust_delay(self, delta: timedelta) -> timedelta:
        """Shift the delay by ``delta``, never below zero.

        Callers must only do this while the clock is running (see
        :attr:`can_adjust_delay`); it is not checked here.
        """
        with self._lock:
            state = self._state
            new_delay = max(_ZERO, state.delay + delta)
            self._state = ClockState(delay=new_delay, paused_at=state.paused_at)
        _logger.debug("Clock delay adjusted by %s to %s", delta, new_delay)
        return new_delay

    def step_delay(self, direction: int, step: DelayStep | str = DelayStep.NORMAL) -> timedelta:
        """Nudge the delay back by one step when ``direction < 0``, otherwise forward."""
        size = self._step_sizes[DelayStep(step)]
        if direction < 0:
            size = -size
        return self.adjust_delay(size)

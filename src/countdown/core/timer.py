"""Timer core: a pure state-machine countdown timer."""

from __future__ import annotations

import logging
import math
import time
from datetime import timedelta
from enum import Enum

logger = logging.getLogger(__name__)

Duration = float | int | timedelta


class TimerState(Enum):
    """Possible states of the timer."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"

    def __str__(self) -> str:
        return self.value.capitalize()


def format_hms(seconds: float) -> str:
    """Format *seconds* as ``HH:MM:SS``; hours are not wrapped at 24."""
    total = int(max(seconds, 0.0))
    return f"{total // 3600:02d}:{total % 3600 // 60:02d}:{total % 60:02d}"


def _to_seconds(duration: Duration) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)


def _offset(base: float, delta: float, fallback: float | None = None) -> float:
    """Return ``base + delta``, or *fallback* (default *base*) if the sum is not finite."""
    result = base + delta
    if not math.isfinite(result):
        return base if fallback is None else fallback
    return result


class Timer:
    """A countdown timer driven by periodic calls to :meth:`update`.

    The monotonic clock is sampled only by :meth:`update` (and by
    :meth:`pause`, to stamp the pause instant).  Every other read works
    against the timestamp captured by the last update, so remaining time is
    stable between polls.

    Invalid operations never raise: starting a zero-length countdown,
    pausing a timer that is not running or reconfiguring a finished timer
    are silently ignored.
    """

    def __init__(self) -> None:
        now = time.monotonic()
        self._preset_duration: float = 0.0
        self._target_time: float = now
        self._state: TimerState = TimerState.IDLE
        self._current_time: float = now
        self._paused_at: float | None = None

    # -- accessors -----------------------------------------------------------

    def state(self) -> TimerState:
        """Return the current timer state."""
        return self._state

    def remaining_time(self) -> float:
        """Return the remaining seconds as of the last update, never negative."""
        return max(self._target_time - self._current_time, 0.0)

    def preset_time(self) -> float:
        """Return the configured countdown length in seconds."""
        return self._preset_duration

    def format_remaining(self) -> str:
        return format_hms(self.remaining_time())

    def __str__(self) -> str:
        return self.format_remaining()

    def __repr__(self) -> str:
        return (
            f"Timer(state={self._state.value}, preset={self._preset_duration}, "
            f"remaining={self.remaining_time():.3f})"
        )

    # -- mutators ------------------------------------------------------------

    def set_preset_time(self, duration: Duration) -> None:
        """Set the countdown length and re-arm the target from the current time.

        Ignored while FINISHED; call :meth:`reset` first.  Negative durations
        are ignored as well.
        """
        if self._state == TimerState.FINISHED:
            return
        seconds = _to_seconds(duration)
        # NaN fails this comparison too.
        if not seconds >= 0.0:
            return
        self._preset_duration = seconds
        self._target_time = _offset(self._current_time, seconds)

    def start(self) -> None:
        """Start counting down from IDLE, or resume from PAUSED.

        A zero preset leaves an IDLE timer untouched.
        """
        if self._state == TimerState.IDLE:
            if self._preset_duration == 0.0:
                return
            self._target_time = _offset(self._current_time, self._preset_duration)
            self._transition(TimerState.RUNNING)
        elif self._state == TimerState.PAUSED:
            self._paused_at = None
            self._transition(TimerState.RUNNING)

    def pause(self) -> None:
        """Pause a RUNNING timer; a no-op in any other state."""
        if self._state != TimerState.RUNNING:
            return
        self._paused_at = time.monotonic()
        self._transition(TimerState.PAUSED)

    def reset(self) -> None:
        """Return a FINISHED timer to IDLE, otherwise re-arm the full preset."""
        if self._state == TimerState.FINISHED:
            self._transition(TimerState.IDLE)
            return
        self._target_time = _offset(self._current_time, self._preset_duration)

    def update(self) -> None:
        """Sample the clock and apply any time-driven transition."""
        self._current_time = time.monotonic()
        if self._state == TimerState.RUNNING:
            if self._current_time >= self._target_time:
                self._transition(TimerState.FINISHED)
        elif self._state == TimerState.PAUSED:
            # paused_at is always set while PAUSED.
            assert self._paused_at is not None
            paused_for = max(self._current_time - self._paused_at, 0.0)
            self._target_time = _offset(self._target_time, paused_for, self._current_time)
            self._paused_at = self._current_time
        elif self._state == TimerState.IDLE:
            self.reset()

    # -- private helpers -----------------------------------------------------

    def _transition(self, new_state: TimerState) -> None:
        logger.debug("timer %s -> %s", self._state.value, new_state.value)
        self._state = new_state

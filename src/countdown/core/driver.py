"""Timer driver: polls a :class:`Timer` on a fixed period and publishes snapshots.

The driver is the single owner of its timer.  Readers take immutable
:class:`TimerSnapshot` values; writers go through the driver's mutators,
which are serialized behind one lock together with the polling loop.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable

from countdown.core.timer import Duration, Timer, TimerState, format_hms

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.016

Observer = Callable[["TimerSnapshot"], None]


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of a timer.

    Two snapshots compare equal when they would render the same, so
    ``remaining`` and ``preset`` are excluded from comparison.
    """

    state: TimerState
    display: str
    remaining: float = field(compare=False)
    preset: float = field(compare=False)

    @classmethod
    def of(cls, timer: Timer) -> TimerSnapshot:
        return cls(
            state=timer.state(),
            display=format_hms(timer.remaining_time()),
            remaining=timer.remaining_time(),
            preset=timer.preset_time(),
        )


class TimerDriver:
    """Drive a :class:`Timer` from a background polling thread."""

    def __init__(self, timer: Timer | None = None, interval: float = DEFAULT_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._timer: Timer = timer if timer is not None else Timer()
        self._interval = interval
        self._lock = threading.Lock()
        self._observers: list[Observer] = []
        self._stop_event = threading.Event()
        self._finished_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._timer.update()
        self._last: TimerSnapshot = TimerSnapshot.of(self._timer)
        self._track_finished(self._last)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def polling(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # -- read side -----------------------------------------------------------

    def snapshot(self) -> TimerSnapshot:
        """Return the latest published snapshot."""
        with self._lock:
            return self._last

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer* for snapshot changes; returns an unsubscribe function."""
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def wait_finished(self, timeout: float | None = None) -> bool:
        """Block until the timer is seen FINISHED; False on timeout."""
        return self._finished_event.wait(timeout)

    # -- write side ----------------------------------------------------------

    def set_preset_time(self, duration: Duration) -> None:
        self._apply(lambda: self._timer.set_preset_time(duration))

    def start(self) -> None:
        self._apply(self._timer.start)

    def pause(self) -> None:
        self._apply(self._timer.pause)

    def reset(self) -> None:
        self._apply(self._timer.reset)

    def tick(self) -> TimerSnapshot:
        """Poll the timer once and notify observers if the view changed."""
        return self._apply(lambda: None)

    # -- polling loop --------------------------------------------------------

    def start_polling(self) -> None:
        """Spawn the background polling thread; a no-op if it is already running."""
        with self._lock:
            if self.polling:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run, name="countdown-driver", daemon=True
            )
            self._thread.start()
        logger.debug("polling started every %.3fs", self._interval)

    def stop_polling(self) -> None:
        """Stop the polling thread and wait for it to exit."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None
        logger.debug("polling stopped")

    def __enter__(self) -> TimerDriver:
        self.start_polling()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop_polling()

    # -- private helpers -----------------------------------------------------

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.tick()
            except Exception:
                logger.exception("timer observer failed")
            self._stop_event.wait(self._interval)

    def _apply(self, operation: Callable[[], None]) -> TimerSnapshot:
        with self._lock:
            operation()
            self._timer.update()
            current = TimerSnapshot.of(self._timer)
            changed = current != self._last
            self._last = current
            self._track_finished(current)
            observers = list(self._observers) if changed else []
        for observer in observers:
            observer(current)
        return current

    def _track_finished(self, snapshot: TimerSnapshot) -> None:
        if snapshot.state == TimerState.FINISHED:
            self._finished_event.set()
        else:
            self._finished_event.clear()

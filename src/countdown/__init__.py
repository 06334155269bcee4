"""countdown: a monotonic countdown timer state machine."""

from countdown.core.driver import TimerDriver, TimerSnapshot
from countdown.core.timer import Timer, TimerState, format_hms

__version__ = "0.1.0"

__all__ = ["Timer", "TimerDriver", "TimerSnapshot", "TimerState", "format_hms"]

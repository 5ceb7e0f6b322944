"""Timer package."""

from .config import (
    EngineConfig,
    DEFAULT_WORK_MINUTES,
    DEFAULT_SHORT_BREAK_MINUTES,
    DEFAULT_LONG_BREAK_MINUTES,
    DEFAULT_SESSIONS_UNTIL_LONG_BREAK,
)
from .engine import (
    TimerEngine,
    TimerSnapshot,
    RunState,
    SessionType,
    TICK_INTERVAL_MS,
)

__all__ = [
    "EngineConfig",
    "TimerEngine",
    "TimerSnapshot",
    "RunState",
    "SessionType",
    "TICK_INTERVAL_MS",
    "DEFAULT_WORK_MINUTES",
    "DEFAULT_SHORT_BREAK_MINUTES",
    "DEFAULT_LONG_BREAK_MINUTES",
    "DEFAULT_SESSIONS_UNTIL_LONG_BREAK",
]

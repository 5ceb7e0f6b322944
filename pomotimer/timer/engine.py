"""Timer state machine for PomoTimer.

States
------
IDLE      No countdown advancing: freshly reset, freshly transitioned,
          or waiting because auto-continue is off.
RUNNING   Counting down once per second.
PAUSED    Countdown suspended; remaining time preserved.

Transitions
-----------
IDLE | PAUSED → RUNNING        (start)
RUNNING → PAUSED               (pause)
any → IDLE                     (reset)
any → IDLE | RUNNING           (skip, or countdown reaching 0)

The session that follows a completed one is chosen by the cadence rule:
after every ``sessions_until_long_break``-th work session comes a long
break, after the other work sessions a short break, and after any break
comes work.  Whether the next session starts by itself is decided by
``auto_start_breaks`` (for breaks) and ``auto_start_work`` (for work).

Durations are read from the configuration each time a session is
loaded, so edits made while a session runs apply to the next one.
"""

from __future__ import annotations

import functools
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer

from ..errors import InvalidConfigError
from .config import EngineConfig

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class SessionType(Enum):
    WORK = "work"
    SHORT_BREAK = "short-break"
    LONG_BREAK = "long-break"


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000

_DURATION_FIELDS: dict[SessionType, str] = {
    SessionType.WORK: "work_duration",
    SessionType.SHORT_BREAK: "short_break_duration",
    SessionType.LONG_BREAK: "long_break_duration",
}


# ── snapshot ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSnapshot:
    """Immutable view of the engine at one instant."""

    run_state: RunState
    session_type: SessionType
    seconds_remaining: int
    seconds_total: int
    completed_work_sessions: int

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the session."""
        elapsed = self.seconds_total - self.seconds_remaining
        return max(0.0, min(1.0, elapsed / self.seconds_total))


TickCallback = Callable[[TimerSnapshot], None]
CompletionCallback = Callable[[SessionType], None]


def _serialized(method):
    """Run *method* only when no other engine operation is in progress.

    Calls arriving from inside a subscriber callback are queued and
    replayed once the running operation has finished all its
    notifications.  If the operation raises, the calls it queued are
    dropped with it.  Every call is ignored after :meth:`destroy`.
    """

    @functools.wraps(method)
    def wrapper(self: TimerEngine, *args) -> None:
        if self._destroyed:
            return
        if self._busy:
            self._deferred.append(functools.partial(wrapper, self, *args))
            return
        self._busy = True
        try:
            method(self, *args)
        except BaseException:
            self._deferred.clear()
            raise
        finally:
            self._busy = False
        while self._deferred:
            self._deferred.popleft()()

    return wrapper


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-driven Pomodoro countdown with cadence-based session sequencing.

    Subscribers
    -----------
    subscribe_tick(callback)
        ``callback(snapshot: TimerSnapshot)`` on start, pause, reset,
        skip, every second while running and after every transition.
    subscribe_completion(callback)
        ``callback(session_type: SessionType)`` once per finished (or
        skipped) session, before the next session is loaded.
    """

    def __init__(self, config: EngineConfig, parent: QObject | None = None) -> None:
        super().__init__(parent)
        config.validate()
        self._config = config

        # ── session state ─────────────────────────────────────────────
        self._run_state: RunState = RunState.IDLE
        self._session_type: SessionType = SessionType.WORK
        self._completed_work: int = 0
        self._total: int = 0
        self._remaining: int = 0
        self._load_session(SessionType.WORK)

        # ── subscribers ───────────────────────────────────────────────
        self._tick_callbacks: list[TickCallback] = []
        self._completion_callbacks: list[CompletionCallback] = []

        # ── dispatch bookkeeping ──────────────────────────────────────
        self._busy: bool = False
        self._deferred: deque[Callable[[], None]] = deque()
        self._destroyed: bool = False

        # ── countdown handle (set only while RUNNING) ─────────────────
        self._countdown: QTimer | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def session_type(self) -> SessionType:
        """The session currently loaded (running, paused or waiting)."""
        return self._session_type

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def total_duration(self) -> int:
        return self._total

    @property
    def percent_complete(self) -> float:
        return self.get_snapshot().percent_complete

    @property
    def completed_work_sessions(self) -> int:
        return self._completed_work

    @property
    def is_running(self) -> bool:
        return self._run_state is RunState.RUNNING

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def get_snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            run_state=self._run_state,
            session_type=self._session_type,
            seconds_remaining=self._remaining,
            seconds_total=self._total,
            completed_work_sessions=self._completed_work,
        )

    # ══════════════════════════════════════════════════════════════════
    #  SUBSCRIPTIONS
    # ══════════════════════════════════════════════════════════════════

    def subscribe_tick(self, callback: TickCallback) -> None:
        self._tick_callbacks.append(callback)

    def subscribe_completion(self, callback: CompletionCallback) -> None:
        self._completion_callbacks.append(callback)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    @_serialized
    def start(self) -> None:
        """Start or resume the countdown.  No-op while already running."""
        if self._run_state is RunState.RUNNING:
            return
        self._run_state = RunState.RUNNING
        self._arm()
        logger.debug("started %s with %ds left", self._session_type.value, self._remaining)
        self._emit_tick()

    @_serialized
    def pause(self) -> None:
        """Suspend a running countdown, keeping the remaining time."""
        if self._run_state is not RunState.RUNNING:
            return
        self._disarm()
        self._run_state = RunState.PAUSED
        logger.debug("paused %s at %ds", self._session_type.value, self._remaining)
        self._emit_tick()

    @_serialized
    def reset(self) -> None:
        """Rewind the current session to its full length and go IDLE."""
        self._disarm()
        self._remaining = self._total
        self._run_state = RunState.IDLE
        self._emit_tick()

    @_serialized
    def skip(self) -> None:
        """Finish the current session now, from any state.

        Counts exactly like natural expiry: completion subscribers are
        told, and a skipped work session still counts as completed.
        """
        self._disarm()
        self._run_state = RunState.IDLE
        self._complete_session()
        self._emit_tick()

    def destroy(self) -> None:
        """Stop the countdown and drop all subscribers.  Safe to repeat."""
        if self._destroyed:
            return
        self._destroyed = True
        self._disarm()
        self._run_state = RunState.IDLE
        self._tick_callbacks.clear()
        self._completion_callbacks.clear()
        self._deferred.clear()
        logger.debug("timer engine destroyed")

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _arm(self) -> None:
        self._disarm()
        if self._destroyed:
            return
        countdown = QTimer(self)
        countdown.setInterval(TICK_INTERVAL_MS)
        countdown.timeout.connect(self._on_timeout)
        countdown.start()
        self._countdown = countdown

    def _disarm(self) -> None:
        if self._countdown is None:
            return
        self._countdown.stop()
        self._countdown.deleteLater()
        self._countdown = None

    def _on_timeout(self) -> None:
        # Nothing may escape a Qt slot, so a boundary that cannot load the
        # next session leaves the timer Idle at 0 and reports it here
        try:
            self._on_tick()
        except InvalidConfigError:
            logger.exception("cannot start the next session")
            self._emit_tick()

    @_serialized
    def _on_tick(self) -> None:
        if self._run_state is not RunState.RUNNING:
            return
        self._remaining = max(0, self._remaining - 1)
        if self._remaining > 0:
            self._emit_tick()
            return

        self._disarm()
        self._run_state = RunState.IDLE
        self._complete_session()
        self._emit_tick()

    def _complete_session(self) -> None:
        # Validated before anything is announced, so a failed boundary
        # leaves the session, the counter and the subscribers untouched
        self._config.validate()
        completed_type = self._session_type
        logger.debug("%s session complete", completed_type.value)
        self._emit_completion(completed_type)
        if self._destroyed:
            return

        if completed_type is SessionType.WORK:
            self._completed_work += 1
            if self._completed_work % self._config.sessions_until_long_break == 0:
                next_type = SessionType.LONG_BREAK
            else:
                next_type = SessionType.SHORT_BREAK
            auto_start = self._config.auto_start_breaks
        else:
            next_type = SessionType.WORK
            auto_start = self._config.auto_start_work

        self._load_session(next_type)
        if auto_start:
            self._run_state = RunState.RUNNING
            self._arm()
        else:
            self._run_state = RunState.IDLE

    def _load_session(self, session_type: SessionType) -> None:
        minutes = getattr(self._config, _DURATION_FIELDS[session_type])
        self._session_type = session_type
        self._total = minutes * 60
        self._remaining = self._total

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: notification
    # ══════════════════════════════════════════════════════════════════

    def _emit_tick(self) -> None:
        snapshot = self.get_snapshot()
        for callback in list(self._tick_callbacks):
            self._dispatch(callback, snapshot)

    def _emit_completion(self, session_type: SessionType) -> None:
        for callback in list(self._completion_callbacks):
            self._dispatch(callback, session_type)

    def _dispatch(self, callback: Callable, argument: object) -> None:
        if self._destroyed:
            return
        try:
            callback(argument)
        except Exception:
            logger.exception("timer subscriber %r failed", callback)

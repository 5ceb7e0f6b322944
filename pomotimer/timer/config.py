"""Timer configuration read by the engine at every session boundary."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidConfigError


# ── defaults (minutes) ───────────────────────────────────────────────────

DEFAULT_WORK_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_SESSIONS_UNTIL_LONG_BREAK = 4


def _is_positive_int(value: object) -> bool:
    # bool is an int subclass; True would silently mean "1 minute"
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass
class EngineConfig:
    """Durations, cadence and auto-continue flags for the timer engine.

    The engine keeps a reference to this object and never mutates it.
    Owners may change fields at any time; new values apply from the next
    session onwards.
    """

    work_duration: int = DEFAULT_WORK_MINUTES              # minutes
    short_break_duration: int = DEFAULT_SHORT_BREAK_MINUTES
    long_break_duration: int = DEFAULT_LONG_BREAK_MINUTES
    sessions_until_long_break: int = DEFAULT_SESSIONS_UNTIL_LONG_BREAK
    auto_start_breaks: bool = False
    auto_start_work: bool = False

    def validate(self) -> None:
        """Raise :class:`InvalidConfigError` unless every value is usable."""
        for name in ("work_duration", "short_break_duration", "long_break_duration"):
            value = getattr(self, name)
            if not _is_positive_int(value):
                raise InvalidConfigError(
                    f"{name} must be a positive number of minutes, got {value!r}"
                )
        if not _is_positive_int(self.sessions_until_long_break):
            raise InvalidConfigError(
                "sessions_until_long_break must be at least 1, "
                f"got {self.sessions_until_long_break!r}"
            )

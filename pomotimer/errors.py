"""Exceptions raised by PomoTimer."""


class PomoTimerError(Exception):
    """Base exception for the timer package."""


class InvalidConfigError(PomoTimerError, ValueError):
    """Raised when a timer configuration would produce an empty countdown."""

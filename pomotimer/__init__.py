"""PomoTimer: a Pomodoro session timer for the desktop."""

__version__ = "0.1.0"

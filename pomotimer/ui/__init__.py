"""UI package."""

from .timer_view import TimerView
from .settings_dialog import SettingsDialog

__all__ = [
    "TimerView",
    "SettingsDialog",
]

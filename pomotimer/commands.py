"""Keyboard commands that forward user intents to the timer engine."""

from __future__ import annotations

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QWidget

from .timer.engine import TimerEngine


# id → (menu text, shortcut, engine method name)
COMMANDS: dict[str, tuple[str, str, str]] = {
    "start-timer":  ("Start timer",           "Ctrl+Return", "start"),
    "pause-timer":  ("Pause timer",           "Ctrl+P",      "pause"),
    "reset-timer":  ("Reset timer",           "Ctrl+R",      "reset"),
    "skip-session": ("Skip to next session",  "Ctrl+N",      "skip"),
}


def register_commands(widget: QWidget, engine: TimerEngine) -> dict[str, QAction]:
    """Create one QAction per command on *widget* and return them by id."""
    actions: dict[str, QAction] = {}
    for command_id, (text, shortcut, method_name) in COMMANDS.items():
        action = QAction(text, widget)
        action.setObjectName(command_id)
        action.setShortcut(QKeySequence(shortcut))
        action.triggered.connect(
            lambda _checked=False, name=method_name: getattr(engine, name)()
        )
        widget.addAction(action)
        actions[command_id] = action
    return actions

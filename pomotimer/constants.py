"""Display labels, colours and time formatting shared by the UI."""

from __future__ import annotations

from .timer.engine import SessionType


SESSION_LABELS: dict[SessionType, str] = {
    SessionType.WORK:        "Work Session",
    SessionType.SHORT_BREAK: "Short Break",
    SessionType.LONG_BREAK:  "Long Break",
}

SESSION_EMOJIS: dict[SessionType, str] = {
    SessionType.WORK:        "\U0001F345",   # tomato
    SessionType.SHORT_BREAK: "\u2615",       # hot beverage
    SessionType.LONG_BREAK:  "\U0001F334",   # palm tree
}

# Used when the user leaves a session colour empty
DEFAULT_COLORS: dict[SessionType, str] = {
    SessionType.WORK:        "#e74c3c",
    SessionType.SHORT_BREAK: "#2ecc71",
    SessionType.LONG_BREAK:  "#3498db",
}


def format_time(seconds: int) -> str:
    """Render *seconds* as zero-padded ``MM:SS``."""
    m, s = divmod(max(0, seconds), 60)
    return f"{m:02d}:{s:02d}"

"""Application settings with JSON persistence.

Settings are stored at:
    ~/.config/PomoTimer/settings.json

``Settings`` extends :class:`~pomotimer.timer.config.EngineConfig`, so the
object loaded here is handed straight to the timer engine, which reads
the timer fields again at every session boundary.

Usage::

    settings = load_settings()
    settings.work_duration = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.config import EngineConfig
from .timer.engine import SessionType

logger = logging.getLogger(__name__)


APP_CONFIG_DIR = Path.home() / ".config" / "PomoTimer"
SETTINGS_PATH = APP_CONFIG_DIR / "settings.json"


@dataclass
class Settings(EngineConfig):
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    auto_start_on_load: bool = False

    # ── notifications ─────────────────────────────────────────────────
    show_notifications: bool = True
    play_sound: bool = True
    sound_volume: int = 70                 # 0-100

    # ── progress colours (empty = default accent) ────────────────────
    work_color: str = ""
    short_break_color: str = ""
    long_break_color: str = ""

    # ── completion messages ──────────────────────────────────────────
    work_complete_title: str = "Work Session Complete"
    work_complete_message: str = "Great job! Time for a break."
    short_break_complete_title: str = "Short Break Complete"
    short_break_complete_message: str = "Break's over! Ready to focus?"
    long_break_complete_title: str = "Long Break Complete"
    long_break_complete_message: str = "Refreshed and ready! Let's get back to work."

    def color_for(self, session_type: SessionType) -> str:
        """The user's colour for *session_type*, or ``""`` when unset."""
        prefix = session_type.value.replace("-", "_")
        return getattr(self, f"{prefix}_color").strip()

    def completion_text(self, session_type: SessionType) -> tuple[str, str]:
        """``(title, message)`` shown when a *session_type* session ends."""
        prefix = session_type.value.replace("-", "_")
        return (
            getattr(self, f"{prefix}_complete_title"),
            getattr(self, f"{prefix}_complete_message"),
        )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            settings = Settings(**filtered)
            settings.validate()
            return settings
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        # InvalidConfigError and JSONDecodeError are both ValueErrors
        logger.warning("ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )

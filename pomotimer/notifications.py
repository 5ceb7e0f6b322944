"""Session-completion notifications: desktop message plus a sound cue.

The notifier only listens to the engine.  Anything that goes wrong while
showing a message or playing a sound is logged here and never reaches
the timer.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from .settings import Settings
from .timer.engine import SessionType, TimerEngine

logger = logging.getLogger(__name__)


COMPLETION_SOUNDS: dict[SessionType, str] = {
    SessionType.WORK:        "session_complete",
    SessionType.SHORT_BREAK: "break_over",
    SessionType.LONG_BREAK:  "break_over",
}


class SoundPlayer(Protocol):
    def play(self, name: str) -> None: ...


class CompletionNotifier:
    """Reacts to finished sessions according to the live settings."""

    def __init__(
        self,
        settings: Settings,
        sound_player: SoundPlayer | None,
        show_message: Callable[[str, str], None] | None,
    ) -> None:
        self._settings = settings
        self._sound_player = sound_player
        self._show_message = show_message

    def attach(self, engine: TimerEngine) -> None:
        engine.subscribe_completion(self.on_session_completed)

    def on_session_completed(self, session_type: SessionType) -> None:
        if self._settings.show_notifications and self._show_message is not None:
            title, message = self._settings.completion_text(session_type)
            try:
                self._show_message(title, message)
            except Exception:
                logger.exception("showing %s notification failed", session_type.value)

        if self._settings.play_sound and self._sound_player is not None:
            try:
                self._sound_player.play(COMPLETION_SOUNDS[session_type])
            except Exception:
                logger.exception("playing %s sound failed", session_type.value)

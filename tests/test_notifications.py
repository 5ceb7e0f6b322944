"""Tests for the completion notifier."""

from __future__ import annotations

import logging

import pytest

from pomotimer.notifications import COMPLETION_SOUNDS, CompletionNotifier
from pomotimer.settings import Settings
from pomotimer.timer.engine import RunState, SessionType, TimerEngine


class FakePlayer:
    def __init__(self):
        self.played: list[str] = []

    def play(self, name: str) -> None:
        self.played.append(name)


class BrokenPlayer:
    def play(self, name: str) -> None:
        raise OSError("no audio device")


@pytest.fixture
def messages():
    return []


@pytest.fixture
def player():
    return FakePlayer()


def _notifier(settings, player, messages):
    return CompletionNotifier(
        settings, player, lambda title, body: messages.append((title, body)),
    )


class TestCompletionNotifier:

    def test_work_completion(self, settings, player, messages):
        _notifier(settings, player, messages).on_session_completed(SessionType.WORK)
        assert messages == [("Work Session Complete", "Great job! Time for a break.")]
        assert player.played == ["session_complete"]

    @pytest.mark.parametrize("session_type", [SessionType.SHORT_BREAK, SessionType.LONG_BREAK])
    def test_break_completion(self, settings, player, messages, session_type):
        _notifier(settings, player, messages).on_session_completed(session_type)
        assert messages == [settings.completion_text(session_type)]
        assert player.played == ["break_over"]

    def test_custom_text(self, player, messages):
        s = Settings(work_complete_title="Done", work_complete_message="Stretch!")
        _notifier(s, player, messages).on_session_completed(SessionType.WORK)
        assert messages == [("Done", "Stretch!")]

    def test_notifications_disabled(self, player, messages):
        s = Settings(show_notifications=False)
        _notifier(s, player, messages).on_session_completed(SessionType.WORK)
        assert messages == []
        assert player.played == ["session_complete"]

    def test_sound_disabled(self, player, messages):
        s = Settings(play_sound=False)
        _notifier(s, player, messages).on_session_completed(SessionType.WORK)
        assert player.played == []
        assert len(messages) == 1

    def test_reads_settings_live(self, settings, player, messages):
        notifier = _notifier(settings, player, messages)
        settings.play_sound = False
        notifier.on_session_completed(SessionType.WORK)
        assert player.played == []

    def test_missing_collaborators(self, settings):
        CompletionNotifier(settings, None, None).on_session_completed(SessionType.WORK)

    def test_sound_failure_is_logged(self, settings, messages, caplog):
        notifier = _notifier(settings, BrokenPlayer(), messages)
        with caplog.at_level(logging.ERROR, logger="pomotimer.notifications"):
            notifier.on_session_completed(SessionType.WORK)
        assert "no audio device" in caplog.text
        assert len(messages) == 1

    def test_message_failure_does_not_block_sound(self, settings, player):
        def broken(title, body):
            raise RuntimeError("tray gone")

        CompletionNotifier(settings, player, broken).on_session_completed(SessionType.WORK)
        assert player.played == ["session_complete"]

    def test_every_session_type_has_a_sound(self):
        assert set(COMPLETION_SOUNDS) == set(SessionType)


class TestNotifierWithEngine:

    def test_attached_notifier_fires_on_skip(self, qapp, settings, player, messages):
        eng = TimerEngine(settings)
        _notifier(settings, player, messages).attach(eng)
        eng.skip()
        eng.skip()
        assert [m[0] for m in messages] == ["Work Session Complete", "Short Break Complete"]
        assert player.played == ["session_complete", "break_over"]
        eng.destroy()

    def test_broken_sink_leaves_engine_consistent(self, qapp, settings):
        eng = TimerEngine(settings)
        CompletionNotifier(settings, BrokenPlayer(), None).attach(eng)
        eng.skip()
        snap = eng.get_snapshot()
        assert snap.session_type == SessionType.SHORT_BREAK
        assert snap.run_state == RunState.IDLE
        assert snap.completed_work_sessions == 1
        eng.destroy()

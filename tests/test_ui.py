"""Headless tests for the timer view, settings dialog, commands and window."""

from __future__ import annotations

import json

import pytest
from PyQt6.QtGui import QCloseEvent

from pomotimer.app import PomoTimerApp
from pomotimer.commands import COMMANDS, register_commands
from pomotimer.settings import Settings
from pomotimer.timer.engine import RunState, SessionType, TimerEngine
from pomotimer.ui.settings_dialog import SettingsDialog
from pomotimer.ui.timer_view import PROGRESS_RESOLUTION, TimerView

from helpers import complete_session


@pytest.fixture
def live_engine(qapp, settings):
    eng = TimerEngine(settings)
    yield eng
    eng.destroy()


# ═══════════════════════════════════════════════════════════════════════
#  TIMER VIEW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTimerView:

    def test_initial_render(self, live_engine, settings):
        view = TimerView(live_engine, settings)
        assert view._time_label.text() == "25:00"
        assert view._session_label.text().endswith("Work Session")
        assert view._start_pause_btn.text() == "Start"
        assert view._progress.value() == 0
        assert view._stats_label.text().startswith("Completed: 0")

    def test_start_button_toggles(self, live_engine, settings):
        view = TimerView(live_engine, settings)
        view._start_pause_btn.click()
        assert live_engine.run_state == RunState.RUNNING
        assert view._start_pause_btn.text() == "Pause"
        view._start_pause_btn.click()
        assert live_engine.run_state == RunState.PAUSED
        assert view._start_pause_btn.text() == "Start"

    def test_tick_updates_display(self, live_engine, settings):
        view = TimerView(live_engine, settings)
        live_engine.start()
        for _ in range(61):
            live_engine._on_tick()
        assert view._time_label.text() == "23:59"
        assert view._progress.value() == round(61 / 1500 * PROGRESS_RESOLUTION)

    def test_skip_button_moves_to_break(self, live_engine, settings):
        view = TimerView(live_engine, settings)
        view._skip_btn.click()
        assert view._session_label.text().endswith("Short Break")
        assert view._time_label.text() == "05:00"
        assert view._stats_label.text().startswith("Completed: 1")

    def test_reset_button(self, live_engine, settings):
        view = TimerView(live_engine, settings)
        live_engine.start()
        live_engine._on_tick()
        view._reset_btn.click()
        assert view._time_label.text() == "25:00"
        assert live_engine.run_state == RunState.IDLE

    def test_uses_custom_colour(self, live_engine, settings):
        settings.work_color = "#abcdef"
        view = TimerView(live_engine, settings)
        view.render(live_engine.get_snapshot())
        assert "#abcdef" in view._progress.styleSheet()

    def test_falls_back_to_default_colour(self, live_engine, settings):
        view = TimerView(live_engine, settings)
        assert "#e74c3c" in view._progress.styleSheet()


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS DIALOG
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestSettingsDialog:
    def test_create(self, settings):
        dlg = SettingsDialog(settings)
        assert dlg.windowTitle() == "Settings"
        assert dlg.settings is settings

    def test_reflects_settings(self):
        s = Settings(work_duration=30, sessions_until_long_break=2, sound_volume=50)
        dlg = SettingsDialog(s)
        assert dlg._work_spin.value() == 30
        assert dlg._cadence_spin.value() == 2
        assert dlg._vol_slider.value() == 50
        assert dlg._title_edits[SessionType.WORK].text() == "Work Session Complete"

    def test_populating_does_not_save(self, settings, settings_file):
        SettingsDialog(settings)
        assert not settings_file.exists()

    def test_spin_change_updates_and_saves(self, settings, settings_file):
        dlg = SettingsDialog(settings)
        dlg._work_spin.setValue(45)
        assert settings.work_duration == 45
        assert json.loads(settings_file.read_text())["work_duration"] == 45

    def test_durations_cannot_go_below_one(self, settings):
        dlg = SettingsDialog(settings)
        dlg._short_spin.setValue(0)
        dlg._cadence_spin.setValue(0)
        assert settings.short_break_duration == 1
        assert settings.sessions_until_long_break == 1
        settings.validate()

    def test_large_stored_values_are_kept(self, settings, settings_file):
        settings.work_duration = 200
        settings.sessions_until_long_break = 20
        dlg = SettingsDialog(settings)
        assert dlg._work_spin.value() == 200
        assert dlg._cadence_spin.value() == 20
        dlg._short_spin.setValue(7)
        saved = json.loads(settings_file.read_text())
        assert saved["work_duration"] == 200
        assert saved["sessions_until_long_break"] == 20
        assert saved["short_break_duration"] == 7

    def test_checkbox_toggles(self, settings):
        dlg = SettingsDialog(settings)
        dlg._auto_breaks_cb.setChecked(True)
        dlg._sound_cb.setChecked(False)
        assert settings.auto_start_breaks is True
        assert settings.play_sound is False

    def test_volume_slider_updates_label(self, settings):
        dlg = SettingsDialog(settings)
        dlg._vol_slider.setValue(85)
        assert dlg._vol_label.text() == "85%"
        assert settings.sound_volume == 85

    def test_text_edits(self, settings):
        dlg = SettingsDialog(settings)
        dlg._color_edits[SessionType.LONG_BREAK].setText(" #112233 ")
        dlg._message_edits[SessionType.SHORT_BREAK].setText("Go!")
        assert settings.long_break_color == "#112233"
        assert settings.short_break_complete_message == "Go!"

    def test_sound_preview_callback(self, settings):
        calls: list[bool] = []
        dlg = SettingsDialog(settings, sound_preview_callback=lambda: calls.append(True))
        dlg._on_volume_released()
        assert len(calls) == 1

    def test_edit_reaches_engine_at_next_session(self, live_engine, settings):
        dlg = SettingsDialog(settings)
        live_engine.start()
        dlg._short_spin.setValue(9)
        assert live_engine.total_duration == 25 * 60
        complete_session(live_engine)
        assert live_engine.total_duration == 9 * 60


# ═══════════════════════════════════════════════════════════════════════
#  COMMANDS
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestCommands:
    def test_registers_every_command(self, live_engine, settings):
        view = TimerView(live_engine, settings)
        actions = register_commands(view, live_engine)
        assert set(actions) == set(COMMANDS)
        for command_id, action in actions.items():
            assert action in view.actions()
            assert not action.shortcut().isEmpty()

    def test_actions_drive_engine(self, live_engine, settings):
        view = TimerView(live_engine, settings)
        actions = register_commands(view, live_engine)
        actions["start-timer"].trigger()
        assert live_engine.run_state == RunState.RUNNING
        actions["pause-timer"].trigger()
        assert live_engine.run_state == RunState.PAUSED
        actions["skip-session"].trigger()
        assert live_engine.session_type == SessionType.SHORT_BREAK
        live_engine.start()
        live_engine._on_tick()
        actions["reset-timer"].trigger()
        assert live_engine.remaining == live_engine.total_duration


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestMainWindow:
    def test_builds_idle(self, settings, tmp_path):
        window = PomoTimerApp(settings, sounds_dir=tmp_path)
        assert window.engine.run_state == RunState.IDLE
        assert window.engine.config is settings
        window.engine.destroy()

    def test_auto_start_on_load(self, tmp_path):
        window = PomoTimerApp(Settings(auto_start_on_load=True), sounds_dir=tmp_path)
        assert window.engine.run_state == RunState.RUNNING
        window.engine.destroy()

    def test_transition_reaches_status_bar(self, settings, tmp_path):
        window = PomoTimerApp(settings, sounds_dir=tmp_path)
        window.engine.skip()
        assert window.statusBar().currentMessage() == "Next up: Short Break"
        window.engine.destroy()

    def test_notification_falls_back_to_status_bar(self, settings, tmp_path):
        window = PomoTimerApp(settings, sounds_dir=tmp_path)
        window._tray_icon.hide()
        window._send_notification("Title", "Body")
        assert window.statusBar().currentMessage() == "Title — Body"
        window.engine.destroy()

    def test_close_destroys_engine(self, settings, tmp_path):
        window = PomoTimerApp(settings, sounds_dir=tmp_path)
        window.engine.start()
        window.closeEvent(QCloseEvent())
        assert window.engine.is_destroyed
        assert window.engine._countdown is None

    def test_sound_settings_applied(self, tmp_path):
        window = PomoTimerApp(Settings(sound_volume=33, play_sound=False), sounds_dir=tmp_path)
        assert window._sound_manager.volume == 33
        assert window._sound_manager.enabled is False
        window.engine.destroy()

"""Settings dialog for PomoTimer.

A modal dialog for durations, cadence, auto-start behaviour, sound,
notification text and progress colours.  Every change is written to the
shared ``Settings`` object and saved to disk immediately; the engine
picks timer changes up at the next session boundary.
"""

from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QPushButton,
    QLineEdit, QFrame, QWidget,
)

from ..settings import Settings, save_settings
from ..timer.engine import SessionType


class SettingsDialog(QDialog):
    """Modal dialog for all user preferences."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        sound_preview_callback: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(460)
        self.setModal(True)

        self._settings = settings
        self._sound_preview = sound_preview_callback
        self._populating = False

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Timer section ────────────────────────────────────────────
        root.addWidget(self._section_label("Timer"))
        timer_form = self._form()

        self._work_spin = self._minutes_spin(120)
        timer_form.addRow("Work duration:", self._work_spin)

        self._short_spin = self._minutes_spin(60)
        timer_form.addRow("Short break:", self._short_spin)

        self._long_spin = self._minutes_spin(120)
        timer_form.addRow("Long break:", self._long_spin)

        self._cadence_spin = QSpinBox()
        self._cadence_spin.setRange(1, 12)
        self._cadence_spin.valueChanged.connect(self._on_timer_changed)
        timer_form.addRow("Sessions until long break:", self._cadence_spin)

        self._auto_load_cb = QCheckBox("Start timer when the window opens")
        self._auto_breaks_cb = QCheckBox("Auto-start breaks")
        self._auto_work_cb = QCheckBox("Auto-start work sessions")
        for cb in (self._auto_load_cb, self._auto_breaks_cb, self._auto_work_cb):
            cb.toggled.connect(self._on_toggle_changed)
            timer_form.addRow("", cb)

        root.addLayout(timer_form)
        root.addWidget(self._separator())

        # ── Sound & Notifications section ────────────────────────────
        root.addWidget(self._section_label("Sound & Notifications"))
        snd_form = self._form()

        self._notif_cb = QCheckBox("Show notifications")
        self._notif_cb.toggled.connect(self._on_toggle_changed)
        snd_form.addRow("", self._notif_cb)

        self._sound_cb = QCheckBox("Play sound")
        self._sound_cb.toggled.connect(self._on_toggle_changed)
        snd_form.addRow("", self._sound_cb)

        vol_row = QHBoxLayout()
        vol_row.setSpacing(10)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_slider.setTickInterval(10)
        self._vol_label = QLabel("70%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        self._vol_slider.sliderReleased.connect(self._on_volume_released)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)

        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        snd_form.addRow("Volume:", vol_wrapper)

        root.addLayout(snd_form)
        root.addWidget(self._separator())

        # ── Customisation section ────────────────────────────────────
        root.addWidget(self._section_label("Customisation"))
        custom_form = self._form()

        self._color_edits: dict[SessionType, QLineEdit] = {}
        self._title_edits: dict[SessionType, QLineEdit] = {}
        self._message_edits: dict[SessionType, QLineEdit] = {}
        for session_type, name in (
            (SessionType.WORK, "Work"),
            (SessionType.SHORT_BREAK, "Short break"),
            (SessionType.LONG_BREAK, "Long break"),
        ):
            color = QLineEdit()
            color.setPlaceholderText("#e74c3c or leave empty")
            title = QLineEdit()
            message = QLineEdit()
            for edit in (color, title, message):
                edit.textChanged.connect(self._on_text_changed)
            custom_form.addRow(f"{name} colour:", color)
            custom_form.addRow(f"{name} complete title:", title)
            custom_form.addRow(f"{name} complete message:", message)
            self._color_edits[session_type] = color
            self._title_edits[session_type] = title
            self._message_edits[session_type] = message

        root.addLayout(custom_form)

        # ── close button ─────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    @staticmethod
    def _form() -> QFormLayout:
        form = QFormLayout()
        form.setContentsMargins(0, 0, 0, 0)
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)
        return form

    def _minutes_spin(self, maximum: int) -> QSpinBox:
        # Minimum 1 keeps every duration valid for the engine
        spin = QSpinBox()
        spin.setRange(1, maximum)
        spin.setSuffix(" min")
        spin.valueChanged.connect(self._on_timer_changed)
        return spin

    @staticmethod
    def _show_value(spin: QSpinBox, value: int) -> None:
        # A stored value above the usual range widens it instead of being cut
        if value > spin.maximum():
            spin.setMaximum(value)
        spin.setValue(value)

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        s = self._settings
        self._populating = True
        try:
            self._show_value(self._work_spin, s.work_duration)
            self._show_value(self._short_spin, s.short_break_duration)
            self._show_value(self._long_spin, s.long_break_duration)
            self._show_value(self._cadence_spin, s.sessions_until_long_break)
            self._auto_load_cb.setChecked(s.auto_start_on_load)
            self._auto_breaks_cb.setChecked(s.auto_start_breaks)
            self._auto_work_cb.setChecked(s.auto_start_work)
            self._notif_cb.setChecked(s.show_notifications)
            self._sound_cb.setChecked(s.play_sound)
            self._vol_slider.setValue(s.sound_volume)
            self._vol_label.setText(f"{s.sound_volume}%")
            for session_type in SessionType:
                title, message = s.completion_text(session_type)
                self._color_edits[session_type].setText(s.color_for(session_type))
                self._title_edits[session_type].setText(title)
                self._message_edits[session_type].setText(message)
        finally:
            self._populating = False

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS (save immediately)
    # ══════════════════════════════════════════════════════════════════

    def _on_timer_changed(self) -> None:
        if self._populating:
            return
        self._settings.work_duration = self._work_spin.value()
        self._settings.short_break_duration = self._short_spin.value()
        self._settings.long_break_duration = self._long_spin.value()
        self._settings.sessions_until_long_break = self._cadence_spin.value()
        self._save()

    def _on_toggle_changed(self) -> None:
        if self._populating:
            return
        self._settings.auto_start_on_load = self._auto_load_cb.isChecked()
        self._settings.auto_start_breaks = self._auto_breaks_cb.isChecked()
        self._settings.auto_start_work = self._auto_work_cb.isChecked()
        self._settings.show_notifications = self._notif_cb.isChecked()
        self._settings.play_sound = self._sound_cb.isChecked()
        self._save()

    def _on_text_changed(self) -> None:
        if self._populating:
            return
        for session_type in SessionType:
            prefix = session_type.value.replace("-", "_")
            setattr(self._settings, f"{prefix}_color",
                    self._color_edits[session_type].text().strip())
            setattr(self._settings, f"{prefix}_complete_title",
                    self._title_edits[session_type].text())
            setattr(self._settings, f"{prefix}_complete_message",
                    self._message_edits[session_type].text())
        self._save()

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        if self._populating:
            return
        self._settings.sound_volume = value
        self._save()

    def _on_volume_released(self) -> None:
        """Play a click sound when the user releases the volume slider."""
        if self._sound_preview:
            self._sound_preview()

    def _save(self) -> None:
        save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings

"""Main application window for PomoTimer."""

from __future__ import annotations

from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QColor, QIcon, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import QMainWindow, QMenu, QSystemTrayIcon

from .audio.sounds import SoundManager
from .commands import register_commands
from .constants import SESSION_LABELS, format_time
from .notifications import CompletionNotifier
from .settings import Settings, load_settings
from .timer.engine import RunState, TimerEngine, TimerSnapshot
from .ui.settings_dialog import SettingsDialog
from .ui.timer_view import TimerView


# ── tray-icon image generation ────────────────────────────────────────────


def _make_tray_icon(run_state: RunState) -> QIcon:
    """32×32 monochrome icon: outline when idle, filled while running,
    two bars while paused."""
    size = 64  # drawn at 2× for HiDPI
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(0, 0, 0, 220)
    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if run_state is RunState.RUNNING:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    elif run_state is RunState.PAUSED:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        bar_w, bar_h, gap = 8, 28, 6
        y = cy - bar_h // 2
        p.drawRoundedRect(cx - gap - bar_w, y, bar_w, bar_h, 3, 3)
        p.drawRoundedRect(cx + gap, y, bar_w, bar_h, 3, 3)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)

    p.end()
    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


class PomoTimerApp(QMainWindow):
    """Main application window.  Owns the engine and tears it down on close."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("PomoTimer")
        self.setMinimumSize(380, 320)

        self._settings = settings if settings is not None else load_settings()

        # ── engine + collaborators ────────────────────────────────────
        self._engine = TimerEngine(self._settings, parent=self)
        self._sound_manager = SoundManager(self, sounds_dir=sounds_dir)
        self._apply_settings()

        self._view = TimerView(self._engine, self._settings, self)
        self.setCentralWidget(self._view)
        self.statusBar().showMessage("Ready to focus!")

        # ── system tray ───────────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setIcon(_make_tray_icon(RunState.IDLE))
        self._tray_icon.setToolTip("PomoTimer — Ready")
        self._build_tray_menu()
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()

        self._notifier = CompletionNotifier(
            self._settings, self._sound_manager, self._send_notification,
        )
        self._notifier.attach(self._engine)
        self._engine.subscribe_tick(self._on_tick)

        self._actions = register_commands(self, self._engine)
        self._build_menu_bar()

        if self._settings.auto_start_on_load:
            self._engine.start()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def settings(self) -> Settings:
        return self._settings

    # ══════════════════════════════════════════════════════════════════
    #  MENUS
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        timer_menu = menu_bar.addMenu("&Timer")
        for action in self._actions.values():
            timer_menu.addAction(action)
        timer_menu.addSeparator()

        settings_action = QAction("Settings…", self)
        settings_action.setMenuRole(QAction.MenuRole.PreferencesRole)
        settings_action.triggered.connect(self._open_settings)
        timer_menu.addAction(settings_action)

        quit_action = QAction("Quit", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.triggered.connect(self.close)
        timer_menu.addAction(quit_action)

    def _build_tray_menu(self) -> None:
        menu = QMenu(self)

        self._tray_start_action = menu.addAction("Start")
        self._tray_start_action.triggered.connect(self._tray_toggle_start)

        skip_action = menu.addAction("Skip")
        skip_action.triggered.connect(self._engine.skip)

        menu.addSeparator()
        show_action = menu.addAction("Show PomoTimer")
        show_action.triggered.connect(self._show_window)

        self._tray_icon.setContextMenu(menu)

    def _tray_toggle_start(self) -> None:
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SUBSCRIBERS
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self, snapshot: TimerSnapshot) -> None:
        label = SESSION_LABELS[snapshot.session_type]
        remaining = format_time(snapshot.seconds_remaining)
        self._tray_icon.setIcon(_make_tray_icon(snapshot.run_state))
        self._tray_start_action.setText(
            "Pause" if snapshot.run_state is RunState.RUNNING else "Start"
        )
        self._tray_icon.setToolTip(f"PomoTimer — {label} {remaining}")

        messages = {
            RunState.RUNNING: f"{label} in progress",
            RunState.PAUSED:  "Paused",
            RunState.IDLE:    f"Next up: {label}",
        }
        self.statusBar().showMessage(messages[snapshot.run_state])

    def _send_notification(self, title: str, body: str) -> None:
        """Desktop notification through the tray, or the status bar
        where no tray is available."""
        if self._tray_icon.isVisible():
            self._tray_icon.showMessage(title, body)
        else:
            self.statusBar().showMessage(f"{title} — {body}")

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _open_settings(self) -> None:
        def _preview_click():
            self._sound_manager.set_volume(self._settings.sound_volume)
            self._sound_manager.play("click")

        dlg = SettingsDialog(
            self._settings,
            parent=self,
            sound_preview_callback=_preview_click,
        )
        dlg.exec()
        self._apply_settings()

    def _apply_settings(self) -> None:
        """Push sound preferences into the sound manager.

        Timer values need no pushing: the engine reads them from the
        same ``Settings`` object when the next session loads.
        """
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(self._settings.play_sound)

    # ══════════════════════════════════════════════════════════════════
    #  LIFECYCLE
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._engine.destroy()
        self._tray_icon.hide()
        event.accept()

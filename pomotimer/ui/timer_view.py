"""Main timer panel.

Layout (top → bottom):
    - Session label (emoji + name)
    - MM:SS countdown
    - Progress bar, coloured per session type
    - Start/Pause, Reset, Skip
    - Completed work session counter

The view reads nothing from the engine except the snapshots it is sent.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QProgressBar, QFrame,
)

from ..constants import DEFAULT_COLORS, SESSION_EMOJIS, SESSION_LABELS, format_time
from ..settings import Settings
from ..timer.engine import RunState, TimerEngine, TimerSnapshot


PROGRESS_RESOLUTION = 1000


class TimerView(QWidget):
    """Renders timer snapshots and forwards button presses to the engine."""

    def __init__(
        self,
        engine: TimerEngine,
        settings: Settings,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._settings = settings
        self._running = False
        self._build_ui()
        self._connect_signals()
        self.render(engine.get_snapshot())

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._session_label = QLabel(card)
        self._session_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._session_label.setStyleSheet("font-size: 18px; font-weight: 600;")
        layout.addWidget(self._session_label)

        self._time_label = QLabel(card)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet("font-size: 56px; font-weight: 700;")
        layout.addWidget(self._time_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, PROGRESS_RESOLUTION)
        self._progress.setTextVisible(False)
        self._progress.setFixedHeight(8)
        layout.addWidget(self._progress)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")
        self._reset_btn = QPushButton("Reset", card)
        self._skip_btn = QPushButton("Skip", card)

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._skip_btn)
        layout.addLayout(btn_row)

        self._stats_label = QLabel(card)
        self._stats_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._stats_label)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._skip_btn.clicked.connect(self._engine.skip)
        self._engine.subscribe_tick(self.render)

    def _on_start_pause(self) -> None:
        if self._running:
            self._engine.pause()
        else:
            self._engine.start()

    # ── display ───────────────────────────────────────────────────────────

    def render(self, snapshot: TimerSnapshot) -> None:
        session = snapshot.session_type
        self._running = snapshot.run_state is RunState.RUNNING

        self._session_label.setText(f"{SESSION_EMOJIS[session]} {SESSION_LABELS[session]}")
        self._time_label.setText(format_time(snapshot.seconds_remaining))
        self._progress.setValue(round(snapshot.percent_complete * PROGRESS_RESOLUTION))

        color = self._settings.color_for(session) or DEFAULT_COLORS[session]
        self._progress.setStyleSheet(
            f"QProgressBar::chunk {{ background-color: {color}; border-radius: 4px; }}"
        )

        self._start_pause_btn.setText("Pause" if self._running else "Start")
        self._stats_label.setText(
            f"Completed: {snapshot.completed_work_sessions} \U0001F345"
        )

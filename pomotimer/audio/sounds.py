"""Completion cues synthesised with numpy and played through QSoundEffect.

Every cue is a short sequence of sine notes shaped by an ADSR envelope,
rendered once to a WAV file in the sounds directory and reused on later
launches.

Sound names
-----------
- ``session_complete``: bright arpeggio when a work session ends
- ``break_over``:       soft bell when a break ends
- ``click``:            subtle tick for UI feedback
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = Path.home() / ".cache" / "PomoTimer" / "sounds"

SOUND_NAMES = (
    "session_complete",
    "break_over",
    "click",
)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _envelope(
    length: int,
    attack: float,
    decay: float,
    sustain_level: float,
    release: float,
) -> np.ndarray:
    """ADSR envelope; attack, decay and release are fractions of *length*."""
    a = int(length * attack)
    d = int(length * decay)
    r = int(length * release)
    s = max(0, length - a - d - r)
    env = np.concatenate([
        np.linspace(0.0, 1.0, a, endpoint=False),
        np.linspace(1.0, sustain_level, d, endpoint=False),
        np.full(s, sustain_level),
        np.linspace(sustain_level, 0.0, r),
    ])
    return env[:length] if len(env) >= length else np.pad(env, (0, length - len(env)))


def _tone(
    freq: float,
    duration_s: float,
    amplitude: float,
    overtone: float = 0.0,
) -> np.ndarray:
    """Sine at *freq* Hz, optionally with a quieter octave above."""
    t = np.arange(int(SAMPLE_RATE * duration_s)) / SAMPLE_RATE
    wave_ = np.sin(2 * np.pi * freq * t)
    if overtone:
        wave_ = wave_ + overtone * np.sin(4 * np.pi * freq * t)
    return amplitude * wave_


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _sequence(
    notes: list[float],
    note_s: float,
    gap_s: float,
    amplitude: float = 0.5,
    last_note_s: float | None = None,
) -> np.ndarray:
    """Play *notes* one after another; the last may ring longer."""
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        is_last = i == len(notes) - 1
        dur = last_note_s if (is_last and last_note_s) else note_s
        tone = _tone(freq, dur, amplitude)
        if is_last:
            tone = tone * _envelope(len(tone), 0.02, 0.2, 0.5, 0.5)
        else:
            tone = tone * _envelope(len(tone), 0.05, 0.3, 0.4, 0.4)
        parts.append(tone)
        parts.append(_silence(gap_s))
    return np.concatenate(parts)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float array (-1..1) to mono 16-bit PCM WAV bytes."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  CUES
# ═══════════════════════════════════════════════════════════════════════════


def _generate_session_complete() -> bytes:
    # C5, E5, G5, C6 with a held top note
    return _to_wav_bytes(
        _sequence([523.25, 659.25, 783.99, 1046.50], 0.10, 0.02, last_note_s=0.35)
    )


def _generate_break_over() -> bytes:
    # A4 bell with a faint octave
    bell = _tone(440.0, 1.0, 0.35, overtone=0.25)
    return _to_wav_bytes(bell * _envelope(len(bell), 0.08, 0.3, 0.25, 0.55))


def _generate_click() -> bytes:
    tick = _tone(1200.0, 0.015, 0.2)
    tick = tick * _envelope(len(tick), 0.1, 0.3, 0.0, 0.6)
    # Trailing silence so QSoundEffect doesn't clip
    return _to_wav_bytes(np.concatenate([tick, _silence(0.03)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "session_complete": _generate_session_complete,
    "break_over": _generate_break_over,
    "click": _generate_click,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Generates, caches and plays the cues.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("session_complete")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a cue by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("no sound loaded for %r", name)
            return
        effect.play()

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Render any cue missing from the sounds directory."""
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            for name, generate in _GENERATORS.items():
                path = self._sounds_dir / f"{name}.wav"
                if not path.exists():
                    path.write_bytes(generate())
        except OSError:
            # Sounds are optional; the timer works without them
            logger.exception("could not write sounds to %s", self._sounds_dir)

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect

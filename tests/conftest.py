"""Shared pytest fixtures for PomoTimer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pomotimer.settings import Settings
from pomotimer.timer.config import EngineConfig
from pomotimer.timer.engine import TimerEngine


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def settings_file(tmp_path, monkeypatch):
    """Keep every test away from the real settings file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("pomotimer.settings.APP_CONFIG_DIR", tmp_path)
    monkeypatch.setattr("pomotimer.settings.SETTINGS_PATH", path)
    yield path


@pytest.fixture
def config():
    """Default 25/5/15 configuration, long break every 4th work session."""
    return EngineConfig()


@pytest.fixture
def engine(qapp, config):
    """Fresh TimerEngine with both auto-start flags OFF."""
    eng = TimerEngine(config)
    yield eng
    eng.destroy()


@pytest.fixture
def engine_auto(qapp):
    """Fresh TimerEngine that auto-starts breaks and work sessions."""
    eng = TimerEngine(EngineConfig(auto_start_breaks=True, auto_start_work=True))
    yield eng
    eng.destroy()


@pytest.fixture
def settings():
    return Settings()

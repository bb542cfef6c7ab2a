"""Shared pytest fixtures for chronokit tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    yield app


@pytest.fixture
def clock():
    """Manually advanced monotonic clock, starting at 1000.0 s."""
    return FakeClock()


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    """Point the settings module at a throwaway directory."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("chronokit.settings.SETTINGS_PATH", path)
    monkeypatch.setattr("chronokit.settings.CONFIG_DIR", tmp_path)
    return path

"""Shared test fixtures."""

import pytest
from unittest.mock import patch

from blakkout.config import DEFAULTS
from blakkout import log
from blakkout.scheduler import ManualClock, Scheduler
from blakkout.unlocks.registry import UnlockRegistry
from blakkout.unlocks.store import MemoryStore


class RecordingNotifier:
    """collects notify() calls."""

    def __init__(self):
        self.calls = []

    def notify(self, kind, text, duration_ms):
        self.calls.append((kind, text, duration_ms))

    def texts(self):
        return [c[1] for c in self.calls]


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """keep every test away from the real ~/.blakkout."""
    for key in DEFAULTS:
        monkeypatch.delenv(f"BLAKKOUT_{key.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    with patch("blakkout.paths.CONFIG_FILE", home / "config.json"), \
         patch("blakkout.paths.STORAGE_FILE", home / "storage.json"), \
         patch("blakkout.paths.HISTORY_FILE", home / "repl_history"):
        yield home


@pytest.fixture(autouse=True)
def quiet_log():
    """every test starts at info level with no sink."""
    log.set_level("info")
    log.set_sink(None)
    yield
    log.set_level("info")
    log.set_sink(None)


@pytest.fixture
def clock():
    return ManualClock(start_ms=10_000)


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def registry(store, notifier, scheduler):
    return UnlockRegistry(store=store, notifier=notifier, scheduler=scheduler)

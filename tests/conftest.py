from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime

import pytest

# Keep log files out of the working tree; must happen before the app is imported.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="drug-tracker-logs-"))

import drug_schedule  # noqa: E402
from settings import SCHEDULE_TIME_ZONE, get_settings  # noqa: E402


class FrozenClock:
    def __init__(self) -> None:
        self.current = datetime(2024, 3, 15, 9, 0, tzinfo=SCHEDULE_TIME_ZONE)

    def set(self, hour: int, minute: int = 0, second: int = 0) -> None:
        self.current = self.current.replace(hour=hour, minute=minute, second=second)

    def __call__(self) -> datetime:
        return self.current


@pytest.fixture
def clock(monkeypatch) -> FrozenClock:
    frozen = FrozenClock()
    monkeypatch.setattr(drug_schedule, "now", frozen)
    return frozen


@pytest.fixture
def store_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setenv("DT_SETTINGS_FILE_PATH", str(path))
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()


@pytest.fixture
def write_store(store_path):
    def _write(payload) -> None:
        store_path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def read_store(store_path):
    def _read():
        return json.loads(store_path.read_text(encoding="utf-8"))

    return _read

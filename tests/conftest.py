import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from autobackup import scanner

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_file(folder: Path, name: str, age_days: float, content: bytes = b"x", now: datetime = NOW) -> Path:
    p = folder / name
    p.write_bytes(content)
    ts = (now - timedelta(days=age_days)).timestamp()
    os.utime(p, (ts, ts))
    return p


@pytest.fixture
def mtime_as_creation(monkeypatch):
    """Ignore birth times so os.utime() alone decides a file's age."""
    monkeypatch.setattr(scanner, "native_creation_time", lambda st: None)


@pytest.fixture
def source(tmp_path, mtime_as_creation) -> Path:
    d = tmp_path / "src"
    d.mkdir()
    return d


@pytest.fixture
def dest(tmp_path) -> Path:
    d = tmp_path / "dst"
    d.mkdir()
    return d


@pytest.fixture
def logs(tmp_path) -> Path:
    d = tmp_path / "logs"
    d.mkdir()
    return d

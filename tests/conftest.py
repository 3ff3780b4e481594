"""Shared pytest configuration and fixtures for the event video test suite."""

import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from stitcher import frames
from tests.helpers import FakeRunner


@pytest.fixture(autouse=True)
def mtime_timestamps(monkeypatch):
    """Tests drive timestamps through os.utime, so ignore creation times."""
    original = frames.resolve_timestamp
    monkeypatch.setattr(
        frames, "resolve_timestamp",
        lambda meta: original(SimpleNamespace(st_mtime=meta.st_mtime)),
    )


@pytest.fixture
def fake_runner():
    return FakeRunner()

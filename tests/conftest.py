# tests/conftest.py
from __future__ import annotations

import pytest

from ringalg import runtime


@pytest.fixture(autouse=True)
def fresh_runtime():
    """Every test starts with default runtime settings."""
    rt = runtime.reset()
    yield rt
    runtime.reset()


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Point RINGALG_HOME at an empty temporary folder."""
    home = tmp_path / "ringalg-home"
    monkeypatch.setenv("RINGALG_HOME", str(home))
    return home

"""
Shared pytest fixtures for tdh tests.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def isolate_user_files(tmp_path, monkeypatch) -> None:
    """
    Ensure tests do not read/write the real task list or config.

    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary path provided by pytest.
    monkeypatch : pytest.MonkeyPatch
        Monkeypatch fixture for environment updates.
    """
    monkeypatch.setenv("TDH_DATA_PATH", str(tmp_path / "todos.json"))
    monkeypatch.setenv("TDH_CONFIG_PATH", str(tmp_path / "config.toml"))
    monkeypatch.delenv("NO_COLOR", raising=False)

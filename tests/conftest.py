"""Shared fixtures: settings never read the developer's environment."""

import os

import pytest

from core.config import AppSettings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    for name in list(os.environ):
        if name.upper().startswith("DEPVIZ_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setitem(AppSettings.model_config, "env_file", (str(tmp_path / ".env"),))
    return tmp_path

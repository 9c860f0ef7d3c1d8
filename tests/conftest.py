"""Shared fixtures: keep audit/app logs and saved blobs inside tmp_path."""

import pytest

from evaluation_app import config


@pytest.fixture(autouse=True)
def _isolated_dirs(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(config, "DATA_DIR", tmp_path / "data")

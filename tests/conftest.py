"""Shared fixtures for all test modules."""
import os
import tempfile

import pytest

# Point the data directory somewhere disposable before daylog.utils.config is
# imported, so collection never touches the real user data dir.
if not os.environ.get("DAYLOG_HOME"):
    os.environ["DAYLOG_HOME"] = tempfile.mkdtemp(prefix="daylog-tests-")


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Redirect the store and config files into a fresh tmp directory."""
    import daylog.utils.config as cfg
    from daylog.models import storage

    monkeypatch.setattr(cfg, "DATA_DIR", tmp_path)
    monkeypatch.setattr(cfg, "CONFIG_FILE", tmp_path / "config.json")
    monkeypatch.setattr(cfg, "STORE_FILE", tmp_path / "store.json")
    monkeypatch.setattr(storage, "STORE_FILE", tmp_path / "store.json")
    return tmp_path

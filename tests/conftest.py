"""Shared test fixtures for focusdesk tests."""

import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from focusdesk import config as config_module
from focusdesk.kvstore import KeyValueStore


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's real config file and database."""
    monkeypatch.setattr(config_module, "CONFIG_PATH", tmp_path / "no-such-config.yaml")
    monkeypatch.delenv(config_module.DB_ENV, raising=False)


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "focusdesk.db")


@pytest.fixture
def kv(db_path):
    return KeyValueStore(db_path)

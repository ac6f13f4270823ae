"""Keep tests away from the user's ~/.jj-saver config and database."""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jj_saver import config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("JJ_SAVER_CONFIG", str(tmp_path / "missing-config.json"))
    monkeypatch.setenv("JJ_SAVER_DB_DIR", str(tmp_path / "db"))
    for key in list(os.environ):
        if key.startswith(config.ENV_PREFIX) and key not in ("JJ_SAVER_CONFIG", "JJ_SAVER_DB_DIR"):
            monkeypatch.delenv(key)
    config.reload()
    yield
    config.reload()

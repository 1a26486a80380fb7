import sys
from pathlib import Path

# Ensure the project root is on sys.path so `exactsolver` and `backend` are importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from exactsolver import config


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    monkeypatch.delenv(config.SETTINGS_ENV_VAR, raising=False)
    config.reset_settings()
    yield
    config.reset_settings()

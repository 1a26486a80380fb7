"""
ExactSolver — settings and logging setup.

Settings are a flat dict.  ``load_settings`` merges a JSON file over
``DEFAULT_SETTINGS``; the file path comes from the argument or the
``EXACTSOLVER_SETTINGS`` environment variable.
"""

import json
import logging
import os
from typing import Optional

from exactsolver.rational import DEFAULT_EPSILON

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "EXACTSOLVER_SETTINGS"

# ── Default settings ─────────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    "epsilon": DEFAULT_EPSILON,         # near-zero threshold for pivots
    "default_method": "gauss-jordan",   # "gaussian" or "gauss-jordan"
    "log_level": "WARNING",
    "max_dimension": 5,                 # enforced by the HTTP adapter only
}

_active_settings = dict(DEFAULT_SETTINGS)


def _read_file(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return {}
    return data


def load_settings(path: Optional[str] = None) -> dict:
    """Load settings from *path* (or the env var) over the defaults.

    Unknown keys are dropped.  The merged dict becomes the active settings
    and is also returned.
    """
    global _active_settings
    path = path or os.environ.get(SETTINGS_ENV_VAR)
    merged = dict(DEFAULT_SETTINGS)
    if path:
        for key, value in _read_file(path).items():
            if key in DEFAULT_SETTINGS:
                merged[key] = value
            else:
                logger.debug("Unknown setting %r ignored", key)
    _active_settings = merged
    return dict(merged)


def get_setting(key: str):
    return _active_settings.get(key, DEFAULT_SETTINGS[key])


def reset_settings() -> None:
    global _active_settings
    _active_settings = dict(DEFAULT_SETTINGS)


def configure_logging(level: Optional[str] = None) -> None:
    """Send library logs to stderr at *level* (default: the ``log_level`` setting)."""
    level = level or get_setting("log_level")
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s')
    logging.getLogger("exactsolver").setLevel(level)

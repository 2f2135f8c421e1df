"""Application settings for romdb."""
from __future__ import annotations

import json
import logging
import os
from copy import deepcopy
from typing import Any, Dict

from .resolver import ART_URL_TEMPLATE, WIKI_URL_TEMPLATE

log = logging.getLogger(__name__)

APP_DIR = os.path.expanduser("~/.romdb")
DEFAULT_SETTINGS_PATH = os.path.join(APP_DIR, "settings.json")
DEFAULT_LOG_FILE = os.path.join(APP_DIR, "logs", "events.log")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "database": {
        "path": "",
    },
    "urls": {
        "art_template": ART_URL_TEMPLATE,
        "wiki_template": WIKI_URL_TEMPLATE,
    },
    "monitor": {
        "log_file": "",
        "echo": False,
    },
    "web": {
        "host": "127.0.0.1",
        "port": 5000,
    },
}


def _deep_merge(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    out = deepcopy(base)
    for k, v in (updates or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = deepcopy(v)
    return out


def load_settings(path: str = DEFAULT_SETTINGS_PATH) -> Dict[str, Any]:
    if not os.path.exists(path):
        return deepcopy(DEFAULT_SETTINGS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return _deep_merge(DEFAULT_SETTINGS, data)
    except (OSError, ValueError) as e:
        log.warning("Ignoring unreadable settings file %s: %s", path, e)
        return deepcopy(DEFAULT_SETTINGS)


def save_settings(settings: Dict[str, Any], path: str = DEFAULT_SETTINGS_PATH) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, ensure_ascii=False, indent=2)


def resolve_database_path(settings: Dict[str, Any], override: str | None = None) -> str:
    """Explicit override, then the configured path, then $ROMDB_DATABASE."""
    if override:
        return override
    configured = settings.get("database", {}).get("path", "")
    return configured or os.environ.get("ROMDB_DATABASE", "")

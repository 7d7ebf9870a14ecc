"""Load env credentials and pipeline settings."""
from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobtracker.log import get_logger

log = get_logger(__name__)

load_dotenv()

CONFIG_DIR: Path = Path(__file__).resolve().parent.parent / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"

DEFAULT_SETTINGS: dict[str, Any] = {
    "cache_ttl_hours": 6,
    "provider_timeout_s": 10,
    "results_per_page": 30,
    "default_keyword": "software engineer",
    "country": "us",
    "sort_by": "date",
    "best_matches": 8,
    "max_workers": 8,
    "log_dir": "logs",
    "llm": {
        "enabled": True,
        "model": "gpt-3.5-turbo",
        "temperature": 0.1,
        "max_tokens": 10,
        "timeout_s": 10,
    },
}


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def load_settings(path: Path | None = None) -> dict[str, Any]:
    """Defaults overlaid with settings.yaml; the ``llm`` block merges per key."""
    path = path or SETTINGS_PATH
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if isinstance(data, dict):
            llm_overrides = data.pop("llm", None) or {}
            settings.update(data)
            settings["llm"].update(llm_overrides)
        else:
            log.warning("Ignoring %s: expected a mapping, got %s", path.name, type(data).__name__)
    else:
        log.debug("No settings file at %s, using defaults", path)

    model = get_env("OPENAI_MODEL")
    if model:
        settings["llm"]["model"] = model
    return settings

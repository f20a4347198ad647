"""Configuration loader for siteprobe."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from siteprobe import __version__

log = logging.getLogger(__name__)

DEFAULTS: dict = {
    "home": "~/.siteprobe",
    "robots": {
        "timeout": 10.0,
        "user_agent": f"siteprobe/{__version__}",
        "follow_redirects": True,
    },
    "report": {
        "max_api_endpoints": 15,
        "max_other_endpoints": 20,
        "url_width": 60,
    },
    "logging": {
        "level": "warning",
    },
}


def resolve_home() -> Path:
    """Resolve SITEPROBE_HOME: env var > default ~/.siteprobe."""
    env_home = os.environ.get("SITEPROBE_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path("~/.siteprobe").expanduser().resolve()


def config_path(home: Path | None = None) -> Path:
    """Return the path to config.yaml."""
    if home is None:
        home = resolve_home()
    return home / "config.yaml"


def load_config(path: Path | None = None) -> dict:
    """Load config.yaml and merge with defaults.

    Args:
        path: Explicit path to config.yaml. If None, uses default location.

    Returns:
        Merged configuration dict.
    """
    if path is None:
        path = config_path()

    user_config: dict = {}
    if path.exists():
        try:
            raw = path.read_text(encoding="utf-8")
            loaded = yaml.safe_load(raw) or {}
            if isinstance(loaded, dict):
                user_config = loaded
            else:
                log.warning("Config at %s is not a mapping, using defaults", path)
        except (OSError, yaml.YAMLError):
            log.warning("Failed to read config at %s, using defaults", path, exc_info=True)

    merged = _deep_merge(DEFAULTS, user_config)

    home_str = os.environ.get("SITEPROBE_HOME") or merged.get("home", "~/.siteprobe")
    merged["home"] = str(Path(home_str).expanduser().resolve())

    return merged


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result

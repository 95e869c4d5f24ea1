"""
Configuration — loads settings from .codemap.yaml, environment variables,
and built-in defaults (in that priority order: CLI args > env > YAML > defaults).
"""

from __future__ import annotations

import logging
import os

import yaml

logger = logging.getLogger(__name__)

_DEFAULTS = {
    "cache_dir": ".codemap",
    "max_depth": 6,
    "hint_context": "cli",
    "suggestion_limit": 5,
    "area_list_limit": 15,
    "log_dir": ".codemap/logs",
}

# Config file search locations
_CONFIG_FILENAMES = [".codemap.yaml", ".codemap.yml"]


def _find_config_file(project_root: str | None = None,
                      explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, project root, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    search_dirs = [project_root or os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file, returns empty dict on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.warning("Could not read config %s: %s", path, exc)
        return {}


# Each setting: attribute name -> (env var, YAML key, cast)
_SETTINGS = {
    "CACHE_DIR": ("CODEMAP_CACHE_DIR", "cache_dir", str),
    "MAX_DEPTH": ("CODEMAP_MAX_DEPTH", "max_depth", int),
    "HINT_CONTEXT": ("CODEMAP_HINT_CONTEXT", "hint_context", str),
    "SUGGESTION_LIMIT": ("CODEMAP_SUGGESTION_LIMIT", "suggestion_limit", int),
    "AREA_LIST_LIMIT": ("CODEMAP_AREA_LIST_LIMIT", "area_list_limit", int),
    "LOG_DIR": ("CODEMAP_LOG_DIR", "log_dir", str),
}


def _resolve(env_key: str, yaml_key: str, cast, yaml_data: dict):
    """env var > yaml > default; unusable values fall back to the default."""
    for source, raw in (("env", os.getenv(env_key)), ("yaml", yaml_data.get(yaml_key))):
        if raw is None:
            continue
        try:
            value = cast(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring %s value %r for %s", source, raw, yaml_key)
            continue
        if cast is int and value < 0:
            logger.warning("Ignoring negative %s for %s", source, yaml_key)
            continue
        return value
    return _DEFAULTS[yaml_key]


class Config:
    """Tool configuration.

    Settings are resolved in priority order:
    1. CLI arguments (handled by caller)
    2. Environment variables
    3. .codemap.yaml config file
    4. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}
        for attr, (env_key, yaml_key, cast) in _SETTINGS.items():
            setattr(self, attr, _resolve(env_key, yaml_key, cast, yd))

        if self.HINT_CONTEXT not in ("cli", "tool"):
            logger.warning("Unknown hint_context %r, using 'cli'", self.HINT_CONTEXT)
            self.HINT_CONTEXT = _DEFAULTS["hint_context"]

    @classmethod
    def load(cls, project_root: str | None = None,
             config_path: str | None = None) -> "Config":
        """Load config from file (if found) + env vars + defaults."""
        path = _find_config_file(project_root, config_path)
        yaml_data = _load_yaml(path) if path else {}
        if path:
            logger.debug("Loaded config from %s", path)
        return cls(yaml_data)

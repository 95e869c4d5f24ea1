"""
Area configuration store — reads and writes ``areas.config.yaml``.

The file lives in the project's cache directory and declares explicit
areas, per-file description overrides, an ignore list and two switches::

    areas:
      auth:
        name: Authentication
        description: Login, sessions and tokens
        patterns: ["src/auth/**", "src/app/(auth)/**"]
        keywords: [login, session]
        exclude: ["**/*.stories.tsx"]
    descriptions:
      src/lib/firebase.ts: Firebase client bootstrap
    ignore: ["src/legacy/**"]
    settings:
      auto_detect: true
      infer_descriptions: true

JSON is valid YAML, so an ``areas.config.json``-style file written by
hand also loads.  Reading never raises: a missing, unreadable or
malformed file yields :data:`DEFAULT_CONFIG`'s values, which means
automatic inference only.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILE = "areas.config.yaml"
DEFAULT_CACHE_DIR = ".codemap"


@dataclass
class AreaDefinition:
    """An explicitly declared area."""
    name: str = ""
    description: str = ""
    patterns: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "AreaDefinition":
        return cls(
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            patterns=_str_list(data.get("patterns")),
            keywords=_str_list(data.get("keywords")),
            exclude=_str_list(data.get("exclude")),
        )

    def to_dict(self) -> dict:
        out: dict = {"name": self.name, "patterns": list(self.patterns)}
        if self.description:
            out["description"] = self.description
        if self.keywords:
            out["keywords"] = list(self.keywords)
        if self.exclude:
            out["exclude"] = list(self.exclude)
        return out


@dataclass
class AreaSettings:
    auto_detect: bool = True
    infer_descriptions: bool = True


@dataclass
class AreasConfig:
    """Parsed contents of ``areas.config.yaml``."""
    areas: dict[str, AreaDefinition] = field(default_factory=dict)
    descriptions: dict[str, str] = field(default_factory=dict)
    ignore: list[str] = field(default_factory=list)
    settings: AreaSettings = field(default_factory=AreaSettings)

    @classmethod
    def from_dict(cls, data: dict) -> "AreasConfig":
        areas_raw = data.get("areas") or {}
        descriptions_raw = data.get("descriptions") or {}
        settings_raw = data.get("settings") or {}
        if not isinstance(areas_raw, dict):
            areas_raw = {}
        if not isinstance(descriptions_raw, dict):
            descriptions_raw = {}
        if not isinstance(settings_raw, dict):
            settings_raw = {}

        defaults = AreaSettings()
        return cls(
            areas={
                str(area_id): AreaDefinition.from_dict(spec)
                for area_id, spec in areas_raw.items()
                if isinstance(spec, dict)
            },
            descriptions={str(k): str(v) for k, v in descriptions_raw.items()},
            ignore=_str_list(data.get("ignore")),
            settings=AreaSettings(
                auto_detect=_flag(settings_raw, "auto_detect", defaults.auto_detect),
                infer_descriptions=_flag(
                    settings_raw, "infer_descriptions", defaults.infer_descriptions
                ),
            ),
        )

    def to_dict(self) -> dict:
        return {
            "areas": {area_id: a.to_dict() for area_id, a in self.areas.items()},
            "descriptions": dict(self.descriptions),
            "ignore": list(self.ignore),
            "settings": {
                "auto_detect": self.settings.auto_detect,
                "infer_descriptions": self.settings.infer_descriptions,
            },
        }


DEFAULT_CONFIG = AreasConfig()


def _flag(settings: dict, key: str, default: bool) -> bool:
    """Return ``settings[key]`` if it is a real boolean, else *default*."""
    value = settings.get(key, default)
    if isinstance(value, bool):
        return value
    logger.warning("[areas] settings.%s must be true or false, got %r; using %s",
                   key, value, default)
    return default


def _str_list(value) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return []


# ---------------------------------------------------------------------------
# File access
# ---------------------------------------------------------------------------

def config_path(project_root: str, cache_dir: str = DEFAULT_CACHE_DIR) -> str:
    """Return the path of ``areas.config.yaml`` for *project_root*."""
    return os.path.join(project_root, cache_dir, CONFIG_FILE)


def config_exists(project_root: str, cache_dir: str = DEFAULT_CACHE_DIR) -> bool:
    return os.path.isfile(config_path(project_root, cache_dir))


def read_areas_config(project_root: str,
                      cache_dir: str = DEFAULT_CACHE_DIR) -> AreasConfig:
    """
    Load the area configuration for *project_root*.

    Never raises.  Any read or parse failure logs a warning and returns a
    copy of :data:`DEFAULT_CONFIG` so callers fall back to automatic
    inference.
    """
    path = config_path(project_root, cache_dir)
    if not os.path.isfile(path):
        return copy.deepcopy(DEFAULT_CONFIG)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.warning("[areas] Could not read %s, using defaults: %s", path, exc)
        return copy.deepcopy(DEFAULT_CONFIG)
    if data is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    if not isinstance(data, dict):
        logger.warning("[areas] %s is not a mapping, using defaults", path)
        return copy.deepcopy(DEFAULT_CONFIG)
    return AreasConfig.from_dict(data)


def write_areas_config(project_root: str, config: AreasConfig,
                       cache_dir: str = DEFAULT_CACHE_DIR) -> str:
    """Write *config* to ``areas.config.yaml`` and return the file path."""
    path = config_path(project_root, cache_dir)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        yaml.safe_dump(config.to_dict(), fh, sort_keys=False, allow_unicode=True)
    return path


def set_area(project_root: str, area_id: str, area: AreaDefinition,
             cache_dir: str = DEFAULT_CACHE_DIR) -> None:
    """Add or replace the declaration for *area_id*."""
    config = read_areas_config(project_root, cache_dir)
    config.areas[area_id] = area
    write_areas_config(project_root, config, cache_dir)


def remove_area(project_root: str, area_id: str,
                cache_dir: str = DEFAULT_CACHE_DIR) -> None:
    """Remove the declaration for *area_id* (no-op if absent)."""
    config = read_areas_config(project_root, cache_dir)
    config.areas.pop(area_id, None)
    write_areas_config(project_root, config, cache_dir)


def set_file_description(project_root: str, file_path: str, description: str,
                         cache_dir: str = DEFAULT_CACHE_DIR) -> None:
    """Store a manual one-line description for *file_path*."""
    config = read_areas_config(project_root, cache_dir)
    config.descriptions[file_path.replace("\\", "/")] = description
    write_areas_config(project_root, config, cache_dir)


def get_file_description(config: AreasConfig, file_path: str) -> Optional[str]:
    """Return the manual description for *file_path*, if one is configured."""
    return config.descriptions.get(file_path.replace("\\", "/"))

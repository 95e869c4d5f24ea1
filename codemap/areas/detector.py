"""
Area detection — which feature areas does a file belong to?

Resolution order for a single file:

1. Explicit declarations from areas.config.yaml (always consulted)
2. Built-in folder patterns        (only when ``settings.auto_detect``)
3. Built-in file-name keywords     (only when ``settings.auto_detect``)

A file may belong to several areas.  Ignored files belong to none.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Callable, NamedTuple, Optional, Sequence

import pathspec

from ..classifier import FileCategory
from ..similarity import extract_file_name
from .config import AreaDefinition, AreasConfig, get_file_description
from .patterns import AREA_DESCRIPTIONS, AREA_NAMES, FOLDER_PATTERNS, KEYWORD_PATTERNS

logger = logging.getLogger(__name__)

# Explicit declarations always outrank inferred matches.
_CONFIG_PRIORITY = 200


class _AreaMatch(NamedTuple):
    area: str
    priority: int
    source: str   # "config" | "folder" | "keyword"


@lru_cache(maxsize=256)
def _compile(patterns: tuple[str, ...]) -> pathspec.PathSpec:
    return pathspec.GitIgnoreSpec.from_lines(patterns)


def _matches_any(path: str, patterns: Sequence[str]) -> bool:
    if not patterns:
        return False
    return _compile(tuple(patterns)).match_file(path)


def _normalize(path: str) -> str:
    path = path.replace("\\", "/")
    return path[2:] if path.startswith("./") else path


def is_file_ignored(file_path: str, config: AreasConfig) -> bool:
    """Return True if *file_path* matches one of ``config.ignore``."""
    return _matches_any(_normalize(file_path), config.ignore)


def _matches_definition(path: str, area: AreaDefinition) -> bool:
    if _matches_any(path, area.exclude):
        return False
    if _matches_any(path, area.patterns):
        return True
    lower = path.lower()
    return any(kw.lower() in lower for kw in area.keywords if kw)


def resolve_areas(file_path: str, config: AreasConfig) -> list[str]:
    """
    Return the area ids *file_path* belongs to, highest priority first.

    The result is deduplicated.  Ignored files always return ``[]``.

    Parameters
    ----------
    file_path:
        Project-relative path (either separator).
    config:
        Parsed area configuration.
    """
    path = _normalize(file_path)
    if is_file_ignored(path, config):
        logger.debug("[areas] %s is ignored", path)
        return []

    matches: list[_AreaMatch] = [
        _AreaMatch(area_id, _CONFIG_PRIORITY, "config")
        for area_id, definition in config.areas.items()
        if _matches_definition(path, definition)
    ]

    if config.settings.auto_detect:
        seen = {m.area for m in matches}
        for pattern, area, priority in FOLDER_PATTERNS:
            if area not in seen and pattern.search(path):
                matches.append(_AreaMatch(area, priority, "folder"))
                seen.add(area)

        file_name = path.rsplit("/", 1)[-1]
        for keyword, area, priority in KEYWORD_PATTERNS:
            if area not in seen and (keyword.search(file_name) or keyword.search(path)):
                matches.append(_AreaMatch(area, priority, "keyword"))
                seen.add(area)

    # sort() is stable: equal priorities keep declaration order
    matches.sort(key=lambda m: -m.priority)
    result: list[str] = []
    for m in matches:
        if m.area not in result:
            result.append(m.area)
    return result


# ---------------------------------------------------------------------------
# Names and descriptions
# ---------------------------------------------------------------------------

def area_name(area_id: str, config: AreasConfig) -> str:
    """Friendly name: declared name, then built-in name, then title-cased id."""
    declared = config.areas.get(area_id)
    if declared is not None and declared.name:
        return declared.name
    if area_id in AREA_NAMES:
        return AREA_NAMES[area_id]
    return " ".join(word.capitalize() for word in area_id.split("-"))


def area_description(area_id: str, config: AreasConfig) -> Optional[str]:
    declared = config.areas.get(area_id)
    if declared is not None and declared.description:
        return declared.description
    return AREA_DESCRIPTIONS.get(area_id)


def is_auto_detected(area_id: str, config: AreasConfig) -> bool:
    """True when *area_id* was inferred rather than declared."""
    return area_id not in config.areas


_DESCRIPTION_PATTERNS: list[tuple[re.Pattern, Callable[[re.Match], str]]] = [
    # framework reserved files
    (re.compile(r"^page$"), lambda m: "Main page"),
    (re.compile(r"^layout$"), lambda m: "Layout"),
    (re.compile(r"^loading$"), lambda m: "Loading state"),
    (re.compile(r"^error$"), lambda m: "Error page"),
    (re.compile(r"^not-found$"), lambda m: "404 page"),

    # component suffixes
    (re.compile(r"(.+)PageClient$"), lambda m: f"Client component for the {m[1]} page"),
    (re.compile(r"(.+)Dialog$"), lambda m: f"{m[1]} dialog"),
    (re.compile(r"(.+)Modal$"), lambda m: f"{m[1]} modal"),
    (re.compile(r"(.+)Form$"), lambda m: f"{m[1]} form"),
    (re.compile(r"(.+)Card$"), lambda m: f"{m[1]} card"),
    (re.compile(r"(.+)List$"), lambda m: f"{m[1]} list"),
    (re.compile(r"(.+)Table$"), lambda m: f"{m[1]} table"),
    (re.compile(r"(.+)Manager$"), lambda m: f"{m[1]} manager"),
    (re.compile(r"(.+)Provider$"), lambda m: f"{m[1]} provider"),
    (re.compile(r"(.+)Context$"), lambda m: f"{m[1]} context"),
    (re.compile(r"(.+)Step$"), lambda m: f"Step: {m[1]}"),
    (re.compile(r"(.+)Tab$"), lambda m: f"Tab: {m[1]}"),
    (re.compile(r"(.+)Section$"), lambda m: f"Section: {m[1]}"),
    (re.compile(r"(.+)Header$"), lambda m: f"{m[1]} header"),
    (re.compile(r"(.+)Footer$"), lambda m: f"{m[1]} footer"),
    (re.compile(r"(.+)Skeleton$"), lambda m: f"{m[1]} loading skeleton"),
    (re.compile(r"(.+)Badge$"), lambda m: f"{m[1]} badge"),
    (re.compile(r"(.+)Button$"), lambda m: f"{m[1]} button"),
    (re.compile(r"(.+)Icon$"), lambda m: f"{m[1]} icon"),

    # hooks
    (re.compile(r"^use([A-Z].*)$"), lambda m: f"Hook for {m[1].lower()}"),

    # types / schemas
    (re.compile(r"(.+)\.types$"), lambda m: f"Types for {m[1].lower()}"),
    (re.compile(r"(.+)Schemas?$"), lambda m: f"{m[1]} schema"),

    # utilities
    (re.compile(r"(.+)Helpers?$"), lambda m: f"{m[1]} helpers"),
    (re.compile(r"(.+)Utils?$"), lambda m: f"{m[1]} utilities"),
    (re.compile(r"(.+)Formatters?$"), lambda m: f"{m[1]} formatter"),
    (re.compile(r"(.+)Validators?$"), lambda m: f"{m[1]} validator"),
    (re.compile(r"(.+)Mappers?$"), lambda m: f"{m[1]} mapper"),

    (re.compile(r"(.+)Service$"), lambda m: f"{m[1]} service"),
    (re.compile(r"^index$"), lambda m: "Barrel export"),
]

_CATEGORY_DESCRIPTIONS: dict[FileCategory, str] = {
    FileCategory.PAGE: "Page",
    FileCategory.LAYOUT: "Layout",
    FileCategory.ROUTE: "API route",
    FileCategory.COMPONENT: "Component",
    FileCategory.HOOK: "Hook",
    FileCategory.SERVICE: "Service",
    FileCategory.STORE: "Store",
    FileCategory.UTIL: "Utility",
    FileCategory.TYPE: "Types",
    FileCategory.CONFIG: "Configuration",
    FileCategory.TEST: "Test",
}


def infer_file_description(file_path: str, category: FileCategory) -> Optional[str]:
    """Guess a one-line description from the file name, then the category."""
    stem = extract_file_name(file_path)
    for pattern, describe in _DESCRIPTION_PATTERNS:
        match = pattern.search(stem)
        if match:
            return describe(match)
    return _CATEGORY_DESCRIPTIONS.get(category)


def describe_file(file_path: str, category: FileCategory,
                  config: AreasConfig) -> Optional[str]:
    """
    Return the description shown next to *file_path*.

    A manual override from the config always wins.  Otherwise the
    description is inferred, unless ``settings.infer_descriptions`` is off.
    """
    manual = get_file_description(config, _normalize(file_path))
    if manual:
        return manual
    if not config.settings.infer_descriptions:
        return None
    return infer_file_description(file_path, category)

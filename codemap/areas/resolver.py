"""
Resolve free-text area references ("auth", "Authentication", "bill")
to a canonical area id.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Iterable, Optional

from .config import AreasConfig
from .detector import is_file_ignored, resolve_areas
from .patterns import AREA_NAMES

logger = logging.getLogger(__name__)


def fold(text: str) -> str:
    """Lower-case *text* and strip diacritics ("Autenticação" -> "autenticacao")."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _inferred_area_containing(needle: str, config: AreasConfig,
                              all_files: Iterable[str]) -> Optional[str]:
    for file_path in all_files:
        if is_file_ignored(file_path, config):
            continue
        for area_id in resolve_areas(file_path, config):
            if needle in area_id.lower():
                return area_id
    return None


def resolve_area_reference(user_input: str, config: AreasConfig,
                           all_files: Iterable[str]) -> str:
    """
    Map *user_input* to an area id.

    Tries, in order, until one succeeds:

    a. exact declared id
    b. declared friendly name (case and accent insensitive)
    c. built-in friendly name (case and accent insensitive)
    d. substring of a declared id
    e. substring of an id inferred from *all_files*
    f. *user_input* unchanged

    Parameters
    ----------
    user_input:
        What the user typed.
    config:
        Parsed area configuration.
    all_files:
        Project-relative paths used for step (e).
    """
    if user_input in config.areas:
        return user_input

    folded = fold(user_input)

    for area_id, definition in config.areas.items():
        if definition.name and fold(definition.name) == folded:
            logger.debug("[areas] %r matched declared name of %s", user_input, area_id)
            return area_id

    for area_id, name in AREA_NAMES.items():
        if fold(name) == folded:
            logger.debug("[areas] %r matched built-in name of %s", user_input, area_id)
            return area_id

    for area_id in config.areas:
        if folded in area_id.lower():
            return area_id

    inferred = _inferred_area_containing(folded, config, all_files)
    if inferred is not None:
        return inferred

    return user_input

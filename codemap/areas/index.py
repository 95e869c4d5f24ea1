"""
Per-scan area index: file -> areas and its inversion area -> files.

Both mappings are built together from a single pass over the file list
and are never mutated afterwards; a new scan builds a new index.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from ..classifier import FileCategory, classify
from .config import AreasConfig
from .detector import (
    area_description,
    area_name,
    is_auto_detected,
    is_file_ignored,
    resolve_areas,
)


@dataclass
class DetectedArea:
    """Summary of one area as shown by ``codemap areas``."""
    id: str
    name: str
    description: Optional[str]
    file_count: int
    categories: dict[str, int] = field(default_factory=dict)
    is_auto_detected: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "file_count": self.file_count,
            "categories": dict(self.categories),
            "is_auto_detected": self.is_auto_detected,
        }


@dataclass(frozen=True)
class AreaIndex:
    """Immutable many-to-many relation between files and areas."""
    file_areas: Mapping[str, frozenset[str]]
    area_files: Mapping[str, tuple[str, ...]]
    unmapped: tuple[str, ...]

    def areas_of(self, file_path: str) -> frozenset[str]:
        return self.file_areas.get(file_path.replace("\\", "/"), frozenset())

    def files_in(self, area_id: str) -> tuple[str, ...]:
        return self.area_files.get(area_id, ())

    def available_areas(self) -> list[tuple[str, int]]:
        """``(area_id, file_count)`` pairs, most populous first."""
        pairs = [(area_id, len(files)) for area_id, files in self.area_files.items()]
        pairs.sort(key=lambda p: (-p[1], p[0]))
        return pairs


def build_area_index(files: Iterable[str], config: AreasConfig) -> AreaIndex:
    """
    Resolve areas for every non-ignored file and invert the result.

    Files that match no area are listed in ``unmapped``.
    """
    file_areas: dict[str, frozenset[str]] = {}
    area_files: dict[str, list[str]] = {}
    unmapped: list[str] = []

    for raw in files:
        path = raw.replace("\\", "/")
        if is_file_ignored(path, config):
            continue
        areas = resolve_areas(path, config)
        file_areas[path] = frozenset(areas)
        if not areas:
            unmapped.append(path)
        for area_id in areas:
            area_files.setdefault(area_id, []).append(path)

    return AreaIndex(
        file_areas=MappingProxyType(file_areas),
        area_files=MappingProxyType({k: tuple(v) for k, v in area_files.items()}),
        unmapped=tuple(unmapped),
    )


def detected_areas(
    index: AreaIndex,
    config: AreasConfig,
    categorize: Callable[[str], FileCategory] = classify,
) -> list[DetectedArea]:
    """Return a :class:`DetectedArea` per area, most populous first."""
    result: list[DetectedArea] = []
    for area_id, count in index.available_areas():
        counts = Counter(categorize(p).value for p in index.files_in(area_id))
        result.append(DetectedArea(
            id=area_id,
            name=area_name(area_id, config),
            description=area_description(area_id, config),
            file_count=count,
            categories=dict(counts),
            is_auto_detected=is_auto_detected(area_id, config),
        ))
    return result

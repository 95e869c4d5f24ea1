"""
Feature areas: explicit declarations plus path-based inference.

Exports the most commonly used entry points for convenience.
"""

from .config import (
    AreaDefinition,
    AreaSettings,
    AreasConfig,
    DEFAULT_CONFIG,
    read_areas_config,
    write_areas_config,
)
from .detector import (
    area_description,
    area_name,
    describe_file,
    infer_file_description,
    is_file_ignored,
    resolve_areas,
)
from .index import AreaIndex, DetectedArea, build_area_index, detected_areas
from .resolver import resolve_area_reference
from .search import AreaMatch, DescribeResult, describe_areas
from .starter import AreasInit, detect_framework, init_areas_config, starter_config

__all__ = [
    "AreaDefinition",
    "AreaSettings",
    "AreasConfig",
    "DEFAULT_CONFIG",
    "read_areas_config",
    "write_areas_config",
    "area_description",
    "area_name",
    "describe_file",
    "infer_file_description",
    "is_file_ignored",
    "resolve_areas",
    "AreaIndex",
    "DetectedArea",
    "build_area_index",
    "detected_areas",
    "resolve_area_reference",
    "AreaMatch",
    "DescribeResult",
    "describe_areas",
    "AreasInit",
    "detect_framework",
    "init_areas_config",
    "starter_config",
]

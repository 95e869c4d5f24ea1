"""
codemap — a project-knowledge layer for JavaScript/TypeScript source trees.

Classifies files by role, groups them into feature areas, resolves loose
file and area references, and caches scan results until the tree changes::

    from codemap import ProjectScanner

    scanner = ProjectScanner("path/to/project")
    project_map = scanner.build_map()
"""

__version__ = "1.0.0"

from .classifier import FileCategory, classify
from .matcher import find_target
from .scanner import ProjectScanner
from .similarity import distance, find_best_match, find_similar

__all__ = [
    "FileCategory",
    "classify",
    "find_target",
    "ProjectScanner",
    "distance",
    "find_best_match",
    "find_similar",
]

"""
Depth-bounded source walker shared by the scanner and the cache fingerprint.

Skips hidden entries, the dependency/build/output directories in
:data:`SKIP_DIRS`, and anything deeper than ``max_depth`` directories
below the root.  Unreadable directories are skipped, not fatal.
"""

from __future__ import annotations

import logging
import os
from typing import Iterator

from .classifier import CODE_EXTENSIONS

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 6

SKIP_DIRS: frozenset[str] = frozenset({
    "node_modules", "bower_components", "jspm_packages",
    "dist", "build", "out", "output",
    "coverage", "storybook-static",
    "vendor", "target",
    "__pycache__",
    # dot-dirs are skipped anyway; listed for readers
    ".git", ".next", ".nuxt", ".svelte-kit", ".astro", ".output",
    ".cache", ".turbo", ".vercel", ".codemap",
})


def _on_walk_error(exc: OSError) -> None:
    logger.debug("[walker] Skipping unreadable entry: %s", exc)


def iter_source_files(project_root: str,
                      max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[tuple[str, str]]:
    """
    Yield ``(relative_posix_path, absolute_path)`` for every source file.

    Order follows ``os.walk`` with directories visited in sorted order.

    Parameters
    ----------
    project_root:
        Directory to walk.
    max_depth:
        Maximum number of directory levels below *project_root* to enter.
    """
    root = os.path.abspath(project_root)
    for dirpath, dirnames, filenames in os.walk(root, topdown=True, onerror=_on_walk_error):
        rel_dir = os.path.relpath(dirpath, root)
        depth = 0 if rel_dir == os.curdir else rel_dir.count(os.sep) + 1

        # Prune in-place (modifies the walk)
        if depth >= max_depth:
            dirnames[:] = []
        else:
            dirnames[:] = sorted(
                d for d in dirnames
                if d not in SKIP_DIRS and not d.startswith(".")
            )

        for fname in sorted(filenames):
            if fname.startswith("."):
                continue
            ext = os.path.splitext(fname)[1].lower()
            if ext not in CODE_EXTENSIONS:
                continue
            abs_path = os.path.join(dirpath, fname)
            rel_path = os.path.relpath(abs_path, root).replace(os.sep, "/")
            yield rel_path, abs_path


def walk_source_files(project_root: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[str]:
    """Return the sorted relative paths of all source files under *project_root*."""
    return sorted(rel for rel, _ in iter_source_files(project_root, max_depth))

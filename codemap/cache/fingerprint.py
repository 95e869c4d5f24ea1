"""
Structural fingerprint of a source tree.

Not a content hash: the fingerprint folds every source file's
modification time (ns) into an XOR accumulator and tracks the newest
one.  ``"<count>-<xor hex>-<max mtime>"`` changes when files are added,
removed or touched, at the cost of one ``stat`` per file.
"""

from __future__ import annotations

import logging
import os
from typing import NamedTuple, Optional

from ..walker import DEFAULT_MAX_DEPTH, iter_source_files

logger = logging.getLogger(__name__)


class Fingerprint(NamedTuple):
    file_count: int
    accumulator: int
    newest_mtime: int

    def __str__(self) -> str:
        return f"{self.file_count}-{self.accumulator:x}-{self.newest_mtime}"


def compute_fingerprint(project_root: str,
                        max_depth: int = DEFAULT_MAX_DEPTH,
                        extra_files: tuple[str, ...] = ()) -> Fingerprint:
    """
    Fingerprint the source files under *project_root*.

    Parameters
    ----------
    project_root:
        Directory to walk.
    max_depth:
        Directory depth bound for the walk.
    extra_files:
        Absolute paths (e.g. the area config) whose mtimes are XORed into
        the accumulator when they exist.  They do not count as files.
    """
    count = 0
    acc = 0
    newest = 0

    for rel_path, abs_path in iter_source_files(project_root, max_depth):
        mtime = _mtime_ns(abs_path)
        if mtime is None:
            continue
        count += 1
        acc ^= mtime
        newest = max(newest, mtime)

    for path in extra_files:
        mtime = _mtime_ns(path)
        if mtime is not None:
            acc ^= mtime

    return Fingerprint(count, acc, newest)


def _mtime_ns(path: str) -> Optional[int]:
    try:
        return os.stat(path).st_mtime_ns
    except OSError as exc:
        logger.debug("[fingerprint] Cannot stat %s: %s", path, exc)
        return None

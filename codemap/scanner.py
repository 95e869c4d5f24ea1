"""
ProjectScanner — builds the project map and answers file/area lookups.

Full scan:
  1. Ask the analysis cache whether the stored map is still fresh
  2. Walk the project directory (depth-bounded, deny-listed folders skipped)
  3. Classify each source file and resolve its feature areas
  4. Persist map.json (and graph.json when an adjacency mapping is given)
     together with an updated meta.json fingerprint
"""

from __future__ import annotations

import logging
import os
import time
from collections import Counter
from typing import Callable, Mapping, NamedTuple, Optional, Sequence

import networkx as nx

from . import __version__
from .areas import (
    AreaIndex,
    AreasConfig,
    AreasInit,
    DescribeResult,
    build_area_index,
    describe_areas,
    init_areas_config,
    read_areas_config,
    resolve_area_reference,
    resolve_areas,
)
from .cache import AnalysisCache
from .cache.store import MAP_FILE
from .classifier import classify
from .config import Config
from .errors import MissingTargetError
from .matcher import find_target
from .messages import format_area_not_found, format_file_not_found, format_missing_target
from .walker import iter_source_files

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class FileLookup(NamedTuple):
    """Result of :meth:`ProjectScanner.find_file`: a path or a message."""
    path: Optional[str]
    message: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.path is not None


class AreaLookup(NamedTuple):
    """Result of :meth:`ProjectScanner.find_area`: an area id or a message."""
    area_id: Optional[str]
    files: tuple[str, ...] = ()
    message: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.area_id is not None


def build_graph(adjacency: Mapping[str, Sequence[str]]) -> nx.DiGraph:
    """Return a directed import graph from ``{file: [imported files]}``."""
    graph = nx.DiGraph()
    for source, targets in adjacency.items():
        graph.add_node(source)
        for target in targets:
            graph.add_edge(source, target)
    return graph


def _folder_stats(files: list[dict]) -> list[dict]:
    folders: dict[str, dict] = {}
    for entry in files:
        folder, sep, _ = entry["path"].rpartition("/")
        if not sep:
            continue
        stats = folders.setdefault(folder, {"path": folder, "file_count": 0, "categories": {}})
        stats["file_count"] += 1
        cats = stats["categories"]
        cats[entry["category"]] = cats.get(entry["category"], 0) + 1
    return list(folders.values())


class ProjectScanner:
    """
    Scans one project root.

    Parameters
    ----------
    project_root:
        Absolute or relative path to the project.
    config:
        Tool configuration; loaded from *project_root* when omitted.
    """

    def __init__(self, project_root: str, config: Optional[Config] = None) -> None:
        self.project_root = os.path.abspath(project_root)
        self.config = config or Config.load(self.project_root)
        self.cache = AnalysisCache(
            self.project_root,
            cache_dir=self.config.CACHE_DIR,
            max_depth=self.config.MAX_DEPTH,
        )
        self._files: Optional[list[str]] = None

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def areas_config(self) -> AreasConfig:
        return read_areas_config(self.project_root, self.config.CACHE_DIR)

    def files(self) -> list[str]:
        """Sorted relative paths of every source file (walked once per scanner)."""
        if self._files is None:
            self._files = sorted(
                rel for rel, _ in iter_source_files(self.project_root, self.config.MAX_DEPTH)
            )
        return self._files

    def area_index(self) -> AreaIndex:
        return build_area_index(self.files(), self.areas_config())

    # ------------------------------------------------------------------
    # Map
    # ------------------------------------------------------------------

    def build_map(
        self,
        use_cache: bool = True,
        adjacency: Optional[Mapping[str, Sequence[str]]] = None,
        progress_callback: Optional[ProgressCallback] = None,
        circular_dependencies: Optional[list[list[str]]] = None,
    ) -> dict:
        """
        Return the project map, reusing the cached one when still valid.

        Parameters
        ----------
        use_cache:
            Consult and update the analysis cache.
        adjacency:
            Optional ``{file: [imported files]}`` mapping produced by a
            dependency analyser; stored as the graph snapshot.
        progress_callback:
            Optional callable called with (current, total, filename) for
            each classified file.
        circular_dependencies:
            Cycles reported by the dependency analyser, copied verbatim.

        Returns
        -------
        dict
            version, timestamp, root, summary, folders, files,
            circular_dependencies and from_cache.
        """
        if use_cache and self.cache.is_valid():
            cached = self.cache.read_artifact(MAP_FILE)
            if cached is not None:
                logger.info("[scanner] Using cached map for %s", self.project_root)
                self.cache.mark_checked()
                cached.pop("format_version", None)
                cached["from_cache"] = True
                return cached

        start_time = time.time()
        areas_config = self.areas_config()
        self._files = None
        source_files = self.files()
        total = len(source_files)

        files: list[dict] = []
        for idx, rel_path in enumerate(source_files):
            if progress_callback:
                progress_callback(idx + 1, total, rel_path)
            try:
                size = os.path.getsize(os.path.join(self.project_root, rel_path))
            except OSError:
                size = 0
            files.append({
                "path": rel_path,
                "category": classify(rel_path).value,
                "size": size,
                "areas": resolve_areas(rel_path, areas_config),
            })

        folders = _folder_stats(files)
        result = {
            "version": __version__,
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "root": self.project_root,
            "summary": {
                "total_files": len(files),
                "total_folders": len(folders),
                "categories": dict(Counter(f["category"] for f in files)),
            },
            "folders": folders,
            "files": files,
            "circular_dependencies": list(circular_dependencies or []),
        }

        if use_cache:
            try:
                self.cache.cache_map_result(result)
                if adjacency is not None:
                    self.cache.cache_graph(build_graph(adjacency), source_files)
                else:
                    self.cache.update_meta()
            except OSError as exc:
                logger.warning("[scanner] Could not write cache: %s", exc)

        logger.info("[scanner] Mapped %d files in %.2fs", total, time.time() - start_time)
        result["from_cache"] = False
        return result

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_file(self, query: str, command: str = "find") -> FileLookup:
        """
        Resolve *query* to one project file.

        Raises
        ------
        MissingTargetError
            If *query* is empty.
        """
        ctx = self.config.HINT_CONTEXT
        if not query or not query.strip():
            raise MissingTargetError(command, format_missing_target(command, ctx))

        files = self.files()
        path = find_target(query.strip(), files)
        if path is not None:
            return FileLookup(path)
        return FileLookup(None, format_file_not_found(
            query, files, command=command, ctx=ctx, limit=self.config.SUGGESTION_LIMIT,
        ))

    def find_area(self, query: str) -> AreaLookup:
        """
        Resolve *query* to an area id with at least one file.

        Raises
        ------
        MissingTargetError
            If *query* is empty.
        """
        ctx = self.config.HINT_CONTEXT
        if not query or not query.strip():
            raise MissingTargetError("area", format_missing_target("area", ctx))

        areas_config = self.areas_config()
        index = build_area_index(self.files(), areas_config)
        area_id = resolve_area_reference(query.strip(), areas_config, self.files())

        files = index.files_in(area_id)
        if files:
            return AreaLookup(area_id, files)
        return AreaLookup(None, (), format_area_not_found(
            query, index.available_areas(), ctx=ctx, limit=self.config.AREA_LIST_LIMIT,
        ))

    def search_areas(self, query: str) -> DescribeResult:
        """
        Find areas whose name, description, keywords or files match *query*.

        Raises
        ------
        MissingTargetError
            If *query* is empty.
        """
        if not query or not query.strip():
            raise MissingTargetError(
                "describe", format_missing_target("describe", self.config.HINT_CONTEXT),
            )
        return describe_areas(query.strip(), self.area_index(), self.areas_config())

    # ------------------------------------------------------------------
    # Area configuration
    # ------------------------------------------------------------------

    def init_areas(self, force: bool = False) -> Optional[AreasInit]:
        """Write a starter area config; None if one exists and *force* is off."""
        return init_areas_config(self.project_root, self.files(), force=force,
                                 cache_dir=self.config.CACHE_DIR)

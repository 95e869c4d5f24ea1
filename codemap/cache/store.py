"""
Analysis cache — persisted artifacts under ``<root>/.codemap/`` and the
gate that decides whether they can be reused.

Layout::

    .codemap/
      meta.json           tool/schema version, timestamps, fingerprint
      graph.json          dependency graph snapshot (adjacency lists)
      map.json            project map result
      dead.json           dead-code result
      symbols.json        symbol index
      areas.config.yaml   area configuration (see codemap.areas.config)

Every check in this module degrades to "cache miss": a missing,
unreadable or outdated file never raises to the caller.
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Optional

import networkx as nx

from .. import __version__
from ..areas.config import CONFIG_FILE, DEFAULT_CACHE_DIR
from ..walker import DEFAULT_MAX_DEPTH
from .fingerprint import compute_fingerprint

logger = logging.getLogger(__name__)

META_FILE = "meta.json"
GRAPH_FILE = "graph.json"
MAP_FILE = "map.json"
DEAD_FILE = "dead.json"
SYMBOLS_FILE = "symbols.json"

# Written into meta.json by this version of the tool.
SCHEMA_VERSION = "2.0"
# Oldest meta.json layout still trusted.
# TODO: compare versions structurally before either reaches "10.0";
# the string comparison in _schema_supported only orders same-length values.
MIN_SCHEMA_VERSION = "2.0"

# Each artifact carries its own format version.
ARTIFACT_VERSIONS: dict[str, str] = {
    GRAPH_FILE: "1",
    MAP_FILE: "1",
    DEAD_FILE: "1",
    SYMBOLS_FILE: "1",
}


# ---------------------------------------------------------------------------
# Invalidation hooks
# ---------------------------------------------------------------------------

_invalidation_hooks: list[Callable[[str], None]] = []


def register_invalidation_hook(hook: Callable[[str], None]) -> None:
    """
    Register *hook* to be called with the project root on every
    :meth:`AnalysisCache.invalidate`.  Registering twice is a no-op.
    """
    if hook not in _invalidation_hooks:
        _invalidation_hooks.append(hook)


def unregister_invalidation_hook(hook: Callable[[str], None]) -> None:
    if hook in _invalidation_hooks:
        _invalidation_hooks.remove(hook)


# ---------------------------------------------------------------------------
# Meta record
# ---------------------------------------------------------------------------

@dataclass
class CacheMeta:
    """Contents of meta.json."""
    tool_version: str
    schema_version: str
    created_at: str
    last_check: str
    fingerprint: str

    @classmethod
    def from_dict(cls, data: dict) -> "CacheMeta":
        return cls(
            tool_version=str(data["tool_version"]),
            schema_version=str(data["schema_version"]),
            created_at=str(data["created_at"]),
            last_check=str(data["last_check"]),
            fingerprint=str(data["fingerprint"]),
        )


def _now() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def _schema_supported(version: str) -> bool:
    return version >= MIN_SCHEMA_VERSION


# ---------------------------------------------------------------------------
# AnalysisCache
# ---------------------------------------------------------------------------

class AnalysisCache:
    """
    Reads and writes analysis artifacts for one project root.

    Parameters
    ----------
    project_root:
        Root of the analysed source tree.
    cache_dir:
        Name of the cache directory inside *project_root*.
    max_depth:
        Directory depth bound used when fingerprinting.
    """

    def __init__(self, project_root: str, cache_dir: str = DEFAULT_CACHE_DIR,
                 max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._root = os.path.abspath(project_root)
        self._dir = os.path.join(self._root, cache_dir)
        self._max_depth = max_depth

    @property
    def directory(self) -> str:
        return self._dir

    def _path(self, name: str) -> str:
        return os.path.join(self._dir, name)

    # ------------------------------------------------------------------
    # Raw JSON I/O
    # ------------------------------------------------------------------

    def _read_json(self, name: str) -> Optional[Any]:
        path = self._path(name)
        if not os.path.isfile(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as exc:
            logger.debug("[cache] Unreadable %s: %s", name, exc)
            return None

    def _write_json(self, name: str, data: Any) -> None:
        os.makedirs(self._dir, exist_ok=True)
        with open(self._path(name), "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2)

    # ------------------------------------------------------------------
    # Fingerprint and validity
    # ------------------------------------------------------------------

    def fingerprint(self) -> str:
        """Return the current structural fingerprint of the project."""
        config_file = self._path(CONFIG_FILE)
        extra = (config_file,) if os.path.isfile(config_file) else ()
        return str(compute_fingerprint(self._root, self._max_depth, extra))

    def read_meta(self) -> Optional[CacheMeta]:
        """Return the stored meta record, or None if absent or malformed."""
        data = self._read_json(META_FILE)
        if not isinstance(data, dict) or not data:
            return None
        try:
            return CacheMeta.from_dict(data)
        except (KeyError, TypeError) as exc:
            logger.debug("[cache] Malformed meta.json: %s", exc)
            return None

    def is_valid(self) -> bool:
        """
        Return True if the stored artifacts may be reused.

        Requires a readable meta record, a schema version no older than
        :data:`MIN_SCHEMA_VERSION` and a fingerprint equal to a freshly
        computed one.  Never raises.
        """
        meta = self.read_meta()
        if meta is None:
            return False
        if not _schema_supported(meta.schema_version):
            logger.debug("[cache] Schema %s below minimum %s",
                         meta.schema_version, MIN_SCHEMA_VERSION)
            return False
        try:
            current = self.fingerprint()
        except OSError as exc:
            logger.debug("[cache] Fingerprint failed: %s", exc)
            return False
        if meta.fingerprint != current:
            logger.debug("[cache] Stale: %s != %s", meta.fingerprint, current)
            return False
        return True

    def update_meta(self) -> CacheMeta:
        """Record the current fingerprint; keeps the original creation time."""
        previous = self.read_meta()
        now = _now()
        meta = CacheMeta(
            tool_version=__version__,
            schema_version=SCHEMA_VERSION,
            created_at=previous.created_at if previous else now,
            last_check=now,
            fingerprint=self.fingerprint(),
        )
        self._write_json(META_FILE, asdict(meta))
        return meta

    def mark_checked(self) -> None:
        """Refresh ``last_check`` after a successful validity check."""
        meta = self.read_meta()
        if meta is None:
            return
        meta.last_check = _now()
        try:
            self._write_json(META_FILE, asdict(meta))
        except OSError as exc:
            logger.debug("[cache] Could not update last_check: %s", exc)

    def invalidate(self) -> None:
        """
        Force the next :meth:`is_valid` to return False.

        Resets meta.json to an empty record and calls every registered
        invalidation hook.  Failures are logged and swallowed.
        """
        for hook in list(_invalidation_hooks):
            try:
                hook(self._root)
            except Exception as exc:
                logger.warning("[cache] Invalidation hook %r failed: %s", hook, exc)

        if os.path.exists(self._path(META_FILE)):
            try:
                with open(self._path(META_FILE), "w", encoding="utf-8") as fh:
                    fh.write("{}")
            except OSError as exc:
                logger.warning("[cache] Could not reset meta.json: %s", exc)
        logger.info("[cache] Invalidated %s", self._dir)

    # ------------------------------------------------------------------
    # Versioned artifacts
    # ------------------------------------------------------------------

    def write_artifact(self, name: str, payload: dict) -> None:
        """Store *payload* tagged with the artifact's format version."""
        record = dict(payload)
        record["format_version"] = ARTIFACT_VERSIONS[name]
        self._write_json(name, record)

    def read_artifact(self, name: str) -> Optional[dict]:
        """Return the stored artifact, or None if missing or of another format."""
        data = self._read_json(name)
        if not isinstance(data, dict):
            return None
        if data.get("format_version") != ARTIFACT_VERSIONS[name]:
            logger.debug("[cache] %s has format %r, expected %r", name,
                         data.get("format_version"), ARTIFACT_VERSIONS[name])
            return None
        return data

    def _read_if_valid(self, name: str) -> Optional[dict]:
        if not self.is_valid():
            return None
        return self.read_artifact(name)

    # graph -----------------------------------------------------------

    def cache_graph(self, graph: nx.DiGraph, files: list[str]) -> None:
        """Persist a dependency graph snapshot and refresh the meta record."""
        self.write_artifact(GRAPH_FILE, {
            "adjacency": nx.to_dict_of_lists(graph),
            "files": list(files),
            "timestamp": _now(),
        })
        self.update_meta()

    def get_cached_graph(self) -> Optional[tuple[nx.DiGraph, list[str]]]:
        """Return ``(graph, files)`` if the cache is valid, else None."""
        data = self._read_if_valid(GRAPH_FILE)
        if data is None:
            return None
        try:
            graph = nx.from_dict_of_lists(data["adjacency"], create_using=nx.DiGraph)
        except (KeyError, TypeError, nx.NetworkXError) as exc:
            logger.debug("[cache] Malformed graph.json: %s", exc)
            return None
        return graph, list(data.get("files", []))

    # per-command results ---------------------------------------------

    def cache_map_result(self, result: dict) -> None:
        self.write_artifact(MAP_FILE, result)

    def get_cached_map_result(self) -> Optional[dict]:
        return self._read_if_valid(MAP_FILE)

    def cache_dead_result(self, result: dict) -> None:
        self.write_artifact(DEAD_FILE, result)

    def get_cached_dead_result(self) -> Optional[dict]:
        return self._read_if_valid(DEAD_FILE)

    def cache_symbol_index(self, index: dict) -> None:
        self.write_artifact(SYMBOLS_FILE, index)

    def get_cached_symbol_index(self) -> Optional[dict]:
        return self._read_if_valid(SYMBOLS_FILE)

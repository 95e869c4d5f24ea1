"""
Unit tests for codemap.cache.store
"""

from __future__ import annotations

import json
import os

import networkx as nx
import pytest

from codemap import __version__
from codemap.areas import AreasConfig, write_areas_config
from codemap.cache import (
    SCHEMA_VERSION,
    AnalysisCache,
    register_invalidation_hook,
    unregister_invalidation_hook,
)


def _touch(path, ns: int) -> None:
    os.utime(path, ns=(ns, ns))


def _meta_path(project) -> str:
    return os.path.join(str(project), ".codemap", "meta.json")


@pytest.fixture
def cache(project):
    return AnalysisCache(str(project))


@pytest.fixture
def hooks():
    registered = []

    def _register(hook):
        register_invalidation_hook(hook)
        registered.append(hook)

    yield _register
    for hook in registered:
        unregister_invalidation_hook(hook)


class TestValidity:
    def test_no_meta_is_invalid(self, cache):
        assert cache.read_meta() is None
        assert cache.is_valid() is False

    def test_round_trip(self, cache):
        cache.update_meta()
        assert cache.is_valid() is True

    def test_meta_contents(self, cache):
        meta = cache.update_meta()
        assert meta.tool_version == __version__
        assert meta.schema_version == SCHEMA_VERSION
        assert meta.fingerprint == cache.fingerprint()
        assert cache.read_meta() == meta

    def test_touching_a_source_file_invalidates(self, project, cache):
        cache.update_meta()
        _touch(project / "src" / "hooks" / "useAuth.ts", 1_000_000_007)
        assert cache.is_valid() is False

    def test_adding_a_source_file_invalidates(self, project, cache):
        cache.update_meta()
        (project / "src" / "new.ts").write_text("\n", encoding="utf-8")
        assert cache.is_valid() is False

    def test_touching_the_area_config_invalidates(self, project, cache):
        path = write_areas_config(str(project), AreasConfig())
        cache.update_meta()
        assert cache.is_valid() is True
        _touch(path, 1_000_000_007)
        assert cache.is_valid() is False

    def test_creating_the_area_config_invalidates(self, project, cache):
        cache.update_meta()
        write_areas_config(str(project), AreasConfig())
        assert cache.is_valid() is False

    def test_skipped_folders_do_not_invalidate(self, project, cache):
        cache.update_meta()
        _touch(project / "node_modules" / "react" / "index.js", 1_000_000_007)
        assert cache.is_valid() is True

    def test_schema_below_minimum_is_invalid(self, project, cache):
        cache.update_meta()
        with open(_meta_path(project), encoding="utf-8") as fh:
            data = json.load(fh)
        data["schema_version"] = "1.9"
        with open(_meta_path(project), "w", encoding="utf-8") as fh:
            json.dump(data, fh)
        assert cache.is_valid() is False

    def test_malformed_meta_is_invalid(self, project, cache):
        cache.update_meta()
        with open(_meta_path(project), "w", encoding="utf-8") as fh:
            fh.write("{not json")
        assert cache.read_meta() is None
        assert cache.is_valid() is False

    def test_meta_missing_keys_is_invalid(self, project, cache):
        os.makedirs(os.path.dirname(_meta_path(project)))
        with open(_meta_path(project), "w", encoding="utf-8") as fh:
            json.dump({"schema_version": SCHEMA_VERSION}, fh)
        assert cache.is_valid() is False

    def test_update_keeps_created_at(self, project, cache):
        first = cache.update_meta()
        with open(_meta_path(project), encoding="utf-8") as fh:
            data = json.load(fh)
        data["created_at"] = "2000-01-01T00:00:00Z"
        with open(_meta_path(project), "w", encoding="utf-8") as fh:
            json.dump(data, fh)
        second = cache.update_meta()
        assert second.created_at == "2000-01-01T00:00:00Z"
        assert second.fingerprint == first.fingerprint

    def test_mark_checked_keeps_cache_valid(self, cache):
        cache.update_meta()
        cache.mark_checked()
        assert cache.is_valid() is True

    def test_mark_checked_without_meta_is_a_no_op(self, cache):
        cache.mark_checked()
        assert cache.read_meta() is None


class TestInvalidate:
    def test_invalidate_then_invalid(self, project, cache):
        cache.update_meta()
        cache.invalidate()
        assert cache.is_valid() is False
        with open(_meta_path(project), encoding="utf-8") as fh:
            assert json.load(fh) == {}

    def test_invalidate_without_cache_dir(self, project, cache):
        cache.invalidate()
        assert not os.path.exists(_meta_path(project))

    def test_hooks_receive_the_root(self, project, cache, hooks):
        calls = []
        hooks(calls.append)
        cache.invalidate()
        assert calls == [os.path.abspath(str(project))]

    def test_failing_hook_is_swallowed(self, cache, hooks):
        calls = []

        def broken(root):
            raise RuntimeError("boom")

        hooks(broken)
        hooks(calls.append)
        cache.invalidate()
        assert len(calls) == 1

    def test_unregistered_hook_is_not_called(self, cache):
        calls = []
        register_invalidation_hook(calls.append)
        unregister_invalidation_hook(calls.append)
        cache.invalidate()
        assert calls == []


class TestArtifacts:
    def test_map_result_round_trip(self, cache):
        cache.cache_map_result({"files": ["a.ts"]})
        cache.update_meta()
        cached = cache.get_cached_map_result()
        assert cached["files"] == ["a.ts"]
        assert cached["format_version"] == "1"

    def test_stale_artifact_is_not_returned(self, project, cache):
        cache.cache_map_result({"files": []})
        cache.update_meta()
        _touch(project / "src" / "index.ts", 1_000_000_007)
        assert cache.get_cached_map_result() is None

    def test_artifact_without_meta_is_not_returned(self, cache):
        cache.cache_dead_result({"files": []})
        assert cache.get_cached_dead_result() is None

    def test_format_mismatch_reads_as_missing(self, project, cache):
        cache.update_meta()
        with open(os.path.join(cache.directory, "symbols.json"), "w", encoding="utf-8") as fh:
            json.dump({"format_version": "0", "symbols": {}}, fh)
        assert cache.get_cached_symbol_index() is None

    def test_dead_and_symbols_round_trip(self, cache):
        cache.cache_dead_result({"files": ["src/old.ts"]})
        cache.cache_symbol_index({"symbols": {"useAuth": "src/hooks/useAuth.ts"}})
        cache.update_meta()
        assert cache.get_cached_dead_result()["files"] == ["src/old.ts"]
        assert cache.get_cached_symbol_index()["symbols"] == {"useAuth": "src/hooks/useAuth.ts"}

    def test_graph_round_trip(self, cache):
        graph = nx.DiGraph()
        graph.add_edge("src/a.ts", "src/b.ts")
        graph.add_edge("src/b.ts", "src/c.ts")
        graph.add_node("src/lonely.ts")
        cache.cache_graph(graph, ["src/a.ts", "src/b.ts", "src/c.ts", "src/lonely.ts"])

        restored, files = cache.get_cached_graph()
        assert set(restored.edges) == {("src/a.ts", "src/b.ts"), ("src/b.ts", "src/c.ts")}
        assert "src/lonely.ts" in restored
        assert restored.is_directed()
        assert files == ["src/a.ts", "src/b.ts", "src/c.ts", "src/lonely.ts"]

    def test_graph_gone_after_invalidate(self, cache):
        cache.cache_graph(nx.DiGraph([("a", "b")]), ["a", "b"])
        cache.invalidate()
        assert cache.get_cached_graph() is None

    def test_malformed_graph_reads_as_missing(self, cache):
        cache.update_meta()
        with open(os.path.join(cache.directory, "graph.json"), "w", encoding="utf-8") as fh:
            json.dump({"format_version": "1"}, fh)
        assert cache.get_cached_graph() is None

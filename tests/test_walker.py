"""
Unit tests for codemap.walker
"""

from __future__ import annotations

from codemap.walker import iter_source_files, walk_source_files


class TestWalkSourceFiles:
    def test_lists_source_files_only(self, project):
        assert walk_source_files(str(project)) == [
            "app/dashboard/page.tsx",
            "src/components/Button.tsx",
            "src/hooks/useAuth.ts",
            "src/index.ts",
            "src/lib/stripe/client.ts",
        ]

    def test_depth_bound(self, project):
        files = walk_source_files(str(project), max_depth=1)
        assert files == ["src/index.ts"]

    def test_depth_zero_is_root_only(self, project):
        (project / "root.js").write_text("\n", encoding="utf-8")
        assert walk_source_files(str(project), max_depth=0) == ["root.js"]

    def test_yields_absolute_paths(self, project):
        for rel, abs_path in iter_source_files(str(project)):
            assert abs_path.replace("\\", "/").endswith(rel)

    def test_missing_root(self, tmp_path):
        assert walk_source_files(str(tmp_path / "nope")) == []

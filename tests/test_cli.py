"""
Tests for the `codemap` command-line entry point.
"""

from __future__ import annotations

import json
import logging

import pytest

from codemap import __version__
from codemap.cli import main


def _run(project, *argv):
    main(["--root", str(project), *argv])


class TestMapCommand:
    def test_text(self, project, capsys):
        _run(project, "map")
        out = capsys.readouterr().out
        assert "Files:   5" in out
        assert "Next steps:" in out

    def test_json(self, project, capsys):
        _run(project, "--json", "map")
        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["total_files"] == 5
        assert data["from_cache"] is False

    def test_second_run_reports_cache(self, project, capsys):
        _run(project, "map")
        _run(project, "map")
        assert "(from cache)" in capsys.readouterr().out

    def test_no_cache(self, project, capsys):
        _run(project, "--no-cache", "map")
        assert not (project / ".codemap").exists()

    def test_tool_context_hints(self, project, capsys):
        _run(project, "--ctx", "tool", "map")
        assert "codemap_area_detail" in capsys.readouterr().out


class TestAreaCommands:
    def test_areas(self, project, capsys):
        _run(project, "areas")
        out = capsys.readouterr().out
        assert "dashboard" in out
        assert "billing" in out

    def test_areas_json(self, project, capsys):
        _run(project, "--json", "areas")
        ids = [a["id"] for a in json.loads(capsys.readouterr().out)]
        assert {"dashboard", "billing", "auth"} <= set(ids)

    def test_areas_init(self, project, capsys):
        _run(project, "areas", "init")
        out = capsys.readouterr().out
        assert "Next.js (App Router)" in out
        assert (project / ".codemap" / "areas.config.yaml").is_file()

        _run(project, "areas")
        assert "(configured)" in capsys.readouterr().out

    def test_areas_init_keeps_existing_config(self, project, capsys):
        _run(project, "areas", "init")
        capsys.readouterr()
        _run(project, "areas", "init")
        assert "already exists" in capsys.readouterr().out

        _run(project, "--json", "areas", "init", "--force")
        assert json.loads(capsys.readouterr().out)["created"] is True

    def test_area(self, project, capsys):
        _run(project, "area", "dash")
        out = capsys.readouterr().out
        assert "Area: dashboard" in out
        assert "app/dashboard/page.tsx" in out

    def test_unknown_area_exits_1(self, project, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(project, "area", "qqqqqqqq")
        assert exc_info.value.code == 1
        assert "Area not found" in capsys.readouterr().out

    def test_area_without_target_exits_2(self, project, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(project, "area")
        assert exc_info.value.code == 2
        assert "codemap area auth" in capsys.readouterr().err


class TestFileCommands:
    def test_find(self, project, capsys):
        _run(project, "find", "useAuth")
        out = capsys.readouterr().out
        assert out.startswith("src/hooks/useAuth.ts")
        assert "category: hook" in out
        assert "areas:    auth" in out

    def test_find_json(self, project, capsys):
        _run(project, "--json", "find", "Button")
        data = json.loads(capsys.readouterr().out)
        assert data == {"path": "src/components/Button.tsx", "category": "component",
                        "areas": [], "description": "Component"}

    def test_find_shows_description(self, project, capsys):
        _run(project, "find", "useAuth")
        assert "about:    Hook for auth" in capsys.readouterr().out

    def test_find_suggests(self, project, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(project, "find", "Buton")
        assert exc_info.value.code == 1
        assert "Did you mean?" in capsys.readouterr().out

    def test_find_without_target_exits_2(self, project, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(project, "find")
        assert exc_info.value.code == 2
        assert '"target" is required' in capsys.readouterr().err

    def test_describe_searches_areas(self, project, capsys):
        _run(project, "describe", "the stripe payments")
        out = capsys.readouterr().out
        assert "(billing)" in out
        assert "src/lib/stripe/client.ts" in out

    def test_describe_json(self, project, capsys):
        _run(project, "--json", "describe", "dashboard")
        data = json.loads(capsys.readouterr().out)
        assert data["areas"][0]["id"] == "dashboard"
        assert data["areas"][0]["files"] == ["app/dashboard/page.tsx"]

    def test_describe_without_match_suggests(self, project, capsys):
        _run(project, "describe", "dashbord")
        out = capsys.readouterr().out
        assert "No areas found" in out
        assert "codemap describe dashboard" in out

    def test_describe_without_target_exits_2(self, project, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _run(project, "describe")
        assert exc_info.value.code == 2
        assert "codemap describe authentication" in capsys.readouterr().err


class TestCacheCommand:
    def test_status_without_cache(self, project, capsys):
        _run(project, "cache", "status")
        assert "No cache found" in capsys.readouterr().out

    def test_status_and_clear(self, project, capsys):
        _run(project, "map")
        capsys.readouterr()

        _run(project, "--json", "cache", "status")
        status = json.loads(capsys.readouterr().out)
        assert status["valid"] is True
        assert status["meta"]["tool_version"] == __version__

        _run(project, "cache", "clear")
        assert "Cache cleared" in capsys.readouterr().out

        _run(project, "--json", "cache", "status")
        assert json.loads(capsys.readouterr().out)["valid"] is False


class TestParser:
    def test_command_is_required(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            main(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_log_file(self, project, capsys):
        logger = logging.getLogger("codemap")
        before = list(logger.handlers)
        try:
            _run(project, "--log", "map")
            assert list((project / ".codemap" / "logs").glob("codemap_*.log"))
        finally:
            for handler in logger.handlers[len(before):]:
                logger.removeHandler(handler)
                handler.close()

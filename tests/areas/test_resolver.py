"""
Unit tests for codemap.areas.resolver
"""

from __future__ import annotations

from codemap.areas import AreaDefinition, AreasConfig, resolve_area_reference
from codemap.areas.resolver import fold

FILES = [
    "app/dashboard/page.tsx",
    "src/components/chat/ChatWindow.tsx",
    "src/index.ts",
]


class TestFold:
    def test_strips_accents_and_case(self):
        assert fold("Autenticação") == "autenticacao"
        assert fold("CAFÉ") == "cafe"


class TestResolveAreaReference:
    def test_exact_declared_id(self):
        config = AreasConfig(areas={"auth": AreaDefinition(name="Autenticação")})
        assert resolve_area_reference("auth", config, FILES) == "auth"

    def test_declared_name_ignores_case_and_accents(self):
        config = AreasConfig(areas={"auth": AreaDefinition(name="Autenticação")})
        assert resolve_area_reference("autenticacao", config, FILES) == "auth"
        assert resolve_area_reference("AUTENTICAÇÃO", config, FILES) == "auth"

    def test_declared_name_beats_builtin_name(self):
        config = AreasConfig(areas={"login": AreaDefinition(name="Authentication")})
        assert resolve_area_reference("authentication", config, FILES) == "login"

    def test_builtin_name(self):
        assert resolve_area_reference("Payments", AreasConfig(), FILES) == "billing"
        assert resolve_area_reference("shopping cart", AreasConfig(), FILES) == "cart"

    def test_declared_id_substring(self):
        config = AreasConfig(areas={"user-management": AreaDefinition(name="Users")})
        assert resolve_area_reference("manage", config, FILES) == "user-management"

    def test_inferred_id_substring(self):
        assert resolve_area_reference("dash", AreasConfig(), FILES) == "dashboard"

    def test_inferred_ids_follow_file_order(self):
        files = ["src/components/chat/ChatWindow.tsx", "app/dashboard/page.tsx"]
        assert resolve_area_reference("a", AreasConfig(), files) == "chat"

    def test_ignored_files_are_not_searched(self):
        config = AreasConfig(ignore=["app/**"])
        assert resolve_area_reference("dash", config, FILES) == "dash"

    def test_unresolved_returns_input(self):
        assert resolve_area_reference("nothing-like-this", AreasConfig(), FILES) == "nothing-like-this"

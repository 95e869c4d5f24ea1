from __future__ import annotations

import pytest


@pytest.fixture
def project(tmp_path):
    """A small JS/TS project tree with folders the walker must skip."""
    files = {
        "src/index.ts": "export {}\n",
        "src/components/Button.tsx": "export const Button = () => null\n",
        "src/hooks/useAuth.ts": "export function useAuth() {}\n",
        "app/dashboard/page.tsx": "export default function Page() {}\n",
        "src/lib/stripe/client.ts": "export const stripe = {}\n",
        "node_modules/react/index.js": "module.exports = {}\n",
        "dist/bundle.js": "\n",
        ".next/server.js": "\n",
        "src/.secret.ts": "\n",
        "README.md": "# demo\n",
    }
    for rel, text in files.items():
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def isolated_env(tmp_path_factory, monkeypatch):
    """Keep the user's ~/.codemap.yaml and CODEMAP_* variables out of tests."""
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))
    for key in (
        "CODEMAP_CACHE_DIR", "CODEMAP_MAX_DEPTH", "CODEMAP_HINT_CONTEXT",
        "CODEMAP_SUGGESTION_LIMIT", "CODEMAP_AREA_LIST_LIMIT", "CODEMAP_LOG_DIR",
    ):
        monkeypatch.delenv(key, raising=False)

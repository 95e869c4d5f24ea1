"""
File classifier — maps a project-relative path to its structural role.

Classification is an ordered list of ``(predicate, tag)`` rules evaluated
top to bottom; the first rule whose predicate matches decides the
category.  The order is significant for files that match several rules
(``src/components/Button.test.tsx`` is a test, not a component) and is
kept in :data:`CATEGORY_RULES` so it can be inspected and tested.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .similarity import strip_extension


class FileCategory(str, Enum):
    """Structural role of a source file."""
    PAGE = "page"
    LAYOUT = "layout"
    ROUTE = "route"
    COMPONENT = "component"
    HOOK = "hook"
    STORE = "store"
    SERVICE = "service"
    UTIL = "util"
    TYPE = "type"
    CONFIG = "config"
    TEST = "test"
    OTHER = "other"


CODE_EXTENSIONS: frozenset[str] = frozenset({
    ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs",
    ".vue", ".svelte", ".astro",   # single-file components
})

_SFC_EXTENSIONS = (".vue", ".svelte", ".astro")

CATEGORY_ICONS: dict[FileCategory, str] = {
    FileCategory.PAGE: "📄",
    FileCategory.LAYOUT: "🔲",
    FileCategory.ROUTE: "🛣️",
    FileCategory.COMPONENT: "🧩",
    FileCategory.HOOK: "🪝",
    FileCategory.STORE: "🗄️",
    FileCategory.SERVICE: "⚙️",
    FileCategory.UTIL: "🔧",
    FileCategory.TYPE: "📝",
    FileCategory.CONFIG: "⚙️",
    FileCategory.TEST: "🧪",
    FileCategory.OTHER: "📁",
}


# ---------------------------------------------------------------------------
# Normalised path view shared by all predicates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _PathView:
    """Lower-cased, ``/``-separated view of a path."""
    path: str        # "/src/components/button.tsx" (leading slash added)
    file_name: str   # "button.tsx"
    stem: str        # "button"

    @classmethod
    def of(cls, raw: str) -> "_PathView":
        normalized = raw.replace("\\", "/").lower().lstrip("/")
        file_name = normalized.rsplit("/", 1)[-1]
        return cls(
            path="/" + normalized,
            file_name=file_name,
            stem=strip_extension(file_name),
        )

    def has_segment(self, *segments: str) -> bool:
        return any(f"/{seg}/" in self.path for seg in segments)

    def stem_endswith(self, *suffixes: str) -> bool:
        return any(self.stem.endswith(sfx) for sfx in suffixes)


# ---------------------------------------------------------------------------
# Predicates, one per rule group
# ---------------------------------------------------------------------------

_CONFIG_PATTERNS = [
    re.compile(p) for p in (
        r"^eslint\.config\.",
        r"^\.eslintrc",
        r"^prettier\.config\.",
        r"^\.prettierrc",
        r"^tailwind\.config\.",
        r"^next\.config\.",
        r"^nuxt\.config\.",
        r"^vite\.config\.",
        r"^svelte\.config\.",
        r"^astro\.config\.",
        r"^[tj]sconfig",
        r"^jest\.config",
        r"^jest\.setup",
        r"^vitest\.config",
        r"^vitest\.setup",
        r"^postcss\.config",
        r"^babel\.config",
        r"^webpack\.config",
        r"^rollup\.config",
        r"^knip\.config",
        r"^firebase-messaging-sw",
        r"^sw\.",
        r"service-worker",
        r"^\.env",
    )
]

_APP_ROUTER_NAMES: dict[str, FileCategory] = {
    "page": FileCategory.PAGE,
    "+page": FileCategory.PAGE,
    "layout": FileCategory.LAYOUT,
    "+layout": FileCategory.LAYOUT,
    "route": FileCategory.ROUTE,
    "error": FileCategory.PAGE,
    "+error": FileCategory.PAGE,
    "global-error": FileCategory.PAGE,
    "not-found": FileCategory.PAGE,
    "loading": FileCategory.PAGE,
    "template": FileCategory.PAGE,
    "default": FileCategory.PAGE,
}

_SERVER_ROUTE_NAMES = frozenset({"+server", "middleware"})


def _is_test(v: _PathView) -> bool:
    return (
        ".test." in v.file_name
        or ".spec." in v.file_name
        or v.has_segment("test", "tests", "__tests__")
    )


def _is_config(v: _PathView) -> bool:
    return any(p.search(v.file_name) for p in _CONFIG_PATTERNS)


def _framework_convention(v: _PathView) -> Optional[FileCategory]:
    reserved = _APP_ROUTER_NAMES.get(v.stem)
    if reserved is not None:
        return reserved
    if (
        v.has_segment("pages", "views", "screens", "routes")
        and not v.has_segment("components")
    ):
        return FileCategory.PAGE
    if v.stem_endswith("page", "view", "screen"):
        return FileCategory.PAGE
    return None


def _is_server_route(v: _PathView) -> bool:
    return (
        v.has_segment("api", "server")
        or v.stem.endswith(".server")
        or v.stem in _SERVER_ROUTE_NAMES
    )


def _is_hook(v: _PathView) -> bool:
    # Checked on the lower-cased name, so "useAuth" and "USEAUTH" agree.
    if v.stem.startswith("use") and len(v.stem) > 3 and v.stem[3].isalpha():
        return True
    if v.has_segment("hooks", "composables"):
        return True
    return v.has_segment("stores") and v.file_name.endswith((".ts", ".tsx"))


def _is_type(v: _PathView) -> bool:
    return (
        v.has_segment("types", "interfaces")
        or ".d." in v.file_name
        or v.stem in ("types", "interfaces")
    )


def _is_service(v: _PathView) -> bool:
    return v.has_segment("services", "api-client") or v.stem_endswith("service", "api")


def _is_store(v: _PathView) -> bool:
    return (
        v.has_segment("store", "stores", "context", "contexts", "providers", "state")
        or v.stem_endswith("store", "slice", "reducer")
    )


def _is_util(v: _PathView) -> bool:
    return (
        v.has_segment("utils", "lib", "helpers", "common", "shared")
        or v.stem_endswith("utils", "helpers")
    )


def _is_component(v: _PathView) -> bool:
    return (
        v.has_segment("components", "ui", "features", "modules")
        or v.file_name.endswith(_SFC_EXTENSIONS)
    )


def _when(predicate: Callable[[_PathView], bool], category: FileCategory):
    return lambda v: category if predicate(v) else None


# First match wins.  Each entry maps a path view to a category or None.
CATEGORY_RULES: tuple[tuple[str, Callable[[_PathView], Optional[FileCategory]]], ...] = (
    ("test", _when(_is_test, FileCategory.TEST)),
    ("config", _when(_is_config, FileCategory.CONFIG)),
    ("framework", _framework_convention),
    ("server-route", _when(_is_server_route, FileCategory.ROUTE)),
    ("hook", _when(_is_hook, FileCategory.HOOK)),
    ("type", _when(_is_type, FileCategory.TYPE)),
    ("service", _when(_is_service, FileCategory.SERVICE)),
    ("store", _when(_is_store, FileCategory.STORE)),
    ("util", _when(_is_util, FileCategory.UTIL)),
    ("component", _when(_is_component, FileCategory.COMPONENT)),
)


def classify(path: str) -> FileCategory:
    """
    Return the :class:`FileCategory` for *path*.

    Total and deterministic: depends only on the path string, ignores
    case, and treats ``\\`` and ``/`` alike.  Falls back to ``other``.
    """
    view = _PathView.of(path)
    for _name, rule in CATEGORY_RULES:
        category = rule(view)
        if category is not None:
            return category
    return FileCategory.OTHER


def matching_rule(path: str) -> Optional[str]:
    """Return the name of the rule group that classifies *path*, if any."""
    view = _PathView.of(path)
    for name, rule in CATEGORY_RULES:
        if rule(view) is not None:
            return name
    return None


def is_code_file(path: str) -> bool:
    """Return True if *path* has a recognised ECMAScript-family extension."""
    lowered = path.lower()
    return any(lowered.endswith(ext) for ext in CODE_EXTENSIONS)


_ENTRY_POINT_NAMES = frozenset({
    "main.tsx", "main.ts", "main.jsx", "main.js",
    "index.tsx", "index.ts", "app.tsx", "app.ts",
})


def is_entry_point(path: str) -> bool:
    """Return True for main/index/app files no deeper than one directory."""
    normalized = path.replace("\\", "/").lower().lstrip("/")
    parts = normalized.split("/")
    return parts[-1] in _ENTRY_POINT_NAMES and len(parts) <= 2

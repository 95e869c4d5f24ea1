"""
Starter ``areas.config.yaml`` for ``codemap areas init``.

The layout is guessed from the top-level folders, a template of common
areas is chosen for it, and an ignore list is suggested from the kinds of
files present.  The written config turns ``auto_detect`` off: once areas
are declared by hand, inferred ones only add noise.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, Optional, Sequence

from .config import (
    DEFAULT_CACHE_DIR,
    AreaDefinition,
    AreaSettings,
    AreasConfig,
    config_exists,
    write_areas_config,
)

logger = logging.getLogger(__name__)

FRAMEWORK_NAMES = {
    "nextjs-app": "Next.js (App Router)",
    "nextjs-pages": "Next.js (Pages Router)",
    "vite": "Vite/CRA",
    "generic": "Generic",
}

_SHARED_UI = AreaDefinition(
    name="Shared UI",
    description="Reusable UI components (buttons, inputs, ...)",
    patterns=["components/ui/**", "components/common/**", "components/shared/**"],
)

_TEMPLATES: dict[str, dict[str, AreaDefinition]] = {
    "nextjs-app": {
        "auth": AreaDefinition(
            name="Authentication",
            description="Login, signup and session handling",
            patterns=["app/**/auth/**", "app/**/login/**", "app/**/signup/**",
                      "components/auth/**"],
            keywords=["auth", "login", "signup", "signin"],
        ),
        "dashboard": AreaDefinition(
            name="Dashboard",
            description="Main user dashboard",
            patterns=["app/**/dashboard/**", "components/dashboard/**"],
            keywords=["dashboard"],
        ),
        "admin": AreaDefinition(
            name="Administration",
            description="Admin panel",
            patterns=["app/**/admin/**", "components/admin/**"],
            keywords=["admin"],
        ),
        "profile": AreaDefinition(
            name="Profile",
            description="User profile and settings",
            patterns=["app/**/profile/**", "app/**/settings/**"],
            keywords=["profile", "settings"],
        ),
        "billing": AreaDefinition(
            name="Billing",
            description="Payments and subscriptions",
            patterns=["components/stripe/**", "components/payment/**", "lib/stripe/**"],
            keywords=["stripe", "payment", "billing", "subscription"],
        ),
        "checkout": AreaDefinition(
            name="Checkout",
            description="Checkout flow",
            patterns=["app/**/checkout/**", "components/checkout/**"],
            keywords=["checkout"],
        ),
        "shared-ui": _SHARED_UI,
        "api": AreaDefinition(
            name="API Routes",
            description="Next.js route handlers",
            patterns=["app/**/api/**"],
            keywords=["api"],
        ),
    },
    "nextjs-pages": {
        "auth": AreaDefinition(
            name="Authentication",
            description="Login, signup and session handling",
            patterns=["pages/**/auth/**", "pages/**/login/**", "pages/**/signup/**",
                      "components/auth/**"],
            keywords=["auth", "login", "signup"],
        ),
        "dashboard": AreaDefinition(
            name="Dashboard",
            description="Main user dashboard",
            patterns=["pages/**/dashboard/**", "components/dashboard/**"],
            keywords=["dashboard"],
        ),
        "api": AreaDefinition(
            name="API Routes",
            description="Next.js API routes (pages/api)",
            patterns=["pages/api/**"],
            keywords=["api"],
        ),
        "shared-ui": _SHARED_UI,
    },
    "vite": {
        "auth": AreaDefinition(
            name="Authentication",
            description="Login, signup and session handling",
            patterns=["src/pages/**/auth/**", "src/pages/**/login/**",
                      "src/components/auth/**"],
            keywords=["auth", "login", "signup"],
        ),
        "dashboard": AreaDefinition(
            name="Dashboard",
            description="Main user dashboard",
            patterns=["src/pages/**/dashboard/**", "src/components/dashboard/**"],
            keywords=["dashboard"],
        ),
        "shared-ui": AreaDefinition(
            name="Shared UI",
            description="Reusable UI components",
            patterns=["src/components/ui/**", "src/components/common/**"],
        ),
    },
    "generic": {
        "auth": AreaDefinition(
            name="Authentication",
            description="Login and sessions",
            patterns=["**/auth/**", "**/login/**"],
            keywords=["auth", "login"],
        ),
        "shared-ui": _SHARED_UI,
    },
}

_TEST_RE = re.compile(r"\.(test|spec)\.(ts|tsx|js|jsx)$")
_CONFIG_RE = re.compile(r"\.(config|conf)\.(ts|js|mjs|cjs)$")


class AreasInit(NamedTuple):
    """What ``init_areas_config`` wrote."""
    path: str
    framework: str
    config: AreasConfig


def detect_framework(files: Sequence[str]) -> str:
    """Return ``nextjs-app``, ``nextjs-pages``, ``vite`` or ``generic``."""
    if any(f.startswith("app/") for f in files):
        return "nextjs-app"
    if any(f.startswith("pages/") for f in files):
        return "nextjs-pages"
    if any(f.startswith("src/") for f in files):
        return "vite"
    return "generic"


def suggested_ignore(files: Sequence[str]) -> list[str]:
    """Ignore globs worth starting with, based on what *files* contains."""
    patterns = ["node_modules/**"]
    if any("functions/lib/" in f for f in files):
        patterns.append("functions/lib/**")
    if sum(1 for f in files if _TEST_RE.search(f)) > 3:
        for kind in ("test", "spec"):
            patterns += [f"**/*.{kind}.{ext}" for ext in ("ts", "tsx", "js", "jsx")]
    if sum(1 for f in files if f.endswith(".d.ts")) > 2:
        patterns.append("**/*.d.ts")
    if sum(1 for f in files if _CONFIG_RE.search(f)) > 2:
        patterns += [f"**/*.config.{ext}" for ext in ("ts", "js", "mjs", "cjs")]
    return patterns


def starter_config(files: Sequence[str], framework: Optional[str] = None) -> AreasConfig:
    """Build the starter configuration for a project containing *files*."""
    framework = framework or detect_framework(files)
    return AreasConfig(
        areas={
            area_id: AreaDefinition(
                name=a.name,
                description=a.description,
                patterns=list(a.patterns),
                keywords=list(a.keywords),
                exclude=list(a.exclude),
            )
            for area_id, a in _TEMPLATES[framework].items()
        },
        ignore=suggested_ignore(files),
        settings=AreaSettings(auto_detect=False, infer_descriptions=True),
    )


def init_areas_config(project_root: str, files: Sequence[str], force: bool = False,
                      cache_dir: str = DEFAULT_CACHE_DIR) -> Optional[AreasInit]:
    """
    Write a starter ``areas.config.yaml``.

    Returns None without touching anything when a config already exists
    and *force* is false.
    """
    if config_exists(project_root, cache_dir) and not force:
        logger.info("[areas] Config already exists in %s, not overwriting", project_root)
        return None
    framework = detect_framework(files)
    config = starter_config(files, framework)
    path = write_areas_config(project_root, config, cache_dir)
    logger.info("[areas] Wrote %s (%s, %d areas)", path, framework, len(config.areas))
    return AreasInit(path, framework, config)

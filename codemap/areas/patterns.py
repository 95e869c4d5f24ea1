"""
Built-in area detection patterns.

Generic rules that infer a file's feature area from folder names and
file-name keywords.  Only consulted when ``settings.auto_detect`` is on;
projects with domain-specific areas declare them in areas.config.yaml.

Covers Next.js (app and pages routers), Vite/CRA, Remix, Nuxt, SvelteKit
and Astro layouts.  Patterns are matched against the ``/``-separated
project-relative path; higher priority wins when ordering results.
"""

from __future__ import annotations

import re
from typing import NamedTuple


class FolderPattern(NamedTuple):
    pattern: re.Pattern
    area: str
    priority: int


class KeywordPattern(NamedTuple):
    keyword: re.Pattern
    area: str
    priority: int


def _folders(priority: int, template: str, areas: dict[str, str]) -> list[FolderPattern]:
    """Expand ``template`` (with a ``{}`` slot) for every name -> area pair."""
    return [
        FolderPattern(re.compile(template.format(name)), area, priority)
        for name, area in areas.items()
    ]


# ---------------------------------------------------------------------------
# Folder patterns (ordered: most specific first)
# ---------------------------------------------------------------------------

_ROUTE_SEGMENTS = {
    "dashboard": "dashboard", "admin": "admin",
    "login": "auth", "signup": "auth", "register": "auth", "auth": "auth",
    "profile": "profile", "settings": "settings",
    "pricing": "pricing", "checkout": "checkout", "cart": "cart",
    "shop": "shop", "products": "products", "orders": "orders",
    "blog": "blog", "docs": "docs",
    "legal": "legal", "privacy": "legal", "terms": "legal",
    "about": "about", "contact": "contact", "faq": "faq",
    "help": "help", "support": "support",
}

_COMPONENT_SEGMENTS = {
    "chat": "chat", "auth": "auth", "admin": "admin",
    "landing": "landing", "marketing": "landing",
    "dashboard": "dashboard",
    "subscription": "billing", "stripe": "billing", "payment": "billing",
    "checkout": "checkout", "cart": "cart",
    "notification": "notifications", "seo": "seo",
    "blog": "blog", "docs": "docs", "legal": "legal",
    "onboarding": "onboarding", "settings": "settings",
    "profile": "profile", "user": "user",
    "products?": "products", "orders?": "orders", "shop": "shop",
}

_FEATURE_SEGMENTS = {
    "auth": "auth", "dashboard": "dashboard", "admin": "admin",
    "checkout": "checkout", "cart": "cart",
    "products?": "products", "orders?": "orders", "user": "user",
    "settings": "settings", "notifications?": "notifications", "blog": "blog",
}

FOLDER_PATTERNS: list[FolderPattern] = [
    # Next.js app router
    *_folders(100, r"app/(?:.*/)?{}/", _ROUTE_SEGMENTS),
    FolderPattern(re.compile(r"app/(?:.*/)?onboarding"), "onboarding", 100),

    # Vite / CRA / Astro: src/pages, src/views
    *_folders(100, r"src/pages/{}", {
        "[Dd]ashboard": "dashboard", "[Aa]dmin": "admin", "[Aa]uth": "auth",
        "[Ll]ogin": "auth", "[Rr]egister": "auth", "[Ss]ignup": "auth",
        "[Pp]rofile": "profile", "[Ss]ettings": "settings",
        "[Pp]ricing": "pricing", "[Cc]heckout": "checkout", "[Cc]art": "cart",
        "[Ss]hop": "shop", "[Pp]roducts?": "products", "[Oo]rders?": "orders",
        "[Bb]log": "blog", "[Dd]ocs": "docs",
    }),
    *_folders(100, r"src/views/{}", {
        "[Dd]ashboard": "dashboard", "[Aa]dmin": "admin", "[Aa]uth": "auth",
    }),

    # Remix
    *_folders(100, r"app/routes/{}", {
        "dashboard": "dashboard", "admin": "admin", "auth": "auth",
        "login": "auth", "_auth": "auth",
    }),

    # Nuxt (no src/)
    *_folders(100, r"^pages/{}", {
        "dashboard": "dashboard", "admin": "admin", "auth": "auth",
    }),

    # SvelteKit
    *_folders(100, r"src/routes/{}", {
        "dashboard": "dashboard", "admin": "admin", "auth": "auth",
        r"\(auth\)": "auth",
    }),
    FolderPattern(re.compile(r"src/routes/\(app\)"), "app", 90),

    # Component sub-folders, any framework
    *_folders(90, r"components/{}/", _COMPONENT_SEGMENTS),
    *_folders(85, r"components/{}/", {
        "forms?": "forms", "tables?": "tables",
        "modals?": "modals", "dialogs?": "modals",
    }),
    *_folders(30, r"components/{}/", {
        "ui": "shared-ui", "common": "shared-ui", "shared": "shared-ui",
        "base": "shared-ui", "core": "shared-ui", "primitives": "shared-ui",
    }),
    FolderPattern(re.compile(r"components/providers/"), "core", 40),
    FolderPattern(re.compile(r"components/layouts?/"), "layout", 40),

    # features/ and modules/
    *_folders(95, r"features/{}/", _FEATURE_SEGMENTS),
    *_folders(95, r"modules/{}/", {
        "auth": "auth", "dashboard": "dashboard", "admin": "admin",
        "checkout": "checkout", "products?": "products",
    }),

    # lib/ integrations
    *_folders(80, r"lib/{}/", {
        "firebase": "firebase", "stripe": "billing",
        "i18n": "i18n", "analytics": "analytics",
    }),

    # hooks/ and store/ by name
    *_folders(70, r"hooks/.*{}", {
        "[Aa]uth": "auth", "[Ss]ubscription": "billing",
        "[Nn]otification": "notifications",
    }),
    *_folders(70, r"store/.*{}", {"[Aa]uth": "auth", "[Uu]ser": "user"}),

    # Cloud functions
    FolderPattern(re.compile(r"functions/src/"), "cloud-functions", 80),

    # Other
    *_folders(60, r"{}/", {"messages": "i18n", "i18n": "i18n", "locales": "i18n"}),
    *_folders(50, r"{}/", {"public": "assets", "scripts": "scripts"}),
]


# ---------------------------------------------------------------------------
# File-name keywords
# ---------------------------------------------------------------------------

KEYWORD_PATTERNS: list[KeywordPattern] = [
    # auth, but not "author"
    KeywordPattern(re.compile(r"[Aa]uth(?!or)"), "auth", 60),
    KeywordPattern(re.compile(r"[Ll]ogin"), "auth", 60),
    KeywordPattern(re.compile(r"[Rr]egister"), "auth", 60),
    KeywordPattern(re.compile(r"[Ss]ign[Uu]p"), "auth", 60),
    KeywordPattern(re.compile(r"[Ss]ign[Ii]n"), "auth", 60),
    KeywordPattern(re.compile(r"[Ss]ign[Oo]ut"), "auth", 60),
    KeywordPattern(re.compile(r"[Ll]ogout"), "auth", 60),

    KeywordPattern(re.compile(r"[Ss]tripe"), "billing", 65),
    KeywordPattern(re.compile(r"[Ss]ubscription"), "billing", 60),
    KeywordPattern(re.compile(r"[Pp]ayment"), "billing", 60),
    KeywordPattern(re.compile(r"[Bb]illing"), "billing", 65),
    KeywordPattern(re.compile(r"[Ii]nvoice"), "billing", 60),

    KeywordPattern(re.compile(r"[Cc]heckout"), "checkout", 60),
    KeywordPattern(re.compile(r"[Pp]ricing"), "pricing", 60),

    KeywordPattern(re.compile(r"[Nn]otification"), "notifications", 60),
    KeywordPattern(re.compile(r"[Ff][Cc][Mm]"), "notifications", 65),

    KeywordPattern(re.compile(r"[Ii]18n"), "i18n", 60),
    KeywordPattern(re.compile(r"[Ll]ocale"), "i18n", 55),
    KeywordPattern(re.compile(r"[Tt]ranslat"), "i18n", 55),

    KeywordPattern(re.compile(r"[Ss][Ee][Oo]"), "seo", 60),
    KeywordPattern(re.compile(r"[Ss]itemap"), "seo", 60),

    KeywordPattern(re.compile(r"[Aa]nalytics"), "analytics", 60),
    KeywordPattern(re.compile(r"[Aa]dmin"), "admin", 55),

    KeywordPattern(re.compile(r"[Pp][Ww][Aa]"), "pwa", 60),
    KeywordPattern(re.compile(r"[Ss]ervice[Ww]orker"), "pwa", 60),
    KeywordPattern(re.compile(r"[Mm]anifest"), "pwa", 55),

    KeywordPattern(re.compile(r"[Pp]df[Ee]xport"), "export", 60),
    KeywordPattern(re.compile(r"[Dd]ocx[Ee]xport"), "export", 60),
]


# ---------------------------------------------------------------------------
# Friendly names and descriptions
# ---------------------------------------------------------------------------

AREA_NAMES: dict[str, str] = {
    "auth": "Authentication",
    "user": "User",
    "profile": "Profile",
    "settings": "Settings",
    "onboarding": "Onboarding",
    "billing": "Payments",
    "checkout": "Checkout",
    "cart": "Shopping Cart",
    "shop": "Shop",
    "products": "Products",
    "orders": "Orders",
    "pricing": "Pricing",
    "notifications": "Notifications",
    "chat": "Chat",
    "feedback": "Feedback",
    "support": "Support",
    "help": "Help Center",
    "faq": "FAQ",
    "contact": "Contact",
    "firebase": "Firebase",
    "blog": "Blog",
    "docs": "Documentation",
    "legal": "Legal Pages",
    "about": "About",
    "landing": "Landing Pages",
    "seo": "SEO",
    "analytics": "Analytics",
    "admin": "Admin",
    "dashboard": "Dashboard",
    "i18n": "Internationalization",
    "pwa": "PWA",
    "export": "Export",
    "core": "Core",
    "layout": "Layout",
    "shared-ui": "Shared UI",
    "cloud-functions": "Cloud Functions",
    "assets": "Assets",
    "scripts": "Scripts",
    "forms": "Forms",
    "tables": "Tables",
    "modals": "Modals",
    "app": "Application",
}

AREA_DESCRIPTIONS: dict[str, str] = {
    "auth": "Authentication and session management",
    "user": "User data management",
    "profile": "User profile",
    "settings": "User settings",
    "onboarding": "New-user onboarding flow",
    "billing": "Payments and subscriptions",
    "checkout": "Checkout flow",
    "cart": "Shopping cart",
    "shop": "Shop and catalogue",
    "products": "Product management",
    "orders": "Order management",
    "pricing": "Pricing page and plans",
    "notifications": "Notification system",
    "chat": "Chat and messaging",
    "feedback": "Feedback collection",
    "support": "Customer support",
    "help": "Help center",
    "faq": "Frequently asked questions",
    "contact": "Contact page",
    "firebase": "Firebase configuration and services",
    "blog": "Blog and articles",
    "docs": "Documentation and guides",
    "legal": "Terms of use, privacy and policies",
    "about": "About page",
    "landing": "Landing pages and marketing",
    "seo": "SEO, meta tags and sitemaps",
    "analytics": "Analytics and tracking",
    "admin": "Admin panel",
    "dashboard": "User dashboard",
    "i18n": "Internationalization and translations",
    "pwa": "Progressive Web App",
    "export": "Document export",
    "core": "Providers and core setup",
    "layout": "Layout and navigation",
    "shared-ui": "Shared UI components",
    "cloud-functions": "Cloud Functions (serverless)",
    "assets": "Public assets",
    "scripts": "Automation scripts",
    "forms": "Form components",
    "tables": "Table components",
    "modals": "Modals and dialogs",
    "app": "Main application area",
}

"""
Unit tests for codemap.classifier
"""

from __future__ import annotations

import pytest

from codemap.classifier import (
    CATEGORY_ICONS,
    CATEGORY_RULES,
    FileCategory,
    classify,
    is_code_file,
    is_entry_point,
    matching_rule,
)

SAMPLE_PATHS = [
    "src/components/Button.test.tsx",
    "Button.test.tsx",
    "vite.config.ts",
    ".eslintrc.js",
    "app/dashboard/page.tsx",
    "app/layout.tsx",
    "app/api/users/route.ts",
    "src/pages/Home.tsx",
    "src/routes/+page.svelte",
    "src/middleware.ts",
    "src/api/users.ts",
    "src/hooks/useAuth.ts",
    "src/types/order.ts",
    "src/global.d.ts",
    "src/services/quota/index.ts",
    "src/store/cart.ts",
    "src/utils/format.ts",
    "src/components/Button.tsx",
    "src/App.vue",
    "src/index.ts",
]


@pytest.mark.parametrize("path, expected", [
    ("src/components/Button.test.tsx", FileCategory.TEST),
    ("Button.test.tsx", FileCategory.TEST),
    ("src/hooks/useAuth.spec.ts", FileCategory.TEST),
    ("src/__tests__/helpers.ts", FileCategory.TEST),
    ("tests/setup.ts", FileCategory.TEST),
    ("vite.config.ts", FileCategory.CONFIG),
    ("next.config.mjs", FileCategory.CONFIG),
    (".eslintrc.js", FileCategory.CONFIG),
    ("tsconfig.json", FileCategory.CONFIG),
    ("public/firebase-messaging-sw.js", FileCategory.CONFIG),
    ("app/dashboard/page.tsx", FileCategory.PAGE),
    ("app/not-found.tsx", FileCategory.PAGE),
    ("src/routes/+page.svelte", FileCategory.PAGE),
    ("src/routes/+error.svelte", FileCategory.PAGE),
    ("app/layout.tsx", FileCategory.LAYOUT),
    ("src/routes/+layout.svelte", FileCategory.LAYOUT),
    ("app/api/users/route.ts", FileCategory.ROUTE),
    ("src/pages/Home.tsx", FileCategory.PAGE),
    ("src/features/billing/SettingsView.tsx", FileCategory.PAGE),
    ("src/api/users.ts", FileCategory.ROUTE),
    ("src/+server.ts", FileCategory.ROUTE),
    ("src/server/db.ts", FileCategory.ROUTE),
    ("src/middleware.ts", FileCategory.ROUTE),
    ("app/entry.server.tsx", FileCategory.ROUTE),
    ("src/hooks/useAuth.ts", FileCategory.HOOK),
    ("src/useDebounce.ts", FileCategory.HOOK),
    ("src/composables/counter.ts", FileCategory.HOOK),
    ("src/stores/cart.ts", FileCategory.HOOK),
    ("src/types/order.ts", FileCategory.TYPE),
    ("src/global.d.ts", FileCategory.TYPE),
    ("src/types.ts", FileCategory.TYPE),
    ("src/services/quota/index.ts", FileCategory.SERVICE),
    ("src/quotaService.ts", FileCategory.SERVICE),
    ("src/store/cart.ts", FileCategory.STORE),
    ("src/context/ThemeContext.tsx", FileCategory.STORE),
    ("src/cartSlice.ts", FileCategory.STORE),
    ("src/utils/format.ts", FileCategory.UTIL),
    ("lib/firebase.ts", FileCategory.UTIL),
    ("src/dateHelpers.ts", FileCategory.UTIL),
    ("src/components/Button.tsx", FileCategory.COMPONENT),
    ("src/ui/Card.jsx", FileCategory.COMPONENT),
    ("src/App.vue", FileCategory.COMPONENT),
    ("src/Widget.astro", FileCategory.COMPONENT),
    ("src/index.ts", FileCategory.OTHER),
    ("main.js", FileCategory.OTHER),
])
def test_classify(path, expected):
    assert classify(path) == expected


class TestClassifyInvariants:
    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_case_insensitive(self, path):
        assert classify(path) == classify(path.upper())

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_separator_agnostic(self, path):
        assert classify(path) == classify(path.replace("/", "\\"))

    @pytest.mark.parametrize("path", SAMPLE_PATHS)
    def test_deterministic(self, path):
        assert classify(path) == classify(path)

    def test_total_on_odd_input(self):
        assert classify("") == FileCategory.OTHER
        assert classify("/") == FileCategory.OTHER
        assert classify("README") == FileCategory.OTHER

    def test_test_wins_over_everything(self):
        # would be a hook, a page and a component without the test marker
        assert classify("src/components/pages/useThing.test.tsx") == FileCategory.TEST

    def test_pages_inside_components_is_not_a_page(self):
        assert classify("src/components/pages/Card.tsx") == FileCategory.COMPONENT

    def test_category_values_are_plain_strings(self):
        assert FileCategory.HOOK == "hook"
        assert classify("src/hooks/useAuth.ts").value == "hook"


class TestMatchingRule:
    def test_names_the_rule(self):
        assert matching_rule("Button.test.tsx") == "test"
        assert matching_rule("src/hooks/useAuth.ts") == "hook"

    def test_none_for_other(self):
        assert matching_rule("src/index.ts") is None

    def test_rules_are_ordered(self):
        names = [name for name, _ in CATEGORY_RULES]
        assert names[0] == "test"
        assert names[-1] == "component"


class TestHelpers:
    def test_is_code_file(self):
        assert is_code_file("src/App.tsx")
        assert is_code_file("src/App.VUE")
        assert not is_code_file("src/app.py")
        assert not is_code_file("README.md")

    def test_is_entry_point(self):
        assert is_entry_point("src/main.tsx")
        assert is_entry_point("index.ts")
        assert not is_entry_point("src/pages/index.ts")

    def test_every_category_has_an_icon(self):
        assert set(CATEGORY_ICONS) == set(FileCategory)

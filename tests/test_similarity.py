"""
Unit tests for codemap.similarity
"""

from __future__ import annotations

from codemap.similarity import (
    distance,
    extract_file_name,
    find_best_match,
    find_similar,
    strip_extension,
)


class TestDistance:
    def test_identical(self):
        assert distance("auth", "auth") == 0

    def test_single_insertion(self):
        assert distance("cat", "cats") == 1

    def test_transposition_costs_two(self):
        assert distance("auth", "auht") == 2

    def test_classic_example(self):
        assert distance("kitten", "sitting") == 3

    def test_empty_strings(self):
        assert distance("", "") == 0
        assert distance("", "abc") == 3
        assert distance("abc", "") == 3

    def test_symmetric(self):
        assert distance("dashboard", "dashbord") == distance("dashbord", "dashboard")


class TestHelpers:
    def test_strip_extension(self):
        assert strip_extension("Button.tsx") == "Button"
        assert strip_extension("App.vue") == "App"
        assert strip_extension("readme.md") == "readme.md"

    def test_strip_extension_case_insensitive(self):
        assert strip_extension("INDEX.TS") == "INDEX"

    def test_extract_file_name(self):
        assert extract_file_name("src/hooks/useAuth.ts") == "useAuth"
        assert extract_file_name("src\\components\\Card.jsx") == "Card"
        assert extract_file_name("main.mjs") == "main"


class TestFindSimilar:
    def test_substring_scores_zero_and_keeps_order(self):
        result = find_similar("but", ["Button.tsx", "ButtonGroup.tsx", "Card.tsx"])
        assert result == ["Button.tsx", "ButtonGroup.tsx"]

    def test_query_containing_key_scores_zero(self):
        assert find_similar("authentication", ["auth"]) == ["auth"]

    def test_max_distance_filters(self):
        assert find_similar("abc", ["abd", "xyz"], max_distance=1) == ["abd"]

    def test_sorted_by_score(self):
        result = find_similar("dashbord", ["dashboards-old", "dashboard", "dash"])
        # "dash" is contained in the query (score 0), "dashboard" is one edit away
        assert result[0] == "dash"
        assert "dashboard" in result

    def test_limit(self):
        candidates = [f"button{i}" for i in range(10)]
        assert len(find_similar("button", candidates, limit=3)) == 3

    def test_key_function(self):
        files = ["src/components/Header.tsx", "src/components/Footer.tsx"]
        assert find_similar("headr", files, key=extract_file_name) == [
            "src/components/Header.tsx",
        ]

    def test_case_sensitive_when_not_normalized(self):
        assert find_similar("AUTH", ["auth"], max_distance=0, normalize=False) == []
        assert find_similar("AUTH", ["auth"], max_distance=0) == ["auth"]

    def test_empty_candidates(self):
        assert find_similar("anything", []) == []


class TestFindBestMatch:
    def test_typo(self):
        assert find_best_match("auht", ["auth", "dashboard"]) == "auth"

    def test_no_confident_match(self):
        assert find_best_match("xyz", ["auth", "dashboard"]) is None

    def test_distance_three_is_not_confident(self):
        assert find_best_match("kitten", ["sitting"]) is None

"""Tests for the naming-convention heuristic."""

import pytest

from blastradius.heuristics.naming import (
    get_test_file_patterns,
    is_test_file,
    match_test_files,
)


class TestIsTestFile:
    @pytest.mark.parametrize("path", [
        "src/user.spec.ts",
        "src/user.test.tsx",
        "lib/a.spec.js",
        "lib/a.test.jsx",
        "src/__tests__/user.ts",
        "test/helpers.ts",
        "packages/ui/tests/button.ts",
    ])
    def test_detected(self, path):
        assert is_test_file(path)

    @pytest.mark.parametrize("path", [
        "src/user.ts",
        "src/testing/user.ts",
        "src/contest.ts",
        "tests.ts",
    ])
    def test_not_detected(self, path):
        assert not is_test_file(path)

    def test_windows_separators(self):
        assert is_test_file("src\\__tests__\\user.ts")

    def test_patterns_replace_builtin_rules(self):
        patterns = ["**/*.check.ts"]
        assert is_test_file("src/a.check.ts", patterns)
        assert not is_test_file("src/a.spec.ts", patterns)


class TestGetTestFilePatterns:
    def test_candidates_for_ts_source(self):
        candidates = get_test_file_patterns("src/services/user.ts")
        for expected in (
            "src/services/user.spec.ts",
            "src/services/user.test.ts",
            "src/services/__tests__/user.spec.ts",
            "src/services/test/user.test.ts",
            "src/services/tests/user.spec.ts",
            "tests/services/user.spec.ts",
            "test/services/user.test.ts",
        ):
            assert expected in candidates
        assert not any(c.endswith(".tsx") for c in candidates)

    def test_no_mirror_without_src(self):
        candidates = get_test_file_patterns("lib/user.js")
        assert "lib/user.spec.js" in candidates
        assert not any(c.startswith("tests/") for c in candidates)

    def test_test_file_has_no_candidates(self):
        assert get_test_file_patterns("src/user.spec.ts") == []

    def test_unknown_extension(self):
        assert get_test_file_patterns("src/styles.css") == []


class TestMatchTestFiles:
    ALL = [
        "src/services/user.ts",
        "src/services/user.spec.ts",
        "src/services/__tests__/user.test.ts",
        "tests/services/user.spec.ts",
        "e2e/flows/user.spec.ts",
        "src/services/users.spec.ts",
        "src/services/order.spec.ts",
    ]

    def test_exact_then_fuzzy(self):
        matches = match_test_files("src/services/user.ts", self.ALL)
        assert matches[:3] == [
            "src/services/user.spec.ts",
            "src/services/__tests__/user.test.ts",
            "tests/services/user.spec.ts",
        ]
        # same base name anywhere in the project
        assert "e2e/flows/user.spec.ts" in matches
        assert "src/services/users.spec.ts" not in matches
        assert "src/services/order.spec.ts" not in matches

    def test_case_insensitive_exact_match(self):
        assert match_test_files("src/User.ts", ["src/user.spec.ts"]) == ["src/user.spec.ts"]

    def test_no_duplicates(self):
        matches = match_test_files("src/services/user.ts", self.ALL)
        assert len(matches) == len(set(matches))

    def test_configured_patterns(self):
        files = ["src/a.ts", "src/a.spec.ts", "src/__tests__/a.spec.ts"]
        assert match_test_files("src/a.ts", files, ["**/__tests__/**"]) == ["src/__tests__/a.spec.ts"]

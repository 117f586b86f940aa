"""Tests for the folder-convention heuristic."""

import pytest

from blastradius.heuristics.folders import (
    get_affected_modules,
    get_colocated_test_files,
    get_folder_risk_level,
    get_module_name,
    is_in_test_folder,
)


@pytest.mark.parametrize("path,level", [
    ("src/auth/login.ts", "high"),
    ("src/database/schema.ts", "high"),
    ("src/Config/index.ts", "high"),
    ("src/services/user.ts", "medium"),
    ("src/controllers/user.ts", "medium"),
    ("src/utils/date.ts", "low"),
    ("src/components/Button.tsx", "none"),
    ("index.ts", "none"),
    # highest tier present anywhere in the path wins
    ("src/utils/auth/token.ts", "high"),
    ("src/api/helpers/x.ts", "medium"),
])
def test_folder_risk_level(path, level):
    assert get_folder_risk_level(path) == level


def test_file_name_is_not_a_folder():
    assert get_folder_risk_level("src/auth.ts") == "none"


class TestModuleName:
    @pytest.mark.parametrize("path,module", [
        ("src/orders/service.ts", "orders"),
        ("src/orders/sub/deep.ts", "orders"),
        ("packages/ui/src/button.ts", "ui"),
        ("app/checkout/page.tsx", "checkout"),
        ("src/index.ts", "src"),
        ("index.ts", "root"),
    ])
    def test_names(self, path, module):
        assert get_module_name(path) == module

    def test_affected_modules(self):
        assert get_affected_modules(["src/orders/a.ts", "src/users/b.ts", "src/orders/c.ts"]) == {
            "orders", "users",
        }


@pytest.mark.parametrize("path,expected", [
    ("src/__tests__/a.ts", True),
    ("spec/a.ts", True),
    ("src/Tests/a.ts", True),
    ("src/a.spec.ts", False),
    ("src/testing/a.ts", False),
])
def test_is_in_test_folder(path, expected):
    assert is_in_test_folder(path) is expected


class TestColocatedTests:
    FILES = [
        "src/orders/service.ts",
        "src/orders/service.spec.ts",
        "src/orders/other.test.ts",
        "src/orders/__tests__/flow.test.ts",
        "src/orders/tests/helpers.ts",
        "src/orders/deep/nested/x.spec.ts",
        "src/users/service.spec.ts",
    ]

    def test_same_dir_and_test_subfolders(self):
        assert get_colocated_test_files("src/orders/service.ts", self.FILES) == [
            "src/orders/service.spec.ts",
            "src/orders/other.test.ts",
            "src/orders/__tests__/flow.test.ts",
            "src/orders/tests/helpers.ts",
        ]

    def test_patterns_limit_candidates(self):
        result = get_colocated_test_files("src/orders/service.ts", self.FILES, ["**/*.test.ts"])
        assert result == ["src/orders/other.test.ts", "src/orders/__tests__/flow.test.ts"]

    def test_subfolders_only(self):
        result = get_colocated_test_files("src/orders/service.ts", self.FILES, same_dir=False)
        assert result == ["src/orders/__tests__/flow.test.ts", "src/orders/tests/helpers.ts"]

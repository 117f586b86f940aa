"""Tests for the unit test impact analyzer and the shared impact map."""

from __future__ import annotations

import pytest

from blastradius.analyzers import Analyzer, AnalyzerContext, ImpactMap, UnitTestAnalyzer
from blastradius.analyzers.unit_tests import closest_changed_dependency, is_test_path
from blastradius.config import Config
from blastradius.graph import build_dependency_graph, list_source_files
from blastradius.models import ChangedFile, DependencyGraph, ImpactReason, ImpactType


@pytest.fixture
def shop(project):
    return project({
        "src/orders/order.ts": "export const order = 1;\n",
        "src/orders/order.spec.ts": "import { order } from './order';\n",
        "src/orders/__tests__/flow.test.ts": "describe('flow', () => {});\n",
        "src/checkout/checkout.ts": "import { order } from '../orders/order';\nexport const checkout = order;\n",
        "src/checkout/checkout.spec.ts": "import { checkout } from './checkout';\n",
        "src/users/user.ts": "export const user = 1;\n",
        "src/users/user.spec.ts": "import { user } from './user';\n",
        "e2e/orders/place.spec.ts": "describe('place', () => {});\n",
    })


def make_context(root, changed, config=None):
    files = list_source_files(root)
    return AnalyzerContext(
        changed_files=[ChangedFile(p) for p in changed],
        dependency_graph=build_dependency_graph(root, no_cache=True),
        project_root=root,
        all_files=files,
        config=config or Config(),
    )


def by_path(results):
    return {r.path: r for r in results}


# ---------------------------------------------------------------------------
# ImpactMap
# ---------------------------------------------------------------------------

class TestImpactMap:
    def test_duplicate_type_and_related_file_suppressed(self):
        m = ImpactMap()
        assert m.add("t.spec.ts", ImpactReason(ImpactType.NAMING_CONVENTION, "one", "a.ts"))
        assert not m.add("t.spec.ts", ImpactReason(ImpactType.NAMING_CONVENTION, "two", "a.ts"))
        assert m.add("t.spec.ts", ImpactReason(ImpactType.NAMING_CONVENTION, "one", "b.ts"))
        assert len(m.to_list()[0].reasons) == 2

    def test_match_description_mode(self):
        m = ImpactMap(match_description=True)
        m.add("t.bru", ImpactReason(ImpactType.ROUTE_MATCH, "GET /a", "c.ts"))
        assert m.add("t.bru", ImpactReason(ImpactType.ROUTE_MATCH, "POST /a", "c.ts"))
        assert not m.add("t.bru", ImpactReason(ImpactType.ROUTE_MATCH, "GET /a", "c.ts"))

    def test_sort_by_confidence_is_stable(self):
        m = ImpactMap()
        m.add("a", ImpactReason(ImpactType.DIRECT_CHANGE, "x"))
        m.add("b", ImpactReason(ImpactType.DIRECT_CHANGE, "x"))
        m.add("b", ImpactReason(ImpactType.NAMING_CONVENTION, "y", "s"))
        m.add("c", ImpactReason(ImpactType.DIRECT_CHANGE, "x"))
        assert [f.path for f in m.to_list()] == ["a", "b", "c"]
        assert [f.path for f in m.to_list(sort_by_confidence=True)] == ["b", "a", "c"]
        assert "a" in m and len(m) == 3


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_is_test_path():
    assert is_test_path("src/a.spec.ts")
    assert is_test_path("spec/helpers.ts")
    assert not is_test_path("src/a.ts")
    assert is_test_path("src/a.check.ts", ["**/*.check.ts"])
    assert not is_test_path("src/a.spec.ts", ["**/*.check.ts"])


class TestClosestChangedDependency:
    def test_direct(self):
        g = DependencyGraph()
        g.add_edge("t.spec.ts", "a.ts")
        assert closest_changed_dependency("t.spec.ts", ["a.ts"], g) == "a.ts"

    def test_two_hops(self):
        g = DependencyGraph()
        g.add_edge("t.spec.ts", "b.ts")
        g.add_edge("b.ts", "a.ts")
        assert closest_changed_dependency("t.spec.ts", ["a.ts"], g) == "a.ts"

    def test_falls_back_to_first_changed(self):
        g = DependencyGraph()
        g.add_edge("t.spec.ts", "b.ts")
        g.add_edge("b.ts", "c.ts")
        g.add_edge("c.ts", "a.ts")
        assert closest_changed_dependency("t.spec.ts", ["a.ts", "z.ts"], g) == "a.ts"

    def test_nothing_changed(self):
        assert closest_changed_dependency("t.spec.ts", [], DependencyGraph()) is None


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class TestUnitTestAnalyzer:
    def test_satisfies_protocol(self):
        assert isinstance(UnitTestAnalyzer(), Analyzer)
        assert UnitTestAnalyzer.name == "unit-test-analyzer"

    def test_source_change(self, shop):
        results = UnitTestAnalyzer().analyze(make_context(shop, ["src/orders/order.ts"]))
        assert [r.path for r in results] == [
            "src/orders/order.spec.ts",
            "src/checkout/checkout.spec.ts",
            "src/orders/__tests__/flow.test.ts",
        ]
        found = by_path(results)

        spec = found["src/orders/order.spec.ts"]
        assert [r.type for r in spec.reasons] == [ImpactType.NAMING_CONVENTION, ImpactType.IMPORTS_CHANGED]
        assert spec.reasons[0].description == "Test matches source file naming pattern"
        assert spec.reasons[1].description == "Directly imports changed file"
        assert spec.reasons[1].related_file == "src/orders/order.ts"

        (transitive,) = found["src/checkout/checkout.spec.ts"].reasons
        assert transitive.description == "Transitively imports changed file (depth: 2)"
        assert transitive.related_file == "src/orders/order.ts"

        (colocated,) = found["src/orders/__tests__/flow.test.ts"].reasons
        assert colocated.type == ImpactType.FOLDER_CONVENTION
        assert colocated.description == "Co-located in test subfolder of changed module"

    def test_unrelated_tests_not_impacted(self, shop):
        results = UnitTestAnalyzer().analyze(make_context(shop, ["src/orders/order.ts"]))
        paths = {r.path for r in results}
        assert "src/users/user.spec.ts" not in paths
        assert "e2e/orders/place.spec.ts" not in paths

    def test_direct_test_change(self, shop):
        results = UnitTestAnalyzer().analyze(make_context(shop, ["src/users/user.spec.ts"]))
        assert len(results) == 1
        assert results[0].path == "src/users/user.spec.ts"
        assert results[0].reasons == [
            ImpactReason(ImpactType.DIRECT_CHANGE, "Test file was directly modified"),
        ]

    def test_max_depth(self, shop):
        ctx = make_context(shop, ["src/orders/order.ts"], Config(max_depth=1))
        paths = {r.path for r in UnitTestAnalyzer().analyze(ctx)}
        assert "src/checkout/checkout.spec.ts" not in paths
        assert "src/orders/order.spec.ts" in paths

    def test_folder_mappings(self, shop):
        config = Config(folder_mappings={"src/orders": "e2e/orders"})
        found = by_path(UnitTestAnalyzer().analyze(make_context(shop, ["src/orders/order.ts"], config)))
        (mapped,) = found["e2e/orders/place.spec.ts"].reasons
        assert mapped.type == ImpactType.FOLDER_CONVENTION
        assert mapped.description == "Mapped test folder e2e/orders for src/orders"
        assert mapped.related_file == "src/orders/order.ts"

    def test_folder_mapping_for_other_folder_ignored(self, shop):
        config = Config(folder_mappings={"src/users": "e2e/orders"})
        found = by_path(UnitTestAnalyzer().analyze(make_context(shop, ["src/orders/order.ts"], config)))
        assert "e2e/orders/place.spec.ts" not in found

    def test_configured_test_patterns(self, project):
        root = project({
            "src/a.ts": "export const a = 1;\n",
            "src/a.check.ts": "import { a } from './a';\n",
            "src/a.spec.ts": "import { a } from './a';\n",
        })
        config = Config(test_patterns=("**/*.check.ts",))
        results = UnitTestAnalyzer().analyze(make_context(root, ["src/a.ts"], config))
        assert [r.path for r in results] == ["src/a.check.ts"]
        assert results[0].reasons[0].description == "Directly imports changed file"

    def test_no_changes(self, shop):
        assert UnitTestAnalyzer().analyze(make_context(shop, [])) == []

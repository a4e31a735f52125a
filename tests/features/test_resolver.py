"""Tests for feature graph resolution."""

from cuegen.features.resolver import (
    feature_to_field_name,
    resolve_features,
    unknown_features,
)
from cuegen.types import FeaturesManifest


def _manifest(graph: dict[str, list[str]]) -> FeaturesManifest:
    return FeaturesManifest.model_validate(
        {"features": {name: {"dependencies": deps} for name, deps in graph.items()}}
    )


class TestResolveFeatures:
    """Tests for resolve_features."""

    def test_leaf_resolves_to_itself(self, manifest: FeaturesManifest) -> None:
        assert resolve_features(["ts"], manifest) == ["ts"]

    def test_transitive_dependencies_included(self, manifest: FeaturesManifest) -> None:
        resolved = resolve_features(["vite-react"], manifest)

        assert set(resolved) == {"vite-react", "react", "vite", "ts"}

    def test_closure_contains_closure_of_direct_dependencies(
        self, manifest: FeaturesManifest
    ) -> None:
        """resolve({f}) is a superset of {f} plus the closure of each direct dependency."""
        for feature, definition in manifest.features.items():
            resolved = set(resolve_features([feature], manifest))
            assert feature in resolved
            for dep in definition.dependencies:
                assert set(resolve_features([dep], manifest)) <= resolved

    def test_order_is_breadth_first_insertion_order(self, manifest: FeaturesManifest) -> None:
        assert resolve_features(["node-cjs"], manifest) == ["node-cjs", "node", "ts"]

    def test_each_feature_appears_once(self, manifest: FeaturesManifest) -> None:
        resolved = resolve_features(["node", "vite", "ts", "node"], manifest)

        assert len(resolved) == len(set(resolved))
        assert set(resolved) == {"node", "vite", "ts"}

    def test_unknown_requested_feature_dropped(self, manifest: FeaturesManifest) -> None:
        assert resolve_features(["nope", "ts"], manifest) == ["ts"]

    def test_unknown_transitive_dependency_dropped(self) -> None:
        manifest = _manifest({"app": ["retired", "base"], "base": []})

        assert resolve_features(["app"], manifest) == ["app", "base"]

    def test_cycle_terminates_with_each_member_once(self) -> None:
        manifest = _manifest({"a": ["b"], "b": ["c"], "c": ["a"]})

        resolved = resolve_features(["a"], manifest)

        assert sorted(resolved) == ["a", "b", "c"]

    def test_self_cycle_terminates(self) -> None:
        manifest = _manifest({"a": ["a"]})

        assert resolve_features(["a"], manifest) == ["a"]

    def test_empty_request(self, manifest: FeaturesManifest) -> None:
        assert resolve_features([], manifest) == []


class TestUnknownFeatures:
    """Tests for unknown_features."""

    def test_reports_unknown_in_input_order(self, manifest: FeaturesManifest) -> None:
        assert unknown_features(["zz", "ts", "aa"], manifest) == ["zz", "aa"]

    def test_all_known(self, manifest: FeaturesManifest) -> None:
        assert unknown_features(["ts", "node"], manifest) == []


class TestFeatureToFieldName:
    """Tests for the fragment name translation table."""

    def test_composite_name_is_camel_cased(self) -> None:
        assert feature_to_field_name("vite-react") == "viteReact"

    def test_other_names_unchanged(self) -> None:
        assert feature_to_field_name("node-cjs") == "node-cjs"
        assert feature_to_field_name("ts") == "ts"

"""Feature graph resolution.

Unknown names are treated differently depending on where they appear:

- a name the user asks for directly is rejected by the procedures (catches typos);
- a name reached transitively is silently dropped here, so dependencies that a
  newer features.json no longer defines simply stop expanding.
"""

from collections import deque
from collections.abc import Iterable

from cuegen.types import FeaturesManifest

# Feature names whose CUE field name is not the feature name itself
FIELD_NAME_OVERRIDES: dict[str, str] = {
    "vite-react": "viteReact",
}


def resolve_features(requested: Iterable[str], manifest: FeaturesManifest) -> list[str]:
    """Flood-fill all transitive dependencies of `requested`.

    Breadth-first over a FIFO queue. The result holds each known feature once,
    in first-resolution order. That order is not topological: callers that
    need "most specific wins" semantics must use an explicit priority list.

    Args:
        requested: Feature names to start from
        manifest: Feature definitions to expand against

    Returns:
        The closure of `requested`, minus names the manifest does not define
    """
    resolved: dict[str, None] = {}
    queue = deque(requested)

    while queue:
        feature = queue.popleft()
        if feature in resolved:
            continue

        definition = manifest.features.get(feature)
        if definition is None:
            continue

        resolved[feature] = None
        queue.extend(dep for dep in definition.dependencies if dep not in resolved)

    return list(resolved)


def unknown_features(features: Iterable[str], manifest: FeaturesManifest) -> list[str]:
    """Names in `features` that the manifest does not define, in input order."""
    return [feature for feature in features if feature not in manifest.features]


def feature_to_field_name(feature: str) -> str:
    """Map a feature name to its CUE fragment name (vite-react -> viteReact)."""
    return FIELD_NAME_OVERRIDES.get(feature, feature)

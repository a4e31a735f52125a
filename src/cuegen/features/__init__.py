"""Feature graph resolution and the project's declared feature set."""

from cuegen.features.resolver import (
    FIELD_NAME_OVERRIDES,
    feature_to_field_name,
    resolve_features,
    unknown_features,
)
from cuegen.features.store import (
    dependencies_path,
    load_dependencies,
    load_features,
    save_dependencies,
)

__all__ = [
    # Resolver
    "FIELD_NAME_OVERRIDES",
    "feature_to_field_name",
    "resolve_features",
    "unknown_features",
    # Store
    "dependencies_path",
    "load_dependencies",
    "load_features",
    "save_dependencies",
]

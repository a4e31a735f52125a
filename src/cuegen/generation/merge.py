"""Merging generated configuration with what the user already has.

Each generated artifact is rebuilt from scratch on every run. Only
package.json is merge-aware: fields the user owns survive, fields the
features own are refreshed. Merging a fragment into its own previous output
is a no-op, so repeated runs never drift.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

PACKAGE_SCHEMA = "https://json.schemastore.org/package"
TSCONFIG_SCHEMA = "https://json.schemastore.org/tsconfig"

# Tsconfig priority: later features override earlier (most specific wins)
TSCONFIG_PRIORITY: tuple[str, ...] = ("ts", "node", "node-cjs", "vite", "react")
DEFAULT_TSCONFIG = "ts"

MODULE_CUE = """module: "project.local"
language: {
\tversion: "v0.15.1"
}
"""


class MergePolicy(Enum):
    """How one package.json field combines generated and existing values."""

    IDENTITY = "identity"
    """Keep the user's value when set; the generated value only fills gaps."""

    MAP = "map"
    """Shallow-merge mappings, user entries win on key collision."""

    UNION = "union"
    """Generated entries first, then user-only entries, no duplicates."""

    OVERWRITE = "overwrite"
    """Generated value replaces whatever was there."""


PACKAGE_FIELD_POLICIES: dict[str, MergePolicy] = {
    "name": MergePolicy.IDENTITY,
    "version": MergePolicy.IDENTITY,
    "description": MergePolicy.IDENTITY,
    "dependencies": MergePolicy.MAP,
    "devDependencies": MergePolicy.MAP,
    "peerDependencies": MergePolicy.MAP,
    "scripts": MergePolicy.MAP,
    "files": MergePolicy.UNION,
}


def _merge_identity(generated: Any, existing: Any) -> Any:
    return existing if existing else generated


def _merge_map(generated: Any, existing: Any) -> Any:
    if not isinstance(generated, Mapping):
        return generated
    user = existing if isinstance(existing, Mapping) else {}
    return {**generated, **user}


def _merge_union(generated: Any, existing: Any) -> Any:
    if not (isinstance(generated, list) and isinstance(existing, list)):
        return generated
    merged = list(generated)
    for item in existing:
        if item not in merged:
            merged.append(item)
    return merged


def _merge_overwrite(generated: Any, existing: Any) -> Any:
    return generated


_MERGERS = {
    MergePolicy.IDENTITY: _merge_identity,
    MergePolicy.MAP: _merge_map,
    MergePolicy.UNION: _merge_union,
    MergePolicy.OVERWRITE: _merge_overwrite,
}


def merge_package_json(
    generated: Mapping[str, Any],
    existing: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Merge a freshly evaluated package.json fragment into the user's file.

    Field order follows the existing file, with newly generated fields
    appended, and `$schema` always first.

    Args:
        generated: Output of the package fragment evaluation
        existing: Current package.json contents, None if there is none

    Returns:
        The package.json document to write
    """
    pkg: dict[str, Any] = dict(existing or {})

    for key, value in generated.items():
        policy = PACKAGE_FIELD_POLICIES.get(key, MergePolicy.OVERWRITE)
        pkg[key] = _MERGERS[policy](value, pkg.get(key))

    ordered: dict[str, Any] = {"$schema": PACKAGE_SCHEMA}
    for key, value in pkg.items():
        if key != "$schema":
            ordered[key] = value
    return ordered


def determine_tsconfig(resolved_features: Iterable[str]) -> str:
    """Pick the base tsconfig: the last TSCONFIG_PRIORITY entry that is resolved."""
    resolved = set(resolved_features)
    selected = DEFAULT_TSCONFIG
    for feature in TSCONFIG_PRIORITY:
        if feature in resolved:
            selected = feature
    return selected


def build_tsconfig(resolved_features: Iterable[str], package_name: str) -> dict[str, str]:
    """tsconfig.json content: a reference to one of the shipped base configs."""
    name = determine_tsconfig(resolved_features)
    return {
        "$schema": TSCONFIG_SCHEMA,
        "extends": f"{package_name}/ts/config/{name}.json",
    }


def render_gitignore(patterns: Iterable[str]) -> str:
    """One pattern per line with a trailing newline; no merge with the old file."""
    return "\n".join(patterns) + "\n"

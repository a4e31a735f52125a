"""Config generation: fragment evaluation and merge policies."""

from cuegen.generation.artifacts import (
    CUE_MOD,
    GITIGNORE,
    GITIGNORE_ARTIFACT,
    MODULE_FEATURE,
    PACKAGE_ARTIFACT,
    PACKAGE_JSON,
    TSCONFIG_JSON,
    TYPED_FEATURE,
    ArtifactSpec,
)
from cuegen.generation.merge import (
    PACKAGE_FIELD_POLICIES,
    TSCONFIG_PRIORITY,
    MergePolicy,
    build_tsconfig,
    determine_tsconfig,
    merge_package_json,
    render_gitignore,
)

__all__ = [
    # Artifacts
    "ArtifactSpec",
    "PACKAGE_ARTIFACT",
    "GITIGNORE_ARTIFACT",
    "PACKAGE_JSON",
    "TSCONFIG_JSON",
    "GITIGNORE",
    "CUE_MOD",
    "TYPED_FEATURE",
    "MODULE_FEATURE",
    # Merge
    "MergePolicy",
    "PACKAGE_FIELD_POLICIES",
    "TSCONFIG_PRIORITY",
    "build_tsconfig",
    "determine_tsconfig",
    "merge_package_json",
    "render_gitignore",
]

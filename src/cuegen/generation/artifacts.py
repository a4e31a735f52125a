"""Per-artifact generation steps.

Every evaluated artifact is described by an ArtifactSpec: where its CUE
fragments live, which expression to extract and whether feature names are
translated to CUE field names when looking up fragment files.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cuegen.context import ProcedureContext
from cuegen.features.resolver import feature_to_field_name
from cuegen.fs import file_exists, make_dir, read_json, write_file, write_json
from cuegen.generation.merge import (
    MODULE_CUE,
    build_tsconfig,
    merge_package_json,
    render_gitignore,
)

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
TSCONFIG_JSON = "tsconfig.json"
GITIGNORE = ".gitignore"
CUE_MOD = "cue.mod/"

# Features that switch on the conditional artifacts
TYPED_FEATURE = "ts"
MODULE_FEATURE = "cue"


@dataclass(frozen=True, slots=True)
class ArtifactSpec:
    """How to evaluate one artifact's fragments."""

    name: str
    """File name written into the project."""

    config_dir: str
    """Fragment directory, relative to the features root."""

    expression: str
    """CUE expression extracted from the evaluation."""

    translate_names: bool
    """Look fragments up by CUE field name (viteReact) instead of feature name."""


PACKAGE_ARTIFACT = ArtifactSpec(
    name=PACKAGE_JSON,
    config_dir="npm/package",
    expression="output",
    translate_names=True,
)

GITIGNORE_ARTIFACT = ArtifactSpec(
    name=GITIGNORE,
    config_dir="git/ignore",
    expression="patterns",
    translate_names=False,
)


async def collect_fragments(
    spec: ArtifactSpec,
    resolved_features: list[str],
    config_dir: Path,
    ctx: ProcedureContext,
) -> list[str]:
    """base.cue plus one fragment per resolved feature that ships one."""
    files = ["base.cue"]
    for feature in resolved_features:
        fragment = f"{feature_to_field_name(feature) if spec.translate_names else feature}.cue"
        if fragment in files:
            continue
        if await file_exists(config_dir / fragment, ctx.fs):
            files.append(fragment)
    return files


async def evaluate_artifact(
    spec: ArtifactSpec,
    resolved_features: list[str],
    project_path: Path,
    ctx: ProcedureContext,
) -> Any | None:
    """Run the evaluator for one artifact, None if it failed."""
    config_dir = ctx.features_root(project_path) / spec.config_dir
    files = await collect_fragments(spec, resolved_features, config_dir, ctx)

    result = ctx.evaluator.evaluate(files, spec.expression, config_dir)
    if not result.ok:
        logger.warning("Skipping %s: %s", spec.name, result.error())
        return None

    logger.debug("Evaluated %s from %s", spec.name, ", ".join(files))
    return result.data


async def generate_package_json(
    resolved_features: list[str],
    existing: dict[str, Any] | None,
    project_path: Path,
    ctx: ProcedureContext,
) -> dict[str, Any] | None:
    generated = await evaluate_artifact(PACKAGE_ARTIFACT, resolved_features, project_path, ctx)
    if not isinstance(generated, dict):
        if generated is not None:
            logger.warning("Skipping %s: evaluation did not produce an object", PACKAGE_JSON)
        return None
    return merge_package_json(generated, existing)


async def generate_gitignore(
    resolved_features: list[str],
    project_path: Path,
    ctx: ProcedureContext,
) -> str | None:
    patterns = await evaluate_artifact(GITIGNORE_ARTIFACT, resolved_features, project_path, ctx)
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        if patterns is not None:
            logger.warning("Skipping %s: evaluation did not produce a list of strings", GITIGNORE)
        return None
    return render_gitignore(patterns)


async def load_existing_package_json(project_path: Path, ctx: ProcedureContext) -> dict[str, Any] | None:
    existing = await read_json(project_path / PACKAGE_JSON, ctx.fs)
    return existing if isinstance(existing, dict) else None


async def write_package_json(pkg: dict[str, Any], project_path: Path, ctx: ProcedureContext) -> bool:
    return await write_json(project_path / PACKAGE_JSON, pkg, ctx.fs)


async def write_tsconfig(resolved_features: list[str], project_path: Path, ctx: ProcedureContext) -> bool:
    tsconfig = build_tsconfig(resolved_features, ctx.config.package_name)
    return await write_json(project_path / TSCONFIG_JSON, tsconfig, ctx.fs)


async def write_gitignore(content: str, project_path: Path, ctx: ProcedureContext) -> bool:
    return await write_file(project_path / GITIGNORE, content, ctx.fs)


async def setup_cue_mod(project_path: Path, ctx: ProcedureContext) -> bool:
    """Ensure cue.mod/module.cue exists. Never touches an existing module file."""
    cue_mod_path = project_path / "cue.mod"
    if not await file_exists(cue_mod_path, ctx.fs):
        if not await make_dir(cue_mod_path, ctx.fs):
            return False

    module_path = cue_mod_path / "module.cue"
    if await file_exists(module_path, ctx.fs):
        return True
    return await write_file(module_path, MODULE_CUE, ctx.fs)

"""Persistence of the features manifest and the project's dependencies.json.

dependencies.json has two historical encodings:

    ["ts", "node"]                                    # legacy bare array
    {"$schema": "...", "dependencies": ["ts", "node"]}  # canonical

Both are accepted on read; writes always produce the canonical form.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from cuegen.context import ProcedureContext
from cuegen.fs import read_json, write_json
from cuegen.types import DependenciesJson, FeaturesManifest

logger = logging.getLogger(__name__)


async def load_features(project_path: Path, ctx: ProcedureContext) -> FeaturesManifest | None:
    """Load features.json from the features package, None if missing or malformed."""
    features_path = ctx.features_root(project_path) / "features.json"
    content = await read_json(features_path, ctx.fs)
    if content is None:
        logger.debug("No features manifest at %s", features_path)
        return None

    try:
        return FeaturesManifest.model_validate(content)
    except ValidationError as e:
        logger.warning("Ignoring malformed features manifest %s: %s", features_path, e)
        return None


def dependencies_path(project_path: Path, ctx: ProcedureContext) -> Path:
    return project_path / ctx.config.dependencies_file


def _dedupe(features: list[str]) -> list[str]:
    return list(dict.fromkeys(features))


async def load_dependencies(project_path: Path, ctx: ProcedureContext) -> list[str] | None:
    """Read the project's declared features.

    A missing file, malformed JSON and an unrecognised shape all return None;
    callers respond to each with "run init first".
    """
    content = await read_json(dependencies_path(project_path, ctx), ctx.fs)
    if isinstance(content, dict):
        # Only the feature list matters on read; $schema is rewritten on save
        content = content.get("dependencies")

    if isinstance(content, list) and all(isinstance(item, str) for item in content):
        return _dedupe(content)
    return None


async def save_dependencies(
    features: list[str],
    project_path: Path,
    ctx: ProcedureContext,
) -> bool:
    """Write dependencies.json in the canonical wrapped shape."""
    document = DependenciesJson(
        schema_ref=ctx.config.dependencies_schema,
        dependencies=features,
    )
    return await write_json(
        dependencies_path(project_path, ctx),
        document.model_dump(by_alias=True),
        ctx.fs,
    )

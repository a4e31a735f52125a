"""cue.add procedure.

Add a feature to dependencies.json.
"""

from cuegen.context import ProcedureContext
from cuegen.features import load_dependencies, load_features, save_dependencies
from cuegen.foundation.errors import ERROR_MESSAGES, ErrorCode
from cuegen.types import CueAddInput, CueAddOutput


async def cue_add(input: CueAddInput, ctx: ProcedureContext) -> CueAddOutput:
    """Add a feature to dependencies.json, creating the file if needed."""
    project_path = ctx.project_path(input.cwd)
    feature = input.feature

    manifest = await load_features(project_path, ctx)
    if manifest is None:
        return CueAddOutput(
            success=False,
            feature=feature,
            added=False,
            error=ERROR_MESSAGES[ErrorCode.MANIFEST_NOT_FOUND].format(
                package=ctx.config.package_name
            ),
        )

    if feature not in manifest.features:
        return CueAddOutput(
            success=False,
            feature=feature,
            added=False,
            error=ERROR_MESSAGES[ErrorCode.FEATURE_UNKNOWN].format(
                feature=feature,
                available=", ".join(manifest.features),
            ),
        )

    deps = await load_dependencies(project_path, ctx) or []

    if feature in deps:
        return CueAddOutput(
            success=True,
            feature=feature,
            added=False,
            message=f"Feature '{feature}' is already in dependencies",
        )

    deps.append(feature)
    if not await save_dependencies(deps, project_path, ctx):
        return CueAddOutput(
            success=False,
            feature=feature,
            added=False,
            error=ERROR_MESSAGES[ErrorCode.FILE_WRITE_FAILED].format(
                path=ctx.config.dependencies_file
            ),
        )

    return CueAddOutput(
        success=True,
        feature=feature,
        added=True,
        message=f"Added '{feature}' to {ctx.config.dependencies_file}",
    )

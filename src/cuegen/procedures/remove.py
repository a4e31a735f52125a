"""cue.remove procedure.

Remove a feature from dependencies.json.
"""

from cuegen.context import ProcedureContext
from cuegen.features import load_dependencies, save_dependencies
from cuegen.foundation.errors import ERROR_MESSAGES, ErrorCode
from cuegen.types import CueRemoveInput, CueRemoveOutput


async def cue_remove(input: CueRemoveInput, ctx: ProcedureContext) -> CueRemoveOutput:
    project_path = ctx.project_path(input.cwd)
    feature = input.feature

    deps = await load_dependencies(project_path, ctx)
    if deps is None:
        return CueRemoveOutput(
            success=False,
            feature=feature,
            removed=False,
            error=ERROR_MESSAGES[ErrorCode.DEPENDENCIES_NOT_FOUND],
        )

    if feature not in deps:
        return CueRemoveOutput(
            success=True,
            feature=feature,
            removed=False,
            message=f"Feature '{feature}' is not in dependencies",
        )

    deps.remove(feature)
    if not await save_dependencies(deps, project_path, ctx):
        return CueRemoveOutput(
            success=False,
            feature=feature,
            removed=False,
            error=ERROR_MESSAGES[ErrorCode.FILE_WRITE_FAILED].format(
                path=ctx.config.dependencies_file
            ),
        )

    return CueRemoveOutput(
        success=True,
        feature=feature,
        removed=True,
        message=f"Removed '{feature}' from {ctx.config.dependencies_file}",
    )

"""cue.validate procedure.

Validate dependencies.json: every feature must exist in the manifest, and
when CUE is installed the file is vetted against the shipped schema.
"""

import logging

from cuegen.context import ProcedureContext
from cuegen.features import (
    dependencies_path,
    load_dependencies,
    load_features,
    unknown_features,
)
from cuegen.foundation.errors import ERROR_MESSAGES, ErrorCode
from cuegen.fs import file_exists
from cuegen.types import CueValidateInput, CueValidateOutput

logger = logging.getLogger(__name__)

SCHEMA_FILE = "dependencies/schema.cue"
SCHEMA_DEFINITION = "#Dependencies"


async def cue_validate(input: CueValidateInput, ctx: ProcedureContext) -> CueValidateOutput:
    """Validate dependencies.json.

    Missing inputs are failures (success=False). Invalid content is a
    successful run that reports valid=False with one error per problem.
    """
    project_path = ctx.project_path(input.cwd)

    deps = await load_dependencies(project_path, ctx)
    if deps is None:
        return CueValidateOutput(
            success=False,
            valid=False,
            errors=[ERROR_MESSAGES[ErrorCode.DEPENDENCIES_NOT_FOUND]],
        )

    manifest = await load_features(project_path, ctx)
    if manifest is None:
        return CueValidateOutput(
            success=False,
            valid=False,
            features=deps,
            errors=[
                ERROR_MESSAGES[ErrorCode.MANIFEST_NOT_FOUND].format(
                    package=ctx.config.package_name
                )
            ],
        )

    errors = [f"Unknown feature: '{feature}'" for feature in unknown_features(deps, manifest)]
    if errors:
        return CueValidateOutput(
            success=True,
            valid=False,
            features=deps,
            errors=errors,
            message=f"Validation failed with {len(errors)} error(s)",
        )

    if ctx.evaluator.is_available():
        schema_path = ctx.features_root(project_path) / SCHEMA_FILE
        if await file_exists(schema_path, ctx.fs):
            result = ctx.evaluator.vet(
                schema_path,
                dependencies_path(project_path, ctx),
                SCHEMA_DEFINITION,
            )
            if not result.ok:
                logger.debug("Schema validation failed: %s", result.error())
                return CueValidateOutput(
                    success=True,
                    valid=False,
                    features=deps,
                    errors=[f"CUE schema validation failed: {result.diagnostics}"],
                    message="CUE schema validation failed",
                )
    else:
        logger.info("CUE not installed, skipping schema validation")

    return CueValidateOutput(
        success=True,
        valid=True,
        features=deps,
        message="Validation passed",
    )

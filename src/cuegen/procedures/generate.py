"""cue.generate procedure.

Generate config files (package.json, tsconfig.json, .gitignore, cue.mod/)
from dependencies.json.
"""

import logging

from cuegen.context import ProcedureContext
from cuegen.features import load_dependencies, load_features, resolve_features
from cuegen.foundation.errors import ERROR_MESSAGES, ErrorCode
from cuegen.generation.artifacts import (
    CUE_MOD,
    GITIGNORE,
    MODULE_FEATURE,
    PACKAGE_JSON,
    TSCONFIG_JSON,
    TYPED_FEATURE,
    generate_gitignore,
    generate_package_json,
    load_existing_package_json,
    setup_cue_mod,
    write_gitignore,
    write_package_json,
    write_tsconfig,
)
from cuegen.types import CueGenerateInput, CueGenerateOutput

logger = logging.getLogger(__name__)


def _failure(error: str) -> CueGenerateOutput:
    return CueGenerateOutput(success=False, error=error)


async def cue_generate(input: CueGenerateInput, ctx: ProcedureContext) -> CueGenerateOutput:
    """Regenerate every derived config file for the project.

    An evaluator failure skips that one artifact and is reported in `skipped`;
    a missing evaluator fails the whole run before anything is written. A
    failed write stops the run with success=False, keeping what was generated
    up to that point.
    """
    project_path = ctx.project_path(input.cwd)
    generated: list[str] = []
    skipped: list[str] = []

    if not ctx.evaluator.is_available():
        return _failure(ERROR_MESSAGES[ErrorCode.EVALUATOR_NOT_INSTALLED])

    manifest = await load_features(project_path, ctx)
    if manifest is None:
        return _failure(
            ERROR_MESSAGES[ErrorCode.MANIFEST_NOT_FOUND].format(package=ctx.config.package_name)
        )

    deps = await load_dependencies(project_path, ctx)
    if deps is None:
        return _failure(ERROR_MESSAGES[ErrorCode.DEPENDENCIES_NOT_FOUND])

    resolved = resolve_features(deps, manifest)
    logger.info("Resolved %d features: %s", len(resolved), ", ".join(resolved))

    def write_failed(artifact: str) -> CueGenerateOutput:
        return CueGenerateOutput(
            success=False,
            resolved_features=resolved,
            generated=generated,
            skipped=skipped,
            error=ERROR_MESSAGES[ErrorCode.FILE_WRITE_FAILED].format(path=artifact),
        )

    existing_pkg = await load_existing_package_json(project_path, ctx)

    package_json = await generate_package_json(resolved, existing_pkg, project_path, ctx)
    if package_json is None:
        skipped.append(PACKAGE_JSON)
    elif not await write_package_json(package_json, project_path, ctx):
        return write_failed(PACKAGE_JSON)
    else:
        generated.append(PACKAGE_JSON)

    if TYPED_FEATURE in resolved:
        if not await write_tsconfig(resolved, project_path, ctx):
            return write_failed(TSCONFIG_JSON)
        generated.append(TSCONFIG_JSON)

    gitignore = await generate_gitignore(resolved, project_path, ctx)
    if gitignore is None:
        skipped.append(GITIGNORE)
    elif not await write_gitignore(gitignore, project_path, ctx):
        return write_failed(GITIGNORE)
    else:
        generated.append(GITIGNORE)

    if MODULE_FEATURE in resolved:
        if not await setup_cue_mod(project_path, ctx):
            return write_failed(CUE_MOD)
        generated.append(CUE_MOD)

    return CueGenerateOutput(
        success=True,
        resolved_features=resolved,
        generated=generated,
        skipped=skipped,
        message=f"Generated {len(generated)} files",
    )

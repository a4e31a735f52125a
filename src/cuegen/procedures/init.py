"""cue.init procedure.

Initialize dependencies.json with a preset.
"""

import logging

from cuegen.context import ProcedureContext
from cuegen.features import dependencies_path, load_features, save_dependencies
from cuegen.foundation.errors import ERROR_MESSAGES, ErrorCode
from cuegen.fs import file_exists, make_dir, write_file
from cuegen.types import CueInitInput, CueInitOutput

logger = logging.getLogger(__name__)

ENTRY_POINT = "src/index.ts"
ENTRY_POINT_CONTENT = "// Entry point\nexport {};\n"


async def cue_init(input: CueInitInput, ctx: ProcedureContext) -> CueInitOutput:
    """Initialize a project with dependencies.json, src/ and an entry stub."""
    project_path = ctx.project_path(input.cwd)
    preset_name = input.preset or ctx.config.default_preset
    created: list[str] = []

    manifest = await load_features(project_path, ctx)
    if manifest is None:
        return CueInitOutput(
            success=False,
            preset=preset_name,
            error=ERROR_MESSAGES[ErrorCode.MANIFEST_NOT_FOUND].format(
                package=ctx.config.package_name
            ),
        )

    preset = manifest.presets.get(preset_name)
    if preset is None:
        return CueInitOutput(
            success=False,
            preset=preset_name,
            error=ERROR_MESSAGES[ErrorCode.PRESET_UNKNOWN].format(
                preset=preset_name,
                available=", ".join(manifest.presets),
            ),
        )

    deps_path = dependencies_path(project_path, ctx)
    if await file_exists(deps_path, ctx.fs) and not input.force:
        return CueInitOutput(
            success=True,
            preset=preset_name,
            message=f"{deps_path.name} already exists (use force: true to overwrite)",
        )

    if not await save_dependencies(list(preset), project_path, ctx):
        return CueInitOutput(
            success=False,
            preset=preset_name,
            error=ERROR_MESSAGES[ErrorCode.FILE_WRITE_FAILED].format(path=deps_path.name),
        )
    created.append(deps_path.name)

    src_path = project_path / "src"
    if not await file_exists(src_path, ctx.fs) and await make_dir(src_path, ctx.fs):
        created.append("src/")

    index_path = project_path / ENTRY_POINT
    if not await file_exists(index_path, ctx.fs) and await write_file(
        index_path, ENTRY_POINT_CONTENT, ctx.fs
    ):
        created.append(ENTRY_POINT)

    logger.info("Initialized %s with preset '%s'", project_path, preset_name)
    return CueInitOutput(
        success=True,
        preset=preset_name,
        created=created,
        message=f"Initialized with preset '{preset_name}'. Run cue.generate to create config files.",
    )

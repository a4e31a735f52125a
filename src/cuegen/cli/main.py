"""Main CLI entry point.

One command per registered procedure:

    cuegen init [-p PRESET] [-f] [-C DIR]
    cuegen add FEATURE [-C DIR]
    cuegen remove FEATURE [-C DIR]
    cuegen generate [-C DIR]
    cuegen validate [-C DIR]

Every command prints its result as JSON on stdout and exits 1 when the
result reports ``success: false``.
"""

import json
import sys
from typing import Any

import click

from cuegen.cli.async_runner import async_command
from cuegen.cli.error_handler import handle_error
from cuegen.context import ProcedureContext
from cuegen.foundation.config import load_config
from cuegen.foundation.errors import CuegenError
from cuegen.foundation.logging import configure_logging
from cuegen.procedures.registry import PROCEDURES, Procedure, call_procedure
from cuegen.types import CamelModel


def cli_entrypoint() -> None:
    """Wrapped entrypoint with global error handling.

    Called from pyproject.toml [project.scripts].
    """
    try:
        rv = main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        sys.exit(130)
    except CuegenError as e:
        handle_error(e, json_output=False)
    if isinstance(rv, int):
        sys.exit(rv)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging on stderr")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file path (default: .cuegen/config.yaml)",
)
@click.version_option(package_name="cuegen")
@click.pass_context
def main(ctx: click.Context, debug: bool, config_path: str | None) -> None:
    """Manage a project's feature set and regenerate its config files with CUE."""
    ctx.ensure_object(dict)
    ctx.obj.setdefault("debug", debug)
    ctx.obj.setdefault("config_path", config_path)


def _build_context(obj: dict[str, Any], cwd: str | None) -> ProcedureContext:
    """Use an injected context if present, else load config for the project."""
    if isinstance(obj.get("context"), ProcedureContext):
        return obj["context"]

    config = load_config(obj.get("config_path"), project_path=cwd)
    configure_logging(debug=obj.get("debug", False), config_debug=config.debug)
    return ProcedureContext(config=config)


def _render_json(result: CamelModel) -> None:
    click.echo(json.dumps(result.to_output(), indent=2, ensure_ascii=False))


# Output mode (ProcedureMeta.output) -> renderer
_RENDERERS = {
    "json": _render_json,
}


def _build_params(procedure: Procedure) -> list[click.Parameter]:
    """Click parameters derived from the procedure's input model and meta."""
    params: list[click.Parameter] = []
    for name, info in procedure.input_model.model_fields.items():
        if name in procedure.meta.args:
            params.append(click.Argument([name], required=info.is_required()))
            continue

        decls = [f"--{name}"]
        if short := procedure.meta.shorts.get(name):
            decls.append(f"-{short}")
        if info.annotation is bool:
            params.append(click.Option(decls, is_flag=True, default=False, help=info.description))
        else:
            params.append(click.Option(decls, default=None, help=info.description))
    return params


def _build_command(procedure: Procedure) -> click.Command:
    @click.pass_context
    @async_command
    async def callback(ctx: click.Context, **kwargs: Any) -> None:
        raw = {key: value for key, value in kwargs.items() if value is not None}
        try:
            context = _build_context(ctx.obj or {}, raw.get("cwd"))
            result = await call_procedure(procedure.path, raw, context)
        except CuegenError as e:
            handle_error(e, json_output=procedure.meta.output == "json")

        _RENDERERS[procedure.meta.output](result)
        if not getattr(result, "success", False):
            ctx.exit(1)

    return click.Command(
        name=procedure.path[-1],
        callback=callback,
        params=_build_params(procedure),
        help=procedure.meta.description,
    )


for _procedure in PROCEDURES:
    main.add_command(_build_command(_procedure))


if __name__ == "__main__":
    cli_entrypoint()

"""Procedure table for cue operations.

Each procedure pairs a path (("cue", "init"), ...) with its input model, its
handler and the metadata the CLI needs to expose it: positional argument
names, short flags and the output rendering mode.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from cuegen.context import ProcedureContext
from cuegen.foundation.errors import CuegenError, ErrorCode
from cuegen.procedures.add import cue_add
from cuegen.procedures.generate import cue_generate
from cuegen.procedures.init import cue_init
from cuegen.procedures.remove import cue_remove
from cuegen.procedures.validate import cue_validate
from cuegen.types import (
    CamelModel,
    CueAddInput,
    CueGenerateInput,
    CueInitInput,
    CueRemoveInput,
    CueValidateInput,
)

InputT = TypeVar("InputT", bound=BaseModel)


# =============================================================================
# Schema Adapter (wraps pydantic validation into a path/message error list)
# =============================================================================


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One problem with a procedure's raw input."""

    path: tuple[str | int, ...]
    message: str

    def __str__(self) -> str:
        location = ".".join(str(part) for part in self.path) or "<input>"
        return f"{location}: {self.message}"


@dataclass(frozen=True, slots=True)
class ValidationOutcome(Generic[InputT]):
    """Either the parsed input or the list of issues that prevented parsing."""

    data: InputT | None = None
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def success(self) -> bool:
        return self.data is not None and not self.issues


def validate_input(model: type[InputT], raw: Mapping[str, Any]) -> ValidationOutcome[InputT]:
    """Parse raw procedure input, converting pydantic errors into ValidationIssues."""
    try:
        return ValidationOutcome(data=model.model_validate(dict(raw)))
    except ValidationError as e:
        issues = tuple(
            ValidationIssue(path=tuple(err["loc"]), message=err["msg"]) for err in e.errors()
        )
        return ValidationOutcome(issues=issues)


# =============================================================================
# Procedure Definitions
# =============================================================================


@dataclass(frozen=True, slots=True)
class ProcedureMeta:
    description: str
    args: tuple[str, ...] = ()
    """Input fields taken positionally on the command line."""
    shorts: dict[str, str] = field(default_factory=dict)
    """Input field -> single-letter flag."""
    output: str = "json"


@dataclass(frozen=True, slots=True)
class Procedure:
    path: tuple[str, ...]
    input_model: type[BaseModel]
    handler: Callable[[Any, ProcedureContext], Awaitable[CamelModel]]
    meta: ProcedureMeta

    @property
    def name(self) -> str:
        return ".".join(self.path)


PROCEDURES: tuple[Procedure, ...] = (
    Procedure(
        path=("cue", "init"),
        input_model=CueInitInput,
        handler=cue_init,
        meta=ProcedureMeta(
            description="Initialize dependencies.json with a preset",
            shorts={"preset": "p", "force": "f", "cwd": "C"},
        ),
    ),
    Procedure(
        path=("cue", "add"),
        input_model=CueAddInput,
        handler=cue_add,
        meta=ProcedureMeta(
            description="Add a feature to dependencies.json",
            args=("feature",),
            shorts={"cwd": "C"},
        ),
    ),
    Procedure(
        path=("cue", "remove"),
        input_model=CueRemoveInput,
        handler=cue_remove,
        meta=ProcedureMeta(
            description="Remove a feature from dependencies.json",
            args=("feature",),
            shorts={"cwd": "C"},
        ),
    ),
    Procedure(
        path=("cue", "generate"),
        input_model=CueGenerateInput,
        handler=cue_generate,
        meta=ProcedureMeta(
            description="Generate config files from dependencies.json",
            shorts={"cwd": "C"},
        ),
    ),
    Procedure(
        path=("cue", "validate"),
        input_model=CueValidateInput,
        handler=cue_validate,
        meta=ProcedureMeta(
            description="Validate dependencies.json",
            shorts={"cwd": "C"},
        ),
    ),
)


def get_procedure(path: tuple[str, ...] | str) -> Procedure:
    """Look up a procedure by path tuple or dotted name.

    Raises:
        CuegenError: If no procedure is registered at path
    """
    key = tuple(path.split(".")) if isinstance(path, str) else tuple(path)
    for procedure in PROCEDURES:
        if procedure.path == key:
            return procedure
    raise CuegenError(ErrorCode.PROCEDURE_NOT_FOUND, context={"procedure": ".".join(key)})


async def call_procedure(
    path: tuple[str, ...] | str,
    raw_input: Mapping[str, Any],
    ctx: ProcedureContext,
) -> CamelModel:
    """Validate raw input and run the procedure.

    Raises:
        CuegenError: INPUT_INVALID when the input does not match the schema
    """
    procedure = get_procedure(path)
    outcome = validate_input(procedure.input_model, raw_input)
    if not outcome.success:
        raise CuegenError(
            ErrorCode.INPUT_INVALID,
            context={
                "procedure": procedure.name,
                "detail": "; ".join(str(issue) for issue in outcome.issues),
                "issues": [
                    {"path": list(issue.path), "message": issue.message}
                    for issue in outcome.issues
                ],
            },
        )
    return await procedure.handler(outcome.data, ctx)

"""cue.* procedures: init, add, remove, generate, validate."""

from cuegen.procedures.add import cue_add
from cuegen.procedures.generate import cue_generate
from cuegen.procedures.init import cue_init
from cuegen.procedures.registry import (
    PROCEDURES,
    Procedure,
    ProcedureMeta,
    ValidationIssue,
    ValidationOutcome,
    call_procedure,
    get_procedure,
    validate_input,
)
from cuegen.procedures.remove import cue_remove
from cuegen.procedures.validate import cue_validate

__all__ = [
    "cue_init",
    "cue_add",
    "cue_remove",
    "cue_generate",
    "cue_validate",
    "PROCEDURES",
    "Procedure",
    "ProcedureMeta",
    "ValidationIssue",
    "ValidationOutcome",
    "call_procedure",
    "get_procedure",
    "validate_input",
]

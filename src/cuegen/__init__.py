"""cuegen - feature-driven config generation with CUE.

A project declares the features it uses in dependencies.json. cuegen resolves
their transitive closure against the features manifest and regenerates
package.json, tsconfig.json, .gitignore and cue.mod/ from CUE fragments,
keeping the user's own edits to package.json.
"""

from cuegen.context import ProcedureContext
from cuegen.evaluator import CueEvaluator, EvalResult, Evaluator
from cuegen.features import resolve_features
from cuegen.foundation.config import CuegenConfig, load_config
from cuegen.foundation.errors import CuegenError, ErrorCode
from cuegen.fs import FileSystem, LocalFileSystem
from cuegen.generation import determine_tsconfig, merge_package_json
from cuegen.procedures import (
    call_procedure,
    cue_add,
    cue_generate,
    cue_init,
    cue_remove,
    cue_validate,
)

__version__ = "0.1.0"

__all__ = [
    # Procedures
    "cue_init",
    "cue_add",
    "cue_remove",
    "cue_generate",
    "cue_validate",
    "call_procedure",
    "ProcedureContext",
    # Collaborators
    "Evaluator",
    "CueEvaluator",
    "EvalResult",
    "FileSystem",
    "LocalFileSystem",
    # Core logic
    "resolve_features",
    "merge_package_json",
    "determine_tsconfig",
    # Config / errors
    "CuegenConfig",
    "load_config",
    "CuegenError",
    "ErrorCode",
]

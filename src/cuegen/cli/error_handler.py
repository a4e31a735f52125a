"""CLI Error Handler.

Provides unified error handling for the CLI with support for:
- Human-readable output (default)
- JSON output for machine consumption
- Context-aware recovery suggestions
"""

import json
import shutil
import sys
from typing import NoReturn

from rich.console import Console
from rich.text import Text

from cuegen.foundation.errors import CuegenError, ErrorCode


def _get_context_aware_hints(error: CuegenError) -> list[str]:
    """Additional hints based on what is actually installed."""
    hints: list[str] = []

    if error.code in (ErrorCode.EVALUATOR_NOT_INSTALLED, ErrorCode.EVALUATOR_FAILED):
        binary = error.context.get("binary") or "cue"
        if shutil.which(binary) is None:
            hints.append(f"Detected: '{binary}' is not on PATH")

    return hints


def handle_error(
    error: CuegenError | Exception,
    json_output: bool = False,
) -> NoReturn:
    """Handle an error with optional JSON output for machine consumption.

    Args:
        error: The error to handle (CuegenError or generic Exception)
        json_output: If True, output JSON to stderr

    Raises:
        SystemExit: Always exits with code 1
    """
    if not isinstance(error, CuegenError):
        error = CuegenError(
            code=ErrorCode.RUNTIME_STATE_INVALID,
            context={"detail": str(error)},
            cause=error,
        )

    if json_output:
        error_dict = error.to_dict()
        if error.cause:
            error_dict["cause"] = str(error.cause)
        print(json.dumps(error_dict), file=sys.stderr)
        sys.exit(1)

    _print_human_error(error)
    sys.exit(1)


def _print_human_error(error: CuegenError) -> None:
    """Print error in human-readable format."""
    console = Console(stderr=True)

    header = Text()
    header.append("✗ ", style="bold")
    header.append(error.error_id, style="bold red")
    header.append(f" {error.message}")
    console.print(header)

    # Context-aware hints first, they're more specific
    all_hints = _get_context_aware_hints(error) + error.recovery_hints
    if all_hints:
        console.print("\n[bold]What you can do:[/]")
        for i, hint in enumerate(all_hints, 1):
            if hint.startswith("Detected:"):
                console.print(f"  [dim]{hint}[/]", markup=True, highlight=False)
            else:
                console.print(f"  {i}. {hint}", markup=False, highlight=False)

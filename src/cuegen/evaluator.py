"""External CUE evaluator.

The `cue` binary turns a set of fragment files into JSON (`cue eval`) and
checks data files against a schema definition (`cue vet`). Procedures depend
on the Evaluator protocol, so tests inject a fake instead of spawning
processes.

Calls are synchronous and block the pipeline until the process exits.
"""

import json
import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from cuegen.foundation.config import EvaluatorConfig
from cuegen.foundation.errors import CuegenError, ErrorCode, evaluator_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EvalResult:
    """Outcome of one evaluator invocation."""

    ok: bool
    """Whether the process exited 0 (and, for eval, produced valid JSON)."""

    data: Any = None
    """Parsed JSON output of `cue eval`."""

    diagnostics: str = ""
    """stderr (or stdout when stderr is empty) of a failed run."""

    status: int | None = None
    """Process exit status, None if the process never ran."""

    def error(self, binary: str = "cue") -> CuegenError | None:
        """Describe a failed run as a CuegenError, None when ok."""
        if self.ok:
            return None
        code = (
            ErrorCode.EVALUATOR_OUTPUT_INVALID
            if self.status == 0
            else ErrorCode.EVALUATOR_FAILED
        )
        return evaluator_error(code, binary=binary, status=self.status, detail=self.diagnostics)


@runtime_checkable
class Evaluator(Protocol):
    """Narrow interface onto the config-language evaluator."""

    def is_available(self) -> bool:
        """Whether the evaluator can be invoked at all."""
        ...

    def evaluate(self, files: Sequence[str], expression: str, cwd: Path) -> EvalResult:
        """Evaluate `files` (relative to cwd) and extract `expression` as JSON."""
        ...

    def vet(self, schema: Path, data: Path, definition: str) -> EvalResult:
        """Check `data` against `definition` declared in `schema`."""
        ...


class CueEvaluator:
    """Evaluator backed by the `cue` command line tool."""

    def __init__(self, config: EvaluatorConfig | None = None) -> None:
        self.config = config or EvaluatorConfig()

    @property
    def binary(self) -> str:
        return self.config.binary

    def _run(self, args: list[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
        cmd = [self.binary, *args]
        logger.debug("Running %s (cwd=%s)", " ".join(cmd), cwd)
        return subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=self.config.timeout,
        )

    def is_available(self) -> bool:
        try:
            result = self._run(["version"])
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.debug("%s not available: %s", self.binary, e)
            return False
        return result.returncode == 0

    def evaluate(self, files: Sequence[str], expression: str, cwd: Path) -> EvalResult:
        try:
            result = self._run(
                ["eval", *files, "-e", expression, "--out", "json"],
                cwd=cwd,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            return EvalResult(ok=False, diagnostics=str(e))

        if result.returncode != 0:
            return EvalResult(
                ok=False,
                diagnostics=result.stderr or result.stdout,
                status=result.returncode,
            )

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            return EvalResult(ok=False, diagnostics=str(e), status=result.returncode)
        return EvalResult(ok=True, data=data, status=result.returncode)

    def vet(self, schema: Path, data: Path, definition: str) -> EvalResult:
        try:
            result = self._run(["vet", "-d", definition, str(schema), str(data)])
        except (OSError, subprocess.TimeoutExpired) as e:
            return EvalResult(ok=False, diagnostics=str(e))

        if result.returncode != 0:
            return EvalResult(
                ok=False,
                diagnostics=result.stderr or result.stdout,
                status=result.returncode,
            )
        return EvalResult(ok=True, status=result.returncode)

"""Per-invocation context handed to every procedure."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from cuegen.evaluator import CueEvaluator, Evaluator
from cuegen.foundation.config import CuegenConfig
from cuegen.fs import FileSystem, LocalFileSystem


@dataclass(slots=True)
class ProcedureContext:
    """Collaborators a procedure may use.

    Built fresh for each command; nothing here outlives the invocation.
    """

    config: CuegenConfig = field(default_factory=CuegenConfig)
    fs: FileSystem = field(default_factory=LocalFileSystem)
    evaluator: Evaluator | None = None

    def __post_init__(self) -> None:
        if self.evaluator is None:
            self.evaluator = CueEvaluator(self.config.evaluator)

    def project_path(self, cwd: str | None) -> Path:
        """Absolute project directory for a procedure's `cwd` input."""
        return Path(cwd).expanduser().resolve() if cwd else Path(os.getcwd()).resolve()

    def features_root(self, project_path: Path) -> Path:
        return self.config.features_root_for(project_path)

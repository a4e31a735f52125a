"""Pytest fixtures for cuegen tests."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from cuegen.context import ProcedureContext
from cuegen.evaluator import EvalResult
from cuegen.foundation.config import CuegenConfig
from cuegen.fs import LocalFileSystem
from cuegen.types import FeaturesManifest

FEATURES_JSON: dict[str, Any] = {
    "features": {
        "ts": {"dependencies": []},
        "node": {"dependencies": ["ts"]},
        "node-cjs": {"dependencies": ["node"]},
        "vite": {"dependencies": ["ts"]},
        "react": {"dependencies": ["vite"]},
        "vite-react": {"dependencies": ["react", "vite"]},
        "cue": {"dependencies": []},
        "git": {"dependencies": []},
    },
    "presets": {
        "lib": ["node", "git"],
        "app": ["vite-react", "git"],
        "config": ["cue"],
    },
}

# Fragment files that exist in the fake features package
FRAGMENTS = {
    "npm/package": ["base.cue", "ts.cue", "node.cue", "viteReact.cue"],
    "git/ignore": ["base.cue", "node.cue", "vite-react.cue"],
    "dependencies": ["schema.cue"],
}


class FakeEvaluator:
    """Evaluator double: canned outputs per expression, records every call."""

    def __init__(
        self,
        available: bool = True,
        outputs: dict[str, Any] | None = None,
        vet_result: EvalResult | None = None,
    ) -> None:
        self.available = available
        self.outputs = outputs if outputs is not None else {
            "output": {
                "name": "generated-name",
                "version": "0.0.0",
                "type": "module",
                "scripts": {"build": "tsc"},
                "devDependencies": {"typescript": "^5.0.0"},
                "files": ["dist"],
            },
            "patterns": ["node_modules/", "dist/"],
        }
        self.vet_result = vet_result or EvalResult(ok=True, status=0)
        self.eval_calls: list[tuple[list[str], str, Path]] = []
        self.vet_calls: list[tuple[Path, Path, str]] = []

    def is_available(self) -> bool:
        return self.available

    def evaluate(self, files: Sequence[str], expression: str, cwd: Path) -> EvalResult:
        self.eval_calls.append((list(files), expression, cwd))
        output = self.outputs.get(expression)
        if output is None:
            return EvalResult(ok=False, diagnostics=f"{expression}: reference not found", status=1)
        return EvalResult(ok=True, data=output, status=0)

    def vet(self, schema: Path, data: Path, definition: str) -> EvalResult:
        self.vet_calls.append((schema, data, definition))
        return self.vet_result


class FailingWritesFileSystem(LocalFileSystem):
    """Local disk, except writes to the named files (all files if None) fail."""

    def __init__(self, fail_names: set[str] | None = None) -> None:
        self.fail_names = fail_names

    async def write(self, path: Path, content: str) -> int:
        if self.fail_names is None or path.name in self.fail_names:
            raise PermissionError(f"read-only: {path}")
        return await super().write(path, content)


@pytest.fixture
def features_root(tmp_path: Path) -> Path:
    """A features package on disk: features.json plus fragment trees."""
    root = tmp_path / "features"
    root.mkdir()
    (root / "features.json").write_text(json.dumps(FEATURES_JSON), encoding="utf-8")
    for directory, files in FRAGMENTS.items():
        (root / directory).mkdir(parents=True)
        for name in files:
            (root / directory / name).write_text("// fragment\n", encoding="utf-8")
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def manifest() -> FeaturesManifest:
    return FeaturesManifest.model_validate(FEATURES_JSON)


@pytest.fixture
def fake_evaluator() -> FakeEvaluator:
    return FakeEvaluator()


@pytest.fixture
def config(features_root: Path) -> CuegenConfig:
    return CuegenConfig(features_root=str(features_root))


@pytest.fixture
def ctx(config: CuegenConfig, fake_evaluator: FakeEvaluator) -> ProcedureContext:
    """Context wired to the fake features package and evaluator."""
    return ProcedureContext(config=config, evaluator=fake_evaluator)


@pytest.fixture
def write_deps(project: Path):
    """Write raw content to the project's dependencies.json."""

    def _write(content: Any) -> Path:
        path = project / "dependencies.json"
        path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def failing_writes(ctx: ProcedureContext):
    """Swap ctx.fs for one whose writes fail (for the given file names, or all)."""

    def _install(*names: str) -> FailingWritesFileSystem:
        ctx.fs = FailingWritesFileSystem(set(names) or None)
        return ctx.fs

    return _install

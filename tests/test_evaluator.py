"""Tests for the cue command line evaluator."""

import subprocess
from pathlib import Path

import pytest

from cuegen.evaluator import CueEvaluator, EvalResult, Evaluator
from cuegen.foundation.config import EvaluatorConfig
from cuegen.foundation.errors import ErrorCode


class FakeRun:
    """Stands in for subprocess.run, recording commands."""

    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "", raises=None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.raises = raises
        self.calls: list[dict] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append({"cmd": cmd, **kwargs})
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    run = FakeRun()
    monkeypatch.setattr("cuegen.evaluator.subprocess.run", run)
    return run


class TestEvalResult:
    """Tests for EvalResult.error."""

    def test_ok_has_no_error(self) -> None:
        assert EvalResult(ok=True, status=0).error() is None

    def test_nonzero_status(self) -> None:
        error = EvalResult(ok=False, diagnostics="boom", status=1).error("cue")

        assert error is not None
        assert error.code == ErrorCode.EVALUATOR_FAILED
        assert error.message == "'cue' exited with status 1: boom"

    def test_invalid_output(self) -> None:
        error = EvalResult(ok=False, diagnostics="bad json", status=0).error()

        assert error is not None
        assert error.code == ErrorCode.EVALUATOR_OUTPUT_INVALID


class TestCueEvaluator:
    """Tests for CueEvaluator against a faked subprocess."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(CueEvaluator(), Evaluator)

    def test_available(self, fake_run: FakeRun) -> None:
        assert CueEvaluator().is_available() is True
        assert fake_run.calls[0]["cmd"] == ["cue", "version"]

    def test_missing_binary(self, fake_run: FakeRun) -> None:
        fake_run.raises = FileNotFoundError("cue")

        assert CueEvaluator().is_available() is False

    def test_timeout_means_unavailable(self, fake_run: FakeRun) -> None:
        fake_run.raises = subprocess.TimeoutExpired(["cue", "version"], 1)

        assert CueEvaluator(EvaluatorConfig(timeout=1)).is_available() is False

    def test_evaluate_builds_command(self, fake_run: FakeRun, tmp_path: Path) -> None:
        fake_run.stdout = '{"name": "pkg"}'
        evaluator = CueEvaluator(EvaluatorConfig(binary="/opt/cue", timeout=5))

        result = evaluator.evaluate(["base.cue", "ts.cue"], "output", tmp_path)

        assert result == EvalResult(ok=True, data={"name": "pkg"}, status=0)
        call = fake_run.calls[0]
        assert call["cmd"] == [
            "/opt/cue", "eval", "base.cue", "ts.cue", "-e", "output", "--out", "json"
        ]
        assert call["cwd"] == tmp_path
        assert call["timeout"] == 5

    def test_evaluate_failure_keeps_stderr(self, fake_run: FakeRun, tmp_path: Path) -> None:
        fake_run.returncode = 1
        fake_run.stderr = "output: reference not found"

        result = CueEvaluator().evaluate(["base.cue"], "output", tmp_path)

        assert result.ok is False
        assert result.status == 1
        assert result.diagnostics == "output: reference not found"

    def test_evaluate_non_json_output(self, fake_run: FakeRun, tmp_path: Path) -> None:
        fake_run.stdout = "not json"

        result = CueEvaluator().evaluate(["base.cue"], "output", tmp_path)

        assert result.ok is False
        assert result.status == 0

    def test_evaluate_spawn_failure(self, fake_run: FakeRun, tmp_path: Path) -> None:
        fake_run.raises = FileNotFoundError("cue")

        result = CueEvaluator().evaluate(["base.cue"], "output", tmp_path)

        assert result.ok is False
        assert result.status is None

    def test_vet(self, fake_run: FakeRun, tmp_path: Path) -> None:
        schema, data = tmp_path / "schema.cue", tmp_path / "dependencies.json"

        result = CueEvaluator().vet(schema, data, "#Dependencies")

        assert result.ok is True
        assert fake_run.calls[0]["cmd"] == [
            "cue", "vet", "-d", "#Dependencies", str(schema), str(data)
        ]

    def test_vet_failure_falls_back_to_stdout(self, fake_run: FakeRun, tmp_path: Path) -> None:
        fake_run.returncode = 1
        fake_run.stdout = "dependencies.0: conflicting values"

        result = CueEvaluator().vet(tmp_path / "s.cue", tmp_path / "d.json", "#Dependencies")

        assert result.ok is False
        assert result.diagnostics == "dependencies.0: conflicting values"

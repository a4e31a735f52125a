"""Cuegen Error System.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- Recovery hints

Procedures never raise these for expected conditions; they return a result
model with ``success=False``. CuegenError is for misconfiguration and misuse
surfaced at the CLI boundary.
"""


from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        1xxx - Feature errors
        2xxx - Evaluator errors
        4xxx - Validation errors
        5xxx - Configuration errors
        6xxx - Runtime errors
        7xxx - IO errors
    """

    # 1xxx - Feature Errors
    FEATURE_UNKNOWN = 1001
    PRESET_UNKNOWN = 1002
    MANIFEST_NOT_FOUND = 1003
    DEPENDENCIES_NOT_FOUND = 1004

    # 2xxx - Evaluator Errors
    EVALUATOR_NOT_INSTALLED = 2001
    EVALUATOR_FAILED = 2002
    EVALUATOR_OUTPUT_INVALID = 2003

    # 4xxx - Validation Errors
    INPUT_INVALID = 4001

    # 5xxx - Configuration Errors
    CONFIG_INVALID = 5001
    CONFIG_UNREADABLE = 5002

    # 6xxx - Runtime Errors
    RUNTIME_STATE_INVALID = 6001
    PROCEDURE_NOT_FOUND = 6002

    # 7xxx - IO Errors
    FILE_WRITE_FAILED = 7002

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            1: "feature",
            2: "evaluator",
            4: "validation",
            5: "config",
            6: "runtime",
            7: "io",
        }.get(prefix, "unknown")

    @property
    def is_recoverable(self) -> bool:
        """Whether this error type is typically recoverable."""
        non_recoverable = {
            ErrorCode.CONFIG_INVALID,
            ErrorCode.CONFIG_UNREADABLE,
            ErrorCode.PROCEDURE_NOT_FOUND,
        }
        return self not in non_recoverable


ERROR_MESSAGES: dict[ErrorCode, str] = {
    # Feature errors
    ErrorCode.FEATURE_UNKNOWN: "Unknown feature: {feature}. Available: {available}",
    ErrorCode.PRESET_UNKNOWN: "Unknown preset: {preset}. Available: {available}",
    ErrorCode.MANIFEST_NOT_FOUND: "Could not load features.json from {package} package",
    ErrorCode.DEPENDENCIES_NOT_FOUND: "No dependencies.json found. Run cue.init first.",

    # Evaluator errors
    ErrorCode.EVALUATOR_NOT_INSTALLED: (
        "CUE is not installed. Install from: https://cuelang.org/docs/install/"
    ),
    ErrorCode.EVALUATOR_FAILED: "'{binary}' exited with status {status}: {detail}",
    ErrorCode.EVALUATOR_OUTPUT_INVALID: "'{binary}' produced invalid output: {detail}",

    # Validation errors
    ErrorCode.INPUT_INVALID: "Invalid input for '{procedure}': {detail}",

    # Config errors
    ErrorCode.CONFIG_INVALID: "Invalid configuration for '{key}': {detail}",
    ErrorCode.CONFIG_UNREADABLE: "Could not read configuration file '{path}': {detail}",

    # Runtime errors
    ErrorCode.RUNTIME_STATE_INVALID: "Invalid runtime state: {detail}",
    ErrorCode.PROCEDURE_NOT_FOUND: "No procedure registered at '{procedure}'.",

    # IO errors
    ErrorCode.FILE_WRITE_FAILED: "Failed to write {path}",
}


RECOVERY_HINTS: dict[ErrorCode, list[str]] = {
    ErrorCode.DEPENDENCIES_NOT_FOUND: [
        "Run 'cuegen init' in the project directory",
        "Pass the project directory with --cwd",
    ],
    ErrorCode.MANIFEST_NOT_FOUND: [
        "Install {package} into the project (npm install {package})",
        "Point features_root at a directory containing features.json",
    ],
    ErrorCode.EVALUATOR_NOT_INSTALLED: [
        "Install CUE from https://cuelang.org/docs/install/",
        "Set evaluator.binary in .cuegen/config.yaml if cue is not on PATH",
    ],
    ErrorCode.CONFIG_INVALID: [
        "Check .cuegen/config.yaml for typos",
        "Remove the offending key to fall back to the default",
    ],
    ErrorCode.CONFIG_UNREADABLE: [
        "Check the file is valid YAML",
    ],
}


class CuegenError(Exception):
    """Base error type for all cuegen errors.

    Example:
        >>> err = CuegenError(
        ...     code=ErrorCode.PRESET_UNKNOWN,
        ...     context={"preset": "web", "available": "lib, app"},
        ... )
        >>> print(err)
        [CG-1002] Unknown preset: web. Available: lib, app
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        super().__init__(str(self))

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES.get(self.code, "An error occurred: {detail}")
        try:
            return template.format(**self.context)
        except KeyError:
            return template

    @property
    def recovery_hints(self) -> list[str]:
        """Get recovery suggestions for this error."""
        formatted = []
        for hint in RECOVERY_HINTS.get(self.code, []):
            try:
                formatted.append(hint.format(**self.context))
            except KeyError:
                formatted.append(hint)
        return formatted

    @property
    def is_recoverable(self) -> bool:
        return self.code.is_recoverable

    @property
    def category(self) -> str:
        return self.code.category

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'CG-2001')."""
        return f"CG-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"CuegenError(code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for logging/JSON output."""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category,
            "message": self.message,
            "recoverable": self.is_recoverable,
            "recovery_hints": self.recovery_hints,
            "context": self.context,
        }


def config_error(
    code: ErrorCode,
    key: str = "",
    path: str = "",
    detail: str = "",
    cause: Exception | None = None,
) -> CuegenError:
    """Create a configuration error."""
    return CuegenError(
        code=code,
        context={"key": key, "path": path, "detail": detail},
        cause=cause,
    )


def evaluator_error(
    code: ErrorCode,
    binary: str,
    status: int | None = None,
    detail: str = "",
    cause: Exception | None = None,
) -> CuegenError:
    """Create an evaluator-related error."""
    return CuegenError(
        code=code,
        context={"binary": binary, "status": status, "detail": detail},
        cause=cause,
    )

"""Foundation layer: errors, logging and configuration."""

from cuegen.foundation.config import CuegenConfig, EvaluatorConfig, load_config
from cuegen.foundation.errors import (
    ERROR_MESSAGES,
    RECOVERY_HINTS,
    CuegenError,
    ErrorCode,
    config_error,
    evaluator_error,
)
from cuegen.foundation.logging import configure_logging

__all__ = [
    "CuegenConfig",
    "EvaluatorConfig",
    "load_config",
    "ErrorCode",
    "ERROR_MESSAGES",
    "RECOVERY_HINTS",
    "CuegenError",
    "config_error",
    "evaluator_error",
    "configure_logging",
]

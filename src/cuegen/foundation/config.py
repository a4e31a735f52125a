"""cuegen configuration management.

Loads configuration from .cuegen/config.yaml with sensible defaults.
All settings can be overridden via environment variables (CUEGEN_*).

Config locations (in priority order):
1. Explicit path passed to load_config()
2. <project>/.cuegen/config.yaml (project-local)
3. ~/.cuegen/config.yaml (user-global)
4. Built-in defaults

Configuration is loaded once per command and never cached across commands.
"""


import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cuegen.foundation.errors import ErrorCode, config_error

DEFAULT_PACKAGE_NAME = "@mark1russell7/cue"


@dataclass(frozen=True, slots=True)
class EvaluatorConfig:
    """Settings for the external CUE binary."""

    binary: str = "cue"
    """Executable name or absolute path."""

    timeout: float | None = None
    """Seconds before an evaluation is abandoned (None = wait forever)."""


@dataclass(frozen=True, slots=True)
class CuegenConfig:
    """Root configuration for cuegen."""

    package_name: str = DEFAULT_PACKAGE_NAME
    """npm package that ships features.json and the CUE fragments."""

    features_root: str | None = None
    """Directory holding features.json (None = <project>/node_modules/<package_name>)."""

    dependencies_file: str = "dependencies.json"
    """Name of the project's feature list, relative to the project root."""

    schema_reference: str | None = None
    """$schema written into dependencies.json (None = derived from package_name)."""

    default_preset: str = "lib"
    """Preset used by init when none is given."""

    evaluator: EvaluatorConfig = field(default_factory=EvaluatorConfig)
    """External evaluator settings."""

    debug: bool = False
    """Enable debug logging by default."""

    def features_root_for(self, project_path: Path) -> Path:
        """Directory containing features.json and the fragment trees."""
        if self.features_root:
            root = Path(self.features_root).expanduser()
            return root if root.is_absolute() else (project_path / root).resolve()
        return project_path / "node_modules" / Path(*self.package_name.split("/"))

    @property
    def dependencies_schema(self) -> str:
        """Schema reference written at the top of dependencies.json."""
        if self.schema_reference:
            return self.schema_reference
        return f"./node_modules/{self.package_name}/dependencies/schema.json"


# Environment variable -> (section, key); section None means top level
_ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "CUEGEN_PACKAGE_NAME": (None, "package_name"),
    "CUEGEN_FEATURES_ROOT": (None, "features_root"),
    "CUEGEN_DEPENDENCIES_FILE": (None, "dependencies_file"),
    "CUEGEN_SCHEMA_REFERENCE": (None, "schema_reference"),
    "CUEGEN_DEFAULT_PRESET": (None, "default_preset"),
    "CUEGEN_EVALUATOR_BINARY": ("evaluator", "binary"),
    "CUEGEN_EVALUATOR_TIMEOUT": ("evaluator", "timeout"),
}


def _deep_update(base: dict, updates: dict) -> dict:
    """Recursively update a dict with another dict."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def _coerce(value: str) -> Any:
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return float(value)
    except ValueError:
        return value


def _apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """Apply CUEGEN_* environment overrides.

    Examples:
        CUEGEN_FEATURES_ROOT=/opt/cue-features
        CUEGEN_EVALUATOR_TIMEOUT=30
    """
    for var, (section, key) in _ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if value is None:
            continue
        target = config_dict.setdefault(section, {}) if section else config_dict
        target[key] = _coerce(value) if key == "timeout" else value
    return config_dict


def _dict_to_config(data: dict[str, Any]) -> CuegenConfig:
    """Convert a dict to CuegenConfig."""
    evaluator_data = data.get("evaluator") or {}
    if not isinstance(evaluator_data, dict):
        raise config_error(
            ErrorCode.CONFIG_INVALID, key="evaluator", detail="expected a mapping"
        )

    top_level = {k: v for k, v in data.items() if k != "evaluator"}
    try:
        return CuegenConfig(evaluator=EvaluatorConfig(**evaluator_data), **top_level)
    except TypeError as e:
        raise config_error(ErrorCode.CONFIG_INVALID, key="config", detail=str(e), cause=e) from e


def _read_config_file(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path, encoding="utf-8") as f:
            content = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise config_error(
            ErrorCode.CONFIG_UNREADABLE, path=str(config_path), detail=str(e), cause=e
        ) from e
    if not isinstance(content, dict):
        raise config_error(
            ErrorCode.CONFIG_INVALID, key=str(config_path), detail="top level must be a mapping"
        )
    return content


def load_config(
    path: str | Path | None = None,
    project_path: str | Path | None = None,
) -> CuegenConfig:
    """Load configuration from file with defaults and env overrides.

    Priority (highest to lowest):
    1. Environment variables (CUEGEN_*)
    2. Explicit path if provided
    3. <project>/.cuegen/config.yaml (project-local)
    4. ~/.cuegen/config.yaml (user-global)
    5. Built-in defaults

    Args:
        path: Optional explicit config file path.
        project_path: Project root used to find the project-local file.

    Returns:
        Merged CuegenConfig instance.

    Raises:
        CuegenError: If the first config file found is unreadable or invalid.
    """
    config_dict: dict[str, Any] = asdict(CuegenConfig())

    project = Path(project_path) if project_path else Path.cwd()
    config_paths = []
    if path:
        config_paths.append(Path(path))
    config_paths.extend([
        project / ".cuegen" / "config.yaml",
        Path.home() / ".cuegen" / "config.yaml",
    ])

    for config_path in config_paths:
        if config_path.exists():
            _deep_update(config_dict, _read_config_file(config_path))
            break  # Use first found config

    config_dict = _apply_env_overrides(config_dict)
    return _dict_to_config(config_dict)

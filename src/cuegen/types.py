"""Types and schemas for cue procedures.

Reference data (features.json, dependencies.json) plus one input model and
one output model per procedure. Output models serialize with camelCase keys
so ``resolved_features`` is emitted as ``resolvedFeatures``.
"""

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class CamelModel(BaseModel):
    """Base model with camelCase JSON serialization."""

    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )

    def to_output(self) -> dict:
        """Dump for JSON rendering, dropping unset optional text fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


_CWD_HELP = "Project directory (default: current directory)"


# =============================================================================
# Shared Types
# =============================================================================


class FeatureDefinition(BaseModel):
    """A feature and its direct dependencies."""

    dependencies: list[str] = Field(default_factory=list)


class FeaturesManifest(BaseModel):
    """Contents of features.json shipped by the features package."""

    features: dict[str, FeatureDefinition]
    presets: dict[str, list[str]] = Field(default_factory=dict)


class DependenciesJson(BaseModel):
    """Canonical shape of a project's dependencies.json."""

    model_config = ConfigDict(populate_by_name=True)

    schema_ref: str | None = Field(default=None, alias="$schema")
    dependencies: list[str]


# =============================================================================
# cue.init
# =============================================================================


class CueInitInput(BaseModel):
    preset: str | None = Field(default=None, description="Preset to start from (default: lib)")
    force: bool = Field(default=False, description="Overwrite an existing dependencies.json")
    cwd: str | None = Field(default=None, description=_CWD_HELP)


class CueInitOutput(CamelModel):
    success: bool
    preset: str
    created: list[str] = Field(default_factory=list)
    message: str | None = None
    error: str | None = None


# =============================================================================
# cue.add
# =============================================================================


class CueAddInput(BaseModel):
    feature: str = Field(description="Feature to add")
    cwd: str | None = Field(default=None, description=_CWD_HELP)


class CueAddOutput(CamelModel):
    success: bool
    feature: str
    added: bool
    message: str | None = None
    error: str | None = None


# =============================================================================
# cue.remove
# =============================================================================


class CueRemoveInput(BaseModel):
    feature: str = Field(description="Feature to remove")
    cwd: str | None = Field(default=None, description=_CWD_HELP)


class CueRemoveOutput(CamelModel):
    success: bool
    feature: str
    removed: bool
    message: str | None = None
    error: str | None = None


# =============================================================================
# cue.generate
# =============================================================================


class CueGenerateInput(BaseModel):
    cwd: str | None = Field(default=None, description=_CWD_HELP)


class CueGenerateOutput(CamelModel):
    success: bool
    resolved_features: list[str] = Field(default_factory=list)
    generated: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    """Artifacts whose evaluation failed and were left untouched."""
    message: str | None = None
    error: str | None = None


# =============================================================================
# cue.validate
# =============================================================================


class CueValidateInput(BaseModel):
    cwd: str | None = Field(default=None, description=_CWD_HELP)


class CueValidateOutput(CamelModel):
    success: bool
    valid: bool
    features: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    message: str | None = None

"""Domain models for template context, traversal and materialization."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)


class TemplateContext(BaseModel):
    """Template variables loaded from a manifest.

    Required fields are plain strings. Any other top-level key, including
    one literally named ``extras``, is kept in ``extensions``. Dumping the
    model flattens ``extensions`` back to the top level, so a dump is a valid
    manifest and validates to an equal context.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_name: str = Field(..., description="Project slug, also used in paths")
    project_description: str = Field(..., description="Short project description")
    repository: str = Field(..., description="Repository URL")
    homepage: str = Field(..., description="Homepage URL")
    full_name: str = Field(..., description="Author full name")
    license: str = Field(..., description="License identifier")
    version: str = Field(..., description="Version string")
    email: str = Field(..., description="Contact email")
    extensions: dict[str, JsonValue] = Field(
        default_factory=dict, description="Open extension values"
    )

    @model_validator(mode="before")
    @classmethod
    def _collect_extensions(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        required = set(cls.model_fields) - {"extensions"}
        fields = {k: v for k, v in data.items() if k in required}
        fields["extensions"] = {k: v for k, v in data.items() if k not in required}
        return fields

    @model_serializer(mode="wrap")
    def _flatten_extensions(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        extensions = data.pop("extensions", None) or {}
        return {**extensions, **data}

    def as_render_context(self) -> dict[str, Any]:
        """Return the flat mapping handed to the template engine."""
        context: dict[str, Any] = self.model_dump()
        context.setdefault("project_slug", self.project_name)
        return context


class EntryKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"


class SourceEntry(BaseModel):
    """A classified path found under the template root."""

    model_config = ConfigDict(frozen=True)

    path: Path
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


class PlanAction(str, Enum):
    ENSURE_DIRECTORY = "ensure_directory"
    RENDER_FILE = "render_file"
    SKIP_MANIFEST = "skip_manifest"


class PlannedEntry(BaseModel):
    """A source entry paired with its resolved destination."""

    model_config = ConfigDict(frozen=True)

    source: SourceEntry
    destination: Path
    action: PlanAction
    is_root: bool = False


class FailureStage(str, Enum):
    RESOLVE = "resolve"
    READ = "read"
    RENDER = "render"
    DIRECTORY = "directory"
    WRITE = "write"


class EntryFailure(BaseModel):
    """A recoverable failure attached to a single template entry."""

    path: Path
    stage: FailureStage
    message: str


class RunReport(BaseModel):
    """Outcome of a materialization run."""

    created_directories: list[Path] = Field(default_factory=list)
    existing_directories: list[Path] = Field(default_factory=list)
    written_files: list[Path] = Field(default_factory=list)
    skipped_files: list[Path] = Field(default_factory=list)
    failures: list[EntryFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def record_failure(self, path: Path, stage: FailureStage, error: Exception) -> None:
        self.failures.append(EntryFailure(path=path, stage=stage, message=str(error)))

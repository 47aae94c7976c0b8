"""Data model for a scaffold run.

Templates, the classified target directory and the structured outcome that
the orchestrator hands back to its caller.  Templates and targets are
immutable pydantic models; the outcome is a plain dataclass built once per
run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from .errors import ScaffoldError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ScaffoldStage(str, Enum):
    """Stages of a scaffold run, in execution order."""

    MATERIALIZE = "materialize"
    GENERATE = "generate"
    INSTALL = "install"
    COMPLETE = "complete"


class TargetState(str, Enum):
    """Classification of a destination directory."""

    NOT_EXISTS = "not_exists"
    EMPTY_OR_ALLOWLISTED = "empty_or_allowlisted"
    CONFLICTING = "conflicting"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class TemplateRepo(BaseModel):
    """A template stored in a sub-directory of a hosted git repository."""

    model_config = ConfigDict(frozen=True)

    uri: str = Field(..., description="Repository URL, e.g. https://github.com/org/repo")
    branch: str = Field(default="master")
    path: str = Field(default="/", description="Sub-directory holding the template tree")

    @property
    def tarball_url(self) -> str:
        """URL of the gzipped tarball for ``branch``."""
        return f"{self.uri.rstrip('/')}/tarball/{self.branch}"

    @property
    def subpath(self) -> Path:
        """``path`` relative to the repository root."""
        return Path(self.path.strip("/"))


class Template(BaseModel):
    """A named starter whose file tree seeds a new project.

    Exactly one of ``repo`` or ``path`` locates the tree.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str = Field(default="")
    repo: TemplateRepo | None = None
    path: Path | None = None

    @model_validator(mode="after")
    def _check_single_source(self) -> "Template":
        if (self.repo is None) == (self.path is None):
            raise ValueError(
                f"Template {self.name!r} needs exactly one of 'repo' or 'path'"
            )
        return self

    @property
    def source_location(self) -> str:
        """Human-readable location of the template tree."""
        if self.repo is not None:
            return f"{self.repo.uri}#{self.repo.branch}:{self.repo.path}"
        return str(self.path)


# ---------------------------------------------------------------------------
# Target directory
# ---------------------------------------------------------------------------


class TargetDirectory(BaseModel):
    """Destination of a scaffold run, classified against the filesystem."""

    model_config = ConfigDict(frozen=True)

    path: Path
    state: TargetState
    conflicts: tuple[str, ...] = ()

    @property
    def exists(self) -> bool:
        return self.state is not TargetState.NOT_EXISTS

    @property
    def is_conflicting(self) -> bool:
        return self.state is TargetState.CONFLICTING


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------


@dataclass
class ScaffoldOutcome:
    """Result of one orchestration run.

    ``stage`` is ``COMPLETE`` when every attempted stage succeeded.  Otherwise
    it names the stage of the last failure and ``error`` holds that failure;
    ``failures`` keeps every stage failure in the order it happened.
    """

    target: Path
    stage: ScaffoldStage
    error: ScaffoldError | None = None
    failures: list[ScaffoldError] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.stage is ScaffoldStage.COMPLETE

    def failed(self, stage: ScaffoldStage) -> bool:
        """Return ``True`` if *stage* was attempted and failed."""
        return any(err.stage is stage for err in self.failures)

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": str(self.target),
            "stage": self.stage.value,
            "ok": self.ok,
            "error": self.error.to_dict() if self.error is not None else None,
            "failures": [err.to_dict() for err in self.failures],
            "files": len(self.files),
        }

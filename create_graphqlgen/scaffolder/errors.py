"""Error taxonomy for scaffolding.

Template lookup and directory conflicts are caller-side failures raised
before a run starts.  The remaining errors belong to a run stage and end up
in the ``ScaffoldOutcome`` instead of escaping the orchestrator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from .models import ScaffoldStage


class ScaffoldError(Exception):
    """Base class for every scaffolding failure."""

    code: str = "SCAFFOLD_ERROR"
    stage: ScaffoldStage | None = None

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "stage": self.stage.value if self.stage is not None else None,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Caller-side (precondition) errors
# ---------------------------------------------------------------------------


class TemplateNotFoundError(ScaffoldError):
    """Raised when a template name is not in the registry."""

    code = "TEMPLATE_NOT_FOUND"

    def __init__(self, name: str, available: Sequence[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(
            f"Unknown template {name!r}. Available templates: {', '.join(self.available)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "name": self.name, "available": self.available}


class DirectoryConflictError(ScaffoldError):
    """Raised when the target holds files and the run is not forced."""

    code = "DIRECTORY_CONFLICT"

    def __init__(self, path: Path, conflicts: Sequence[str]) -> None:
        self.path = Path(path)
        self.conflicts = list(conflicts)
        super().__init__(f"Directory {self.path} must be empty")

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "path": str(self.path), "conflicts": self.conflicts}


# ---------------------------------------------------------------------------
# Stage errors
# ---------------------------------------------------------------------------


class DirectoryCreateError(ScaffoldError):
    """The target directory could not be created."""

    code = "DIRECTORY_CREATE_FAILED"
    stage = ScaffoldStage.MATERIALIZE

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Could not create {self.path}: {reason}")


class MaterializationError(ScaffoldError):
    """The template tree could not be fetched or copied."""

    code = "MATERIALIZATION_FAILED"
    stage = ScaffoldStage.MATERIALIZE


class CommandError(ScaffoldError):
    """An external command run against the target did not succeed."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            **super().to_dict(),
            "command": self.command,
            "returncode": self.returncode,
            "output": self.output,
        }


class GenerationError(CommandError):
    """Model generation failed."""

    code = "GENERATION_FAILED"
    stage = ScaffoldStage.GENERATE


class InstallationError(CommandError):
    """Dependency installation failed."""

    code = "INSTALLATION_FAILED"
    stage = ScaffoldStage.INSTALL

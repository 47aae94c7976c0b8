"""External commands run against a scaffolded project.

``ModelGenerator`` runs graphqlgen and ``DependencyInstaller`` installs the
project's npm dependencies.  Both are single-attempt: a non-zero exit, a
timeout or a missing executable raises the stage's error and the
orchestrator decides what happens next.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Protocol

from create_graphqlgen.utils import run_command

from .errors import CommandError, GenerationError, InstallationError

PACKAGE_MANAGERS = ("yarn", "npm")


class StageInvoker(Protocol):
    """A post-materialization step run against the target directory."""

    async def invoke(self, target_path: Path) -> None:
        """Run the step in *target_path*; raise on failure."""
        ...


def detect_package_manager(preference: str = "auto") -> str:
    """Pick the package manager to drive.

    ``"yarn"`` and ``"npm"`` are returned as-is.  ``"auto"`` prefers yarn
    when it is on ``PATH`` and falls back to npm.
    """
    if preference in PACKAGE_MANAGERS:
        return preference
    if preference != "auto":
        raise ValueError(
            f"Unknown package manager {preference!r} (expected auto, yarn or npm)"
        )
    return "yarn" if shutil.which("yarn") else "npm"


class _CommandInvoker:
    """Runs one command in the target and maps failures to ``error_cls``."""

    error_cls: type[CommandError] = CommandError
    label = "command"

    def __init__(self, package_manager: str = "auto", timeout: int = 300) -> None:
        self.package_manager = package_manager
        self.timeout = timeout

    def command(self) -> list[str]:
        raise NotImplementedError

    async def invoke(self, target_path: Path) -> None:
        cmd = self.command()
        try:
            returncode, stdout, stderr = await run_command(
                cmd, cwd=target_path, timeout=self.timeout
            )
        except FileNotFoundError as exc:
            raise self.error_cls(
                f"{self.label} failed: {cmd[0]} is not installed",
                command=cmd,
            ) from exc

        if returncode != 0:
            output = stderr or stdout
            raise self.error_cls(
                f"{self.label} failed: `{' '.join(cmd)}` exited with code {returncode}",
                command=cmd,
                returncode=returncode,
                output=output,
            )


class ModelGenerator(_CommandInvoker):
    """Generates resolver types and scaffolds with graphqlgen."""

    error_cls = GenerationError
    label = "Model generation"

    def command(self) -> list[str]:
        if detect_package_manager(self.package_manager) == "yarn":
            return ["yarn", "graphqlgen"]
        return ["npx", "graphqlgen"]


class DependencyInstaller(_CommandInvoker):
    """Installs the project's dependencies with yarn or npm."""

    error_cls = InstallationError
    label = "Dependency installation"

    def __init__(self, package_manager: str = "auto", timeout: int = 600) -> None:
        super().__init__(package_manager=package_manager, timeout=timeout)

    def command(self) -> list[str]:
        return [detect_package_manager(self.package_manager), "install"]

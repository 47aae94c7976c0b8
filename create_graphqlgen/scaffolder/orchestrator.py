"""Scaffold orchestrator.

Drives one scaffold run through its stages:

MATERIALIZE -- create the target if needed, fetch the template, copy the tree.
GENERATE    -- run model generation (optional).
INSTALL     -- install dependencies (optional).

Materialization failures end the run.  Generation and installation are
independent: a failed generation is recorded and installation still runs.
Stage failures never escape ``run``; they are reported in the returned
``ScaffoldOutcome``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path

from create_graphqlgen.config import ScaffoldConfig

from .errors import (
    CommandError,
    DirectoryConflictError,
    DirectoryCreateError,
    GenerationError,
    InstallationError,
    MaterializationError,
    ScaffoldError,
)
from .fetcher import TemplateFetcher
from .invokers import DependencyInstaller, ModelGenerator, StageInvoker
from .materialize import copy_tree
from .models import ScaffoldOutcome, ScaffoldStage, TargetDirectory, TargetState, Template


class ScaffoldOrchestrator:
    """Runs materialization, generation and installation for one target.

    Attributes:
        fetcher: Resolves a template to a local directory.
        generator: Model generation step.
        installer: Dependency installation step.
        max_copy_workers: Concurrent file copies during materialization.
    """

    def __init__(
        self,
        fetcher: TemplateFetcher | None = None,
        generator: StageInvoker | None = None,
        installer: StageInvoker | None = None,
        max_copy_workers: int = 8,
    ) -> None:
        self.fetcher = fetcher or TemplateFetcher()
        self.generator = generator or ModelGenerator()
        self.installer = installer or DependencyInstaller()
        self.max_copy_workers = max_copy_workers

    async def run(
        self,
        template: Template,
        target: TargetDirectory,
        config: ScaffoldConfig,
        force: bool = False,
    ) -> ScaffoldOutcome:
        """Scaffold *template* into *target*.

        The target's state is taken as given; it is not re-read from disk.

        Raises:
            DirectoryConflictError: *target* is conflicting and *force* is not
                set.  Callers are expected to reject this case themselves.
        """
        if target.state is TargetState.CONFLICTING and not force:
            raise DirectoryConflictError(target.path, target.conflicts)

        outcome = ScaffoldOutcome(target=target.path, stage=ScaffoldStage.MATERIALIZE)

        # 1. Materialize
        if target.state is TargetState.NOT_EXISTS:
            try:
                target.path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                return _fail(outcome, DirectoryCreateError(target.path, exc.strerror or str(exc)))

        try:
            outcome.files = await self._materialize(template, target.path)
        except MaterializationError as exc:
            return _fail(outcome, exc)

        # 2. Generate
        if config.generate_models:
            await self._attempt(outcome, self.generator.invoke, target.path, GenerationError)

        # 3. Install
        if config.install_dependencies:
            await self._attempt(outcome, self.installer.invoke, target.path, InstallationError)

        # COMPLETE means no attempted stage failed
        if outcome.error is None:
            outcome.stage = ScaffoldStage.COMPLETE
        return outcome

    async def _materialize(self, template: Template, destination: Path) -> list[Path]:
        try:
            async with self.fetcher.fetch(template) as source:
                return await copy_tree(source, destination, max_workers=self.max_copy_workers)
        except MaterializationError:
            raise
        except OSError as exc:
            raise MaterializationError(
                f"Could not copy template {template.name!r} into {destination}: {exc}"
            ) from exc

    async def _attempt(
        self,
        outcome: ScaffoldOutcome,
        step: Callable[[Path], Awaitable[None]],
        target_path: Path,
        error_cls: type[CommandError],
    ) -> None:
        """Run an optional stage and record its failure on *outcome*."""
        try:
            await step(target_path)
        except error_cls as exc:
            _record(outcome, exc)
        except Exception as exc:
            err = error_cls(f"{error_cls.stage.value} step raised {type(exc).__name__}: {exc}")
            err.__cause__ = exc
            _record(outcome, err)


def _record(outcome: ScaffoldOutcome, error: ScaffoldError) -> None:
    outcome.failures.append(error)
    outcome.stage = error.stage
    outcome.error = error


def _fail(outcome: ScaffoldOutcome, error: ScaffoldError) -> ScaffoldOutcome:
    _record(outcome, error)
    return outcome

"""Caller boundary for a scaffold run.

Turns a ``ScaffoldRequest`` (however it was gathered: flags, environment or a
config file) into a resolved template and a classified target, rejects the
two precondition failures, and hands off to the orchestrator.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from create_graphqlgen.config import Config, ScaffoldConfig
from create_graphqlgen.scaffolder import (
    DependencyInstaller,
    DirectoryConflictError,
    ModelGenerator,
    ScaffoldOrchestrator,
    ScaffoldOutcome,
    TemplateFetcher,
    TemplateRegistry,
    classify_directory,
    default_registry,
)


class ScaffoldRequest(BaseModel):
    """Everything needed to start one scaffold run."""

    target_path: Path
    template_name: str | None = Field(default=None, description="None selects the default template")
    force: bool = Field(default=False, description="Scaffold into a non-empty directory")
    config: ScaffoldConfig = Field(default_factory=ScaffoldConfig)


def build_orchestrator(config: Config) -> ScaffoldOrchestrator:
    """Assemble an orchestrator whose fetcher and invokers follow *config*."""
    commands = config.commands
    return ScaffoldOrchestrator(
        fetcher=TemplateFetcher(timeout=commands.download_timeout),
        generator=ModelGenerator(
            package_manager=commands.package_manager,
            timeout=commands.generate_timeout,
        ),
        installer=DependencyInstaller(
            package_manager=commands.package_manager,
            timeout=commands.install_timeout,
        ),
        max_copy_workers=commands.max_copy_workers,
    )


async def scaffold(
    request: ScaffoldRequest,
    registry: TemplateRegistry | None = None,
    orchestrator: ScaffoldOrchestrator | None = None,
) -> ScaffoldOutcome:
    """Resolve, validate and run.

    Raises:
        TemplateNotFoundError: ``request.template_name`` is not in *registry*.
        DirectoryConflictError: The target holds other files and
            ``request.force`` is not set.
    """
    registry = registry or default_registry()
    orchestrator = orchestrator or build_orchestrator(Config())

    template = registry.resolve(request.template_name)
    target = classify_directory(request.target_path)
    if target.is_conflicting and not request.force:
        raise DirectoryConflictError(target.path, target.conflicts)

    return await orchestrator.run(template, target, request.config, force=request.force)

"""create-graphqlgen scaffolder -- materializes starter templates.

Resolves a template from a ``TemplateRegistry``, classifies the target
directory, then lets the ``ScaffoldOrchestrator`` copy the template tree and
run the optional generation and installation steps.

Quick usage::

    from create_graphqlgen.config import ScaffoldConfig
    from create_graphqlgen.scaffolder import (
        ScaffoldOrchestrator,
        classify_directory,
        default_registry,
    )

    template = default_registry().resolve("typescript-yoga")
    target = classify_directory("./my-server")
    outcome = await ScaffoldOrchestrator().run(template, target, ScaffoldConfig())
"""

from create_graphqlgen.scaffolder.errors import (
    CommandError,
    DirectoryConflictError,
    DirectoryCreateError,
    GenerationError,
    InstallationError,
    MaterializationError,
    ScaffoldError,
    TemplateNotFoundError,
)
from create_graphqlgen.scaffolder.fetcher import TemplateFetcher
from create_graphqlgen.scaffolder.invokers import (
    DependencyInstaller,
    ModelGenerator,
    StageInvoker,
    detect_package_manager,
)
from create_graphqlgen.scaffolder.materialize import copy_tree
from create_graphqlgen.scaffolder.models import (
    ScaffoldOutcome,
    ScaffoldStage,
    TargetDirectory,
    TargetState,
    Template,
    TemplateRepo,
)
from create_graphqlgen.scaffolder.orchestrator import ScaffoldOrchestrator
from create_graphqlgen.scaffolder.registry import (
    BUILTIN_TEMPLATES,
    DEFAULT_TEMPLATE_NAME,
    TemplateRegistry,
    default_registry,
)
from create_graphqlgen.scaffolder.validator import ALLOWED_ENTRIES, classify_directory

__all__ = [
    "ALLOWED_ENTRIES",
    "BUILTIN_TEMPLATES",
    "DEFAULT_TEMPLATE_NAME",
    "CommandError",
    "DependencyInstaller",
    "DirectoryConflictError",
    "DirectoryCreateError",
    "GenerationError",
    "InstallationError",
    "MaterializationError",
    "ModelGenerator",
    "ScaffoldError",
    "ScaffoldOrchestrator",
    "ScaffoldOutcome",
    "ScaffoldStage",
    "StageInvoker",
    "TargetDirectory",
    "TargetState",
    "Template",
    "TemplateFetcher",
    "TemplateNotFoundError",
    "TemplateRegistry",
    "TemplateRepo",
    "classify_directory",
    "copy_tree",
    "default_registry",
    "detect_package_manager",
]

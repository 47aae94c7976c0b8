"""Command-line entry point.

Usage::

    create-graphqlgen my-server
    create-graphqlgen my-server --template flow-yoga --no-install
    create-graphqlgen . --force
    python -m create_graphqlgen.cli --list

Flags override the ``CREATE_GRAPHQLGEN_*`` environment variables.  The exit
status is 0 only when every attempted stage succeeded.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from create_graphqlgen.config import Config, ScaffoldConfig
from create_graphqlgen.scaffolder import (
    DirectoryConflictError,
    ScaffoldOutcome,
    ScaffoldStage,
    TemplateNotFoundError,
    TemplateRegistry,
    default_registry,
    detect_package_manager,
)
from create_graphqlgen.starter import ScaffoldRequest, build_orchestrator, scaffold
from create_graphqlgen.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser(registry: TemplateRegistry) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-graphqlgen",
        description="Scaffolds the initial files of a graphqlgen project.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-graphqlgen my-server\n"
            "  create-graphqlgen my-server -t flow-yoga --no-install\n"
            "  create-graphqlgen . --force\n"
        ),
    )
    parser.add_argument("dir", nargs="?", help="Directory to scaffold into")
    parser.add_argument(
        "--template", "-t",
        default=None,
        help=f"Template to use ({', '.join(registry.names)}). Default: {registry.default.name}",
    )
    parser.add_argument("--no-install", action="store_true", help="Skip dependency installation")
    parser.add_argument("--no-generate", action="store_true", help="Skip model generation")
    parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing files")
    parser.add_argument("--list", action="store_true", help="List available templates and exit")
    return parser


def resolve_config(args: argparse.Namespace, base: Config) -> Config:
    """Apply command-line flags on top of *base*."""
    scaffold_config = ScaffoldConfig(
        install_dependencies=base.scaffold.install_dependencies and not args.no_install,
        generate_models=base.scaffold.generate_models and not args.no_generate,
    )
    return base.model_copy(
        update={
            "template": args.template if args.template is not None else base.template,
            "scaffold": scaffold_config,
        }
    )


def print_templates(registry: TemplateRegistry) -> None:
    console.print("\n[bold]Available templates:[/bold]\n")
    for template in registry:
        marker = " (default)" if template.name == registry.default.name else ""
        console.print(f"  [cyan]{template.name}[/cyan]{marker}")
        console.print(f"    {escape(template.description)}")
        console.print(f"    [dim]{escape(template.source_location)}[/dim]")
    console.print()


def print_outcome(outcome: ScaffoldOutcome, config: Config) -> None:
    """Summarise *outcome* and tell the user what to do next."""
    package_manager = detect_package_manager(config.commands.package_manager)

    def _status(stage: ScaffoldStage, enabled: bool) -> str:
        if outcome.failed(stage):
            return "failed"
        if not enabled:
            return "skipped"
        if outcome.stage is ScaffoldStage.MATERIALIZE:
            return "not run"
        return "done"

    print_summary_table(
        {
            "Directory": str(outcome.target),
            "Files": str(len(outcome.files)),
            "Materialize": "failed" if outcome.failed(ScaffoldStage.MATERIALIZE) else "done",
            "Generate": _status(ScaffoldStage.GENERATE, config.scaffold.generate_models),
            "Install": _status(ScaffoldStage.INSTALL, config.scaffold.install_dependencies),
        },
        title="Scaffold Results",
    )

    for failure in outcome.failures:
        print_error(escape(failure.message))
        output = getattr(failure, "output", "")
        if output:
            console.print(f"[dim]{escape(output[-2000:])}[/dim]")

    if outcome.failed(ScaffoldStage.MATERIALIZE):
        return

    generate_cmd = "yarn graphqlgen" if package_manager == "yarn" else "npx graphqlgen"
    steps = [f"cd {_display_path(outcome.target)}"]
    if not config.scaffold.install_dependencies or outcome.failed(ScaffoldStage.INSTALL):
        steps.append(f"{package_manager} install")
    if not config.scaffold.generate_models or outcome.failed(ScaffoldStage.GENERATE):
        steps.append(generate_cmd)
    steps.append(f"{package_manager} start")

    console.print("\n[bold]Next steps:[/bold]")
    for step in steps:
        console.print(f"  {escape(step)}")
    console.print()


def _display_path(path: Path) -> str:
    try:
        return os.path.relpath(path) or "."
    except ValueError:
        return str(path)


async def _run(args: argparse.Namespace, config: Config, registry: TemplateRegistry) -> int:
    request = ScaffoldRequest(
        target_path=Path(args.dir),
        template_name=config.template or None,
        force=args.force,
        config=config.scaffold,
    )

    try:
        template = registry.resolve(request.template_name)
    except TemplateNotFoundError as exc:
        print_error(f"Unknown template {escape(exc.name)!r}. Available templates: {', '.join(exc.available)}")
        return 1

    console.print(
        Panel(
            f"[bold bright_cyan]create-graphqlgen[/bold bright_cyan]\n"
            f"Template : {template.name}\n"
            f"Target   : {escape(str(request.target_path.expanduser().absolute()))}\n"
            f"Generate : {'yes' if config.scaffold.generate_models else 'no'}\n"
            f"Install  : {'yes' if config.scaffold.install_dependencies else 'no'}",
            title="[bold]Scaffold[/bold]",
            border_style="bright_cyan",
        )
    )

    try:
        outcome = await scaffold(
            request,
            registry=registry,
            orchestrator=build_orchestrator(config),
        )
    except DirectoryConflictError as exc:
        print_error(f"Directory {escape(str(exc.path))} must be empty.")
        print_warning(f"Conflicting entries: {escape(', '.join(exc.conflicts))}")
        console.print("Use [bold]--force[/bold] to scaffold into it anyway.")
        return 1
    except OSError as exc:
        reason = exc.strerror or str(exc)
        print_error(f"Could not inspect {escape(str(request.target_path))}: {escape(reason)}")
        return 1

    print_outcome(outcome, config)

    if outcome.ok:
        print_success("Project scaffolded successfully!")
        return 0

    print_error(f"Scaffolding did not complete (failed at stage: {outcome.stage.value}).")
    return 1


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-graphqlgen``."""
    registry = default_registry()
    parser = build_parser(registry)
    args = parser.parse_args(argv)

    if args.list:
        print_templates(registry)
        return

    if not args.dir:
        print_error("Error: missing target directory.")
        parser.print_usage()
        sys.exit(1)

    try:
        config = resolve_config(args, Config.from_env())
    except ValueError as exc:
        print_error(f"Error: invalid configuration: {escape(str(exc))}")
        sys.exit(1)

    exit_code = asyncio.run(_run(args, config, registry))
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()

"""create-graphqlgen configuration.

Typed configuration for a scaffold run.  All settings are Pydantic v2 models
so they are validated at construction time and can be round-tripped through
JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "CREATE_GRAPHQLGEN_"

_TRUTHY = {"1", "true", "yes", "on"}


class ScaffoldConfig(BaseModel):
    """Which optional stages a scaffold run performs.

    The two flags are independent; neither implies the other.
    """

    model_config = ConfigDict(frozen=True)

    install_dependencies: bool = Field(default=True)
    generate_models: bool = Field(default=True)


class CommandConfig(BaseModel):
    """Tuning knobs for downloads, copies and external commands."""

    package_manager: Literal["auto", "yarn", "npm"] = Field(default="auto")
    install_timeout: int = Field(default=600, ge=10, description="Dependency install timeout in seconds")
    generate_timeout: int = Field(default=300, ge=10, description="Model generation timeout in seconds")
    download_timeout: int = Field(default=60, ge=5, description="Template download timeout in seconds")
    max_copy_workers: int = Field(default=8, ge=1, description="Concurrent file copies")


class Config(BaseModel):
    """Global create-graphqlgen configuration.

    Built once by the CLI (from the environment, then overridden by flags)
    and used to assemble the orchestrator and the per-run ``ScaffoldConfig``.
    """

    template: str = Field(default="", description="Template name; empty selects the default")
    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)
    commands: CommandConfig = Field(default_factory=CommandConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional, prefixed ``CREATE_GRAPHQLGEN_``):
            TEMPLATE, NO_INSTALL, NO_GENERATE, PACKAGE_MANAGER,
            INSTALL_TIMEOUT, GENERATE_TIMEOUT, DOWNLOAD_TIMEOUT,
            MAX_COPY_WORKERS.
        """
        command_kwargs: dict[str, Any] = {}
        if _env("PACKAGE_MANAGER"):
            command_kwargs["package_manager"] = _env("PACKAGE_MANAGER")
        for key in ("install_timeout", "generate_timeout", "download_timeout", "max_copy_workers"):
            value = _env(key.upper())
            if value:
                command_kwargs[key] = int(value)

        return cls(
            template=_env("TEMPLATE"),
            scaffold=ScaffoldConfig(
                install_dependencies=not _env_flag("NO_INSTALL"),
                generate_models=not _env_flag("NO_GENERATE"),
            ),
            commands=CommandConfig(**command_kwargs),
        )


def _env(name: str) -> str:
    return os.environ.get(f"{ENV_PREFIX}{name}", "").strip()


def _env_flag(name: str) -> bool:
    return _env(name).lower() in _TRUTHY

"""Catalog of starter templates.

A ``TemplateRegistry`` is an explicit value built by the caller, so tests
can swap in synthetic catalogs.  ``default_registry()`` returns a fresh one
populated with the built-in graphqlgen starters.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .errors import TemplateNotFoundError
from .models import Template, TemplateRepo

# ---------------------------------------------------------------------------
# Built-in templates
# ---------------------------------------------------------------------------

GRAPHQLGEN_REPO_URI = "https://github.com/prisma/graphqlgen"

TYPESCRIPT_YOGA = Template(
    name="typescript-yoga",
    description="GraphQL Yoga server written in TypeScript",
    repo=TemplateRepo(
        uri=GRAPHQLGEN_REPO_URI,
        branch="master",
        path="/packages/graphqlgen-templates/typescript-yoga",
    ),
)

FLOW_YOGA = Template(
    name="flow-yoga",
    description="GraphQL Yoga server written in JavaScript with Flow types",
    repo=TemplateRepo(
        uri=GRAPHQLGEN_REPO_URI,
        branch="master",
        path="/packages/graphqlgen-templates/flow-yoga",
    ),
)

BUILTIN_TEMPLATES: tuple[Template, ...] = (TYPESCRIPT_YOGA, FLOW_YOGA)
DEFAULT_TEMPLATE_NAME = TYPESCRIPT_YOGA.name


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TemplateRegistry:
    """Immutable name → ``Template`` catalog with one designated default."""

    def __init__(self, templates: Iterable[Template], default: str) -> None:
        self._templates: dict[str, Template] = {}
        for template in templates:
            if template.name in self._templates:
                raise ValueError(f"Duplicate template name: {template.name!r}")
            self._templates[template.name] = template

        if default not in self._templates:
            raise ValueError(
                f"Default template {default!r} is not in the catalog "
                f"({', '.join(self._templates) or 'empty'})"
            )
        self._default = default

    @property
    def default(self) -> Template:
        return self._templates[self._default]

    @property
    def names(self) -> list[str]:
        """Template names in catalog order."""
        return list(self._templates)

    def get(self, name: str) -> Template | None:
        return self._templates.get(name)

    def resolve(self, name: str | None = None) -> Template:
        """Return the template called *name*, or the default when no name is given.

        Matching is exact and case-sensitive.

        Raises:
            TemplateNotFoundError: *name* is not in the catalog.
        """
        if not name:
            return self.default

        template = self._templates.get(name)
        if template is None:
            raise TemplateNotFoundError(name, self.names)
        return template

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)


def default_registry() -> TemplateRegistry:
    """Build a registry holding the built-in templates."""
    return TemplateRegistry(BUILTIN_TEMPLATES, default=DEFAULT_TEMPLATE_NAME)

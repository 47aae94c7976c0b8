"""Shared pytest fixtures for the create-graphqlgen test suite.

Provides reusable fixtures for:
- A small on-disk starter template
- Registries built from synthetic catalogs
- Mocked generation / installation invokers
- In-memory tarballs shaped like hosted repository archives
"""

from __future__ import annotations

import io
import tarfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_graphqlgen.scaffolder import Template, TemplateRegistry


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------

TEMPLATE_FILES: dict[str, str] = {
    "package.json": '{\n  "name": "typescript-yoga",\n  "scripts": {"start": "ts-node src/index.ts"}\n}\n',
    "graphqlgen.yml": "language: typescript\nschema: ./src/schema.graphql\n",
    "tsconfig.json": '{\n  "compilerOptions": {"strict": true}\n}\n',
    "src/index.ts": "import { GraphQLServer } from 'graphql-yoga'\n",
    "src/schema.graphql": "type Query {\n  hello(name: String): String!\n}\n",
    "src/resolvers/Query.ts": "export const Query = { hello: () => 'world' }\n",
    "src/resolvers/index.ts": "export { Query } from './Query'\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write *files* (relative path -> content) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def snapshot_tree(root: Path) -> dict[str, str]:
    """Map every regular file under *root* (relative path) to its content."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file() and ".git" not in p.relative_to(root).parts
    }


def make_tarball(files: dict[str, str], prefix: str = "prisma-graphqlgen-1a2b3c4") -> bytes:
    """Build a gzipped tarball whose entries live under a single *prefix* folder."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for rel, content in files.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(name=f"{prefix}/{rel}")
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A starter template tree on disk."""
    return write_tree(tmp_path / "templates" / "typescript-yoga", TEMPLATE_FILES)


@pytest.fixture
def local_template(template_dir: Path) -> Template:
    """Template pointing at ``template_dir``."""
    return Template(
        name="typescript-yoga",
        description="Local copy of the yoga starter",
        path=template_dir,
    )


@pytest.fixture
def registry(local_template: Template, tmp_path: Path) -> TemplateRegistry:
    """Synthetic registry with the local template as default."""
    other = Template(name="flow-yoga", path=tmp_path / "templates" / "flow-yoga")
    return TemplateRegistry([local_template, other], default=local_template.name)


@pytest.fixture
def target_path(tmp_path: Path) -> Path:
    """A target location that does not exist yet."""
    return tmp_path / "my-server"


# ---------------------------------------------------------------------------
# Invoker doubles
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_generator() -> MagicMock:
    """Generation invoker whose ``invoke`` succeeds."""
    generator = MagicMock()
    generator.invoke = AsyncMock(return_value=None)
    return generator


@pytest.fixture
def mock_installer() -> MagicMock:
    """Installation invoker whose ``invoke`` succeeds."""
    installer = MagicMock()
    installer.invoke = AsyncMock(return_value=None)
    return installer


# ---------------------------------------------------------------------------
# Helper fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def tarball_factory():
    """Return ``make_tarball`` for tests that build archives."""
    return make_tarball


@pytest.fixture
def tree_snapshot():
    """Return ``snapshot_tree`` for tests that compare file trees."""
    return snapshot_tree

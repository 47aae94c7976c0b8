"""Locate a template's file tree on the local filesystem.

Local templates are used in place.  Repository templates are downloaded as a
tarball with httpx, extracted into a temporary directory and narrowed down to
the template's sub-path; the temporary directory is removed when the
``fetch`` context exits.
"""

from __future__ import annotations

import asyncio
import tarfile
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx

from .errors import MaterializationError
from .models import Template, TemplateRepo


class TemplateFetcher:
    """Resolves ``Template`` sources to a local directory.

    Args:
        timeout: Seconds allowed for the tarball download.
        transport: Optional httpx transport, mainly for tests
            (``httpx.MockTransport``).
    """

    def __init__(
        self,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport

    @asynccontextmanager
    async def fetch(self, template: Template) -> AsyncIterator[Path]:
        """Yield a directory containing *template*'s file tree.

        Raises:
            MaterializationError: The source is missing, cannot be downloaded
                or is not a valid archive.
        """
        if template.path is not None:
            source = Path(template.path).expanduser()
            if not source.is_dir():
                raise MaterializationError(
                    f"Template {template.name!r} source is not a directory: {source}"
                )
            yield source
            return

        assert template.repo is not None  # guaranteed by Template validation
        with tempfile.TemporaryDirectory(prefix="create-graphqlgen-") as tmp:
            workdir = Path(tmp)
            archive = workdir / "template.tar.gz"
            await self._download(template.repo.tarball_url, archive)
            yield await asyncio.to_thread(
                _extract_template, archive, workdir / "repo", template.repo
            )

    async def _download(self, url: str, destination: Path) -> None:
        """Stream *url* into *destination*."""
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=10.0),
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    with destination.open("wb") as fh:
                        async for chunk in response.aiter_bytes():
                            fh.write(chunk)
        except httpx.HTTPStatusError as exc:
            raise MaterializationError(
                f"Template download failed with HTTP {exc.response.status_code}: {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise MaterializationError(f"Template download failed: {url}: {exc}") from exc


# ---------------------------------------------------------------------------
# Archive helpers
# ---------------------------------------------------------------------------


def _extract_template(archive: Path, destination: Path, repo: TemplateRepo) -> Path:
    """Extract *archive* and return the directory holding ``repo.path``.

    Hosted tarballs wrap the repository in a single top-level folder
    (``<owner>-<repo>-<sha>/``), which is stepped into when present.
    """
    destination.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(archive, mode="r:*") as tar:
            tar.extractall(destination, filter="data")
    except (tarfile.TarError, OSError) as exc:
        raise MaterializationError(f"Could not extract template archive: {exc}") from exc

    root = destination
    entries = list(destination.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        root = entries[0]

    source = root / repo.subpath
    if not source.is_dir():
        raise MaterializationError(
            f"Template path {repo.path!r} not found in {repo.uri}#{repo.branch}"
        )
    return source

"""Tests for the template tree copy (create_graphqlgen.scaffolder.materialize)."""

from __future__ import annotations

import asyncio
import errno
import os
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from create_graphqlgen.scaffolder import copy_tree
from create_graphqlgen.scaffolder.materialize import _copy_file

pytestmark = pytest.mark.unit


class TestCopyTree:
    @pytest.mark.asyncio
    async def test_copies_structure(self, template_dir: Path, tmp_path: Path, tree_snapshot):
        destination = tmp_path / "out"
        destination.mkdir()

        copied = await copy_tree(template_dir, destination)

        assert tree_snapshot(destination) == tree_snapshot(template_dir)
        assert copied == sorted(copied)
        assert destination / "src" / "resolvers" / "Query.ts" in copied
        assert len(copied) == 7

    @pytest.mark.asyncio
    async def test_empty_directories_created(self, tmp_path: Path):
        source = tmp_path / "src-tree"
        (source / "prisma" / "migrations").mkdir(parents=True)
        destination = tmp_path / "out"
        destination.mkdir()

        copied = await copy_tree(source, destination)

        assert copied == []
        assert (destination / "prisma" / "migrations").is_dir()

    @pytest.mark.asyncio
    async def test_overwrites_existing_files(self, template_dir: Path, tmp_path: Path):
        destination = tmp_path / "out"
        (destination / "src").mkdir(parents=True)
        (destination / "src" / "index.ts").write_text("stale content that is much longer than the template file")

        await copy_tree(template_dir, destination)

        assert (destination / "src" / "index.ts").read_text() == (
            template_dir / "src" / "index.ts"
        ).read_text()

    @pytest.mark.asyncio
    async def test_leaves_unrelated_files(self, template_dir: Path, tmp_path: Path):
        destination = tmp_path / "out"
        destination.mkdir()
        (destination / "NOTES.md").write_text("keep me")

        await copy_tree(template_dir, destination)

        assert (destination / "NOTES.md").read_text() == "keep me"

    @pytest.mark.asyncio
    async def test_single_worker(self, template_dir: Path, tmp_path: Path, tree_snapshot):
        destination = tmp_path / "out"
        destination.mkdir()
        await copy_tree(template_dir, destination, max_workers=1)
        assert tree_snapshot(destination) == tree_snapshot(template_dir)

    @pytest.mark.asyncio
    async def test_preserves_executable_bit(self, tmp_path: Path):
        source = tmp_path / "src-tree"
        script = source / "scripts" / "start.sh"
        script.parent.mkdir(parents=True)
        script.write_text("#!/bin/sh\n")
        script.chmod(0o755)
        destination = tmp_path / "out"
        destination.mkdir()

        await copy_tree(source, destination)

        assert os.access(destination / "scripts" / "start.sh", os.X_OK)

    @pytest.mark.asyncio
    async def test_symlinks_are_skipped(self, template_dir: Path, tmp_path: Path):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "secret.txt").write_text("secret")
        (template_dir / "linked-file").symlink_to(template_dir / "package.json")
        (template_dir / "linked-dir").symlink_to(outside, target_is_directory=True)
        destination = tmp_path / "out"
        destination.mkdir()

        copied = await copy_tree(template_dir, destination)

        assert not (destination / "linked-file").exists()
        assert not (destination / "linked-dir").exists()
        assert all("secret" not in p.name for p in copied)

    @pytest.mark.asyncio
    async def test_copy_error_propagates(self, template_dir: Path, tmp_path: Path):
        destination = tmp_path / "out"
        destination.mkdir()
        # A file where the template has a directory cannot be replaced.
        (destination / "src").write_text("not a directory")

        with pytest.raises(OSError):
            await copy_tree(template_dir, destination)

    @pytest.mark.asyncio
    async def test_failure_waits_for_remaining_copies(self, tmp_path: Path, tree_snapshot):
        source = tmp_path / "src-tree"
        source.mkdir()
        for i in range(6):
            (source / f"f{i}.txt").write_text(f"file {i}")
        destination = tmp_path / "out"
        destination.mkdir()

        def _slow_copy(src: Path, dst: Path) -> None:
            if src.name == "f0.txt":
                raise OSError(errno.ENOSPC, "No space left on device")
            time.sleep(0.3)
            _copy_file(src, dst)

        with patch("create_graphqlgen.scaffolder.materialize._copy_file", side_effect=_slow_copy):
            with pytest.raises(OSError) as exc_info:
                await copy_tree(source, destination, max_workers=6)

        assert exc_info.value.errno == errno.ENOSPC
        settled = tree_snapshot(destination)
        assert sorted(settled) == [f"f{i}.txt" for i in range(1, 6)]

        await asyncio.sleep(0.5)
        assert tree_snapshot(destination) == settled

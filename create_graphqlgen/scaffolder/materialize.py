"""Copy a template tree into the target directory.

The tree is walked once: directories are created up front, then regular
files are copied on worker threads.  ``copy_tree`` only returns after every
copy has finished, so callers can rely on the full tree being on disk.

Symlinks inside the template are skipped.  Existing files in the target are
overwritten in full; other files already present are left untouched.
"""

from __future__ import annotations

import asyncio
import os
import shutil
from pathlib import Path


async def copy_tree(
    source: str | Path,
    destination: str | Path,
    max_workers: int = 8,
) -> list[Path]:
    """Copy every file and sub-directory of *source* into *destination*.

    Args:
        source: Template root directory.
        destination: Existing target directory.
        max_workers: Upper bound on concurrent file copies.

    Returns:
        Destination paths of the copied files, sorted.

    Raises:
        OSError: Any directory creation or file copy failed.  The first
            failure is raised once all other copies have finished.
    """
    src_root = Path(source)
    dst_root = Path(destination)

    pairs = await asyncio.to_thread(_plan_copy, src_root, dst_root)

    semaphore = asyncio.Semaphore(max(1, max_workers))

    async def _copy(src: Path, dst: Path) -> Path:
        async with semaphore:
            await asyncio.to_thread(_copy_file, src, dst)
            return dst

    # Every copy settles before an error is raised; nothing writes afterwards.
    results = await asyncio.gather(
        *(_copy(src, dst) for src, dst in pairs), return_exceptions=True
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return sorted(results)


def _copy_file(src: Path, dst: Path) -> None:
    """Replace *dst* with the contents and permission bits of *src*."""
    shutil.copyfile(src, dst)
    shutil.copymode(src, dst)


def _plan_copy(src_root: Path, dst_root: Path) -> list[tuple[Path, Path]]:
    """Create the destination directories and list the files to copy."""
    pairs: list[tuple[Path, Path]] = []

    for dirpath, dirnames, filenames in os.walk(src_root, followlinks=False):
        current = Path(dirpath)
        rel = current.relative_to(src_root)
        target_dir = dst_root / rel
        target_dir.mkdir(parents=True, exist_ok=True)

        # os.walk lists symlinked directories in dirnames without descending
        dirnames[:] = [d for d in dirnames if not (current / d).is_symlink()]

        for name in filenames:
            src = current / name
            if src.is_symlink():
                continue
            pairs.append((src, target_dir / name))

    return pairs

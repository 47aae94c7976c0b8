"""Target directory classification."""

from __future__ import annotations

from pathlib import Path

from .models import TargetDirectory, TargetState

# Entries that may already exist in a target (e.g. a fresh ``git init``).
ALLOWED_ENTRIES: frozenset[str] = frozenset({".git", ".gitignore"})


def classify_directory(path: str | Path) -> TargetDirectory:
    """Classify *path* as missing, empty (ignoring allow-listed entries) or conflicting.

    The filesystem is read on every call; nothing is cached.  A path that
    exists but is not a directory is reported as conflicting with itself.
    """
    target = Path(path).expanduser().absolute()

    if not target.exists():
        return TargetDirectory(path=target, state=TargetState.NOT_EXISTS)

    if not target.is_dir():
        return TargetDirectory(
            path=target,
            state=TargetState.CONFLICTING,
            conflicts=(target.name,),
        )

    conflicts = sorted(
        entry.name for entry in target.iterdir() if entry.name not in ALLOWED_ENTRIES
    )
    if not conflicts:
        return TargetDirectory(path=target, state=TargetState.EMPTY_OR_ALLOWLISTED)

    return TargetDirectory(
        path=target,
        state=TargetState.CONFLICTING,
        conflicts=tuple(conflicts),
    )

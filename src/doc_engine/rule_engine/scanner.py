"""Single-pass project file discovery."""

from __future__ import annotations

import logging
from pathlib import Path

from doc_engine.errors import PathError

logger = logging.getLogger(__name__)

SKIP_DIRS: frozenset[str] = frozenset(
    {
        "target",
        "node_modules",
        "build",
        "dist",
        "__pycache__",
        "venv",
    }
)


def _skip_dir(name: str) -> bool:
    return name in SKIP_DIRS or name.startswith(".")


def scan_files(root: Path) -> list[str]:
    """Return every regular file under root as a sorted POSIX relative path.

    Hidden directories and build/dependency caches are not entered. Directory
    symlinks are followed, but each directory is visited once by its resolved
    path, so link cycles terminate.
    """
    if not root.exists():
        raise PathError(f"Path '{root}' does not exist")
    if not root.is_dir():
        raise PathError(f"Path '{root}' is not a directory")

    files: list[str] = []
    visited: set[Path] = set()
    pending = [root]
    while pending:
        directory = pending.pop()
        real = directory.resolve()
        if real in visited:
            continue
        visited.add(real)

        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            continue

        for entry in entries:
            if entry.is_dir():
                if not _skip_dir(entry.name):
                    pending.append(entry)
            elif entry.is_file():
                files.append(entry.relative_to(root).as_posix())

    files.sort()
    logger.debug(f"Discovered {len(files)} files under {root}")
    return files

"""File tree walking and source reading."""

from __future__ import annotations

import os
from pathlib import Path

from .logging import get_logger

logger = get_logger("walker")

# Dependency installs and build output; hidden directories are pruned separately.
IGNORE_DIRS = {"node_modules", "target", "build", "dist", "vendor"}


def _is_pruned(dirname: str) -> bool:
    return dirname.startswith(".") or dirname in IGNORE_DIRS


def walk(root: str | Path) -> list[Path]:
    """Return every regular file under root, in a stable sorted order.

    Hidden and build-artifact directories are never descended into.
    Symlinked directories are not followed, and unreadable directories
    are dropped without affecting their siblings.
    """
    root = Path(root)
    files: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not _is_pruned(d))
        for fname in sorted(filenames):
            fpath = Path(dirpath) / fname
            if fpath.is_file():
                files.append(fpath)

    return files


def relative_path(path: Path, root: Path) -> str:
    """Report path relative to root with forward slashes."""
    return Path(os.path.relpath(path, root)).as_posix()


def read_source(path: Path) -> str | None:
    """Read a file as UTF-8 text. Returns None for unreadable or binary files."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping %s: %s", path, e)
        return None
    if "\x00" in content:
        logger.debug("Skipping binary file %s", path)
        return None
    return content

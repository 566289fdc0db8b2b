"""Common file and path utilities for weighted-coverage."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from weighted_coverage._meta import logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from weighted_coverage.core.path_filter import PathFilter

# Cache and environment directories that never hold project sources.
# Build output such as build/ or dist/ is left to --exclude.
SKIPPED_DIRS = frozenset({
    "__pycache__",
    "node_modules",
    "site-packages",
    "venv",
})


def read_source(path: Path) -> str:
    """Return the UTF-8 text of *path*.

    Unlike a lenient reader this propagates :class:`OSError` and
    :class:`UnicodeDecodeError` so callers can record the file as unreadable.
    """
    with path.open(encoding="utf-8") as f:
        return f.read()


def normalize_path(path: Path, base: Path | None = None) -> Path:
    """Return *path* normalised relative to *base* if possible.

    When ``base`` is provided and ``path`` is within it the returned path will
    be relative to ``base``.  Otherwise an absolute path is returned.  This
    keeps output stable regardless of the current working directory.
    """
    resolved = path.resolve()
    if base is not None:
        try:
            return resolved.relative_to(base.resolve())
        except ValueError:
            pass
    return resolved


def _skip_dir(name: str) -> bool:
    return name.startswith(".") or name in SKIPPED_DIRS


def iter_source_files(
    root: Path,
    *,
    accept: Callable[[Path], bool],
    path_filter: PathFilter | None = None,
) -> Iterator[Path]:
    """Yield source files under *root* in a stable, sorted order."""
    for dirpath, dirnames, filenames in os.walk(root):
        pruned = [d for d in dirnames if _skip_dir(d)]
        if pruned:
            logger.debug("not descending into %s under %s", ", ".join(sorted(pruned)), dirpath)
        dirnames[:] = sorted(d for d in dirnames if not _skip_dir(d))
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if not accept(path):
                continue
            if path_filter is not None and not path_filter.allows(path):
                logger.debug("path filter skipped %s", path)
                continue
            yield path


__all__ = ["SKIPPED_DIRS", "iter_source_files", "normalize_path", "read_source"]

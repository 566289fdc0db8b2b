"""Include/exclude filtering of source paths."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec

from weighted_coverage._meta import logger
from weighted_coverage.core.files import normalize_path

if TYPE_CHECKING:
    from collections.abc import Iterable

_GLOB_CHARS = frozenset("*?[]")


def _to_pattern(raw: str | Path, base: Path, *, expand_dirs: bool) -> str:
    """Turn a CLI pattern into a gitwildmatch line relative to *base*.

    Globs are kept as written (absolute globs are re-rooted at *base*).
    Concrete paths are resolved against *base*; an existing directory becomes
    ``dir/**/*`` when *expand_dirs* is set.
    """
    text = str(raw).replace("\\", "/")
    if _GLOB_CHARS.intersection(text):
        if Path(text).is_absolute():
            return normalize_path(Path(text), base=base).as_posix()
        return text
    target = Path(text) if Path(text).is_absolute() else base / text
    if expand_dirs and target.is_dir():
        target /= "**/*"
    return normalize_path(target, base=base).as_posix()


class PathFilter:
    """Decide which discovered source files take part in a scan.

    A file is scanned when it matches an include pattern (or none were given)
    and matches no exclude pattern.  Paths are matched relative to *base*,
    normally the project root.
    """

    def __init__(
        self,
        includes: Iterable[str | Path] = (),
        excludes: Iterable[str | Path] = (),
        *,
        base: Path | None = None,
    ) -> None:
        self._base = base or Path.cwd()
        self._includes = [_to_pattern(p, self._base, expand_dirs=True) for p in includes]
        self._excludes = [_to_pattern(p, self._base, expand_dirs=False) for p in excludes]
        self._include_spec = PathSpec.from_lines("gitwildmatch", self._includes)
        self._exclude_spec = PathSpec.from_lines("gitwildmatch", self._excludes)

    def __repr__(self) -> str:
        return f"PathFilter(includes={self._includes!r}, excludes={self._excludes!r})"

    def allows(self, path: Path) -> bool:
        rel = normalize_path(path, base=self._base).as_posix()
        included = not self._includes or self._include_spec.match_file(rel)
        excluded = self._exclude_spec.match_file(rel)
        logger.debug("path filter %s include=%s exclude=%s", rel, included, excluded)
        return bool(included) and not excluded


__all__ = ["PathFilter"]

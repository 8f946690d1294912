"""Path utilities for locating Go manifests."""

import fnmatch
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from ..core.resolver import GoDependencyManager


DEFAULT_IGNORE_PATTERNS = [
    "**/vendor/**",
    "**/.git/**",
    "**/node_modules/**",
    "**/testdata/**",
]


@dataclass
class ManifestFile:
    """A manifest found on disk together with the manager that owns it."""

    path: Path
    manager: GoDependencyManager

    @property
    def root(self) -> Path:
        return self.path.parent


class PathFilter:
    """Filters paths based on glob patterns."""

    def __init__(self, ignore_patterns: Optional[List[str]] = None) -> None:
        """Initialize path filter.

        Args:
            ignore_patterns: Additional glob patterns to ignore
        """
        self.ignore_patterns = DEFAULT_IGNORE_PATTERNS + list(ignore_patterns or [])

    def is_ignored(self, path: Path) -> bool:
        path_str = path.as_posix()
        return any(fnmatch.fnmatch(path_str, pattern) for pattern in self.ignore_patterns)


def detect_manager(root: Path) -> Optional[GoDependencyManager]:
    """Pick the dependency manager whose manifest exists directly under root.

    Managers are checked in declaration order, so a project carrying both a
    Gopkg.lock and a Godeps.json resolves with dep.

    Args:
        root: Project root directory

    Returns:
        The detected manager or None
    """
    for manager in GoDependencyManager:
        if (Path(root) / manager.manifest_name).is_file():
            return manager
    return None


def iter_manifests(root: Path, ignore_patterns: Optional[List[str]] = None) -> Iterator[ManifestFile]:
    """Walk a directory tree yielding every Go manifest below it.

    Args:
        root: Directory to search
        ignore_patterns: Additional ignore patterns

    Yields:
        Manifests in path order
    """
    root = Path(root)
    if not root.exists():
        raise ValueError(f"Root path does not exist: {root}")

    path_filter = PathFilter(ignore_patterns)
    for file_path in sorted(root.rglob("*")):
        relative = Path("/") / file_path.relative_to(root)
        if not file_path.is_file() or path_filter.is_ignored(relative):
            continue
        for manager in GoDependencyManager:
            if fnmatch.fnmatch(relative.as_posix(), manager.bom_pattern):
                yield ManifestFile(path=file_path, manager=manager)
                break


def find_manifests(root: Path, ignore_patterns: Optional[List[str]] = None) -> List[ManifestFile]:
    """Convenience function returning :func:`iter_manifests` as a list."""
    return list(iter_manifests(root, ignore_patterns))

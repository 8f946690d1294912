"""Go dependency resolution for a single project root."""

import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

from ..utils.logging import get_logger
from .config import ResolverConfig
from .parsers import registry as default_registry
from .parsers.base import (
    Dependency,
    DepLensError,
    GO_ECOSYSTEM,
    MissingManifestError,
    UnreadableManifestError,
)
from .parsers.golang import GODEPS_JSON, GOPKG_LOCK, VENDOR_CONF
from .parsers.registry import ParserRegistry


GLOB_PATTERN = "**/"
GO_SOURCE_PATTERN = GLOB_PATTERN + "*.go"


class GoDependencyManager(Enum):
    """Supported Go dependency managers."""

    DEP = "dep"
    GODEP = "godep"
    VNDR = "vndr"

    @property
    def manifest_name(self) -> str:
        return _MANIFESTS[self]

    @property
    def remediation(self) -> str:
        """Command that (re)generates the manifest."""
        return _REMEDIATIONS[self]

    @property
    def bom_pattern(self) -> str:
        return GLOB_PATTERN + "*" + self.manifest_name

    @classmethod
    def from_value(cls, value: str) -> "GoDependencyManager":
        """Look up a manager by name, case-insensitively.

        Raises:
            ValueError: If the name is not a supported manager
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            supported = ", ".join(m.value for m in cls)
            raise ValueError(f"Unsupported dependency manager '{value}' (expected one of: {supported})")


_MANIFESTS: Dict[GoDependencyManager, str] = {
    GoDependencyManager.DEP: GOPKG_LOCK,
    GoDependencyManager.GODEP: GODEPS_JSON,
    GoDependencyManager.VNDR: VENDOR_CONF,
}

_REMEDIATIONS: Dict[GoDependencyManager, str] = {
    GoDependencyManager.DEP: "dep init",
    GoDependencyManager.GODEP: "godep save",
    GoDependencyManager.VNDR: "vndr init",
}


@dataclass
class ResolutionResult:
    """Outcome of resolving one project root."""

    dependencies: List[Dependency] = field(default_factory=list)
    manager: Optional[GoDependencyManager] = None
    root: Optional[Path] = None
    manifest: Optional[Path] = None
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    excludes: Set[str] = field(default_factory=set)
    ecosystem: str = GO_ECOSYSTEM

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_records(self) -> List[Dict[str, Optional[str]]]:
        return [dep.to_dict() for dep in self.dependencies]


class GoDependencyResolver:
    """Resolve declared Go dependencies from a manager-specific manifest.

    Exactly one manifest is read per call to :meth:`resolve`. All failures
    are logged once and reported on the returned :class:`ResolutionResult`;
    nothing is raised past :meth:`resolve`.
    """

    def __init__(
        self,
        manager: Optional[GoDependencyManager],
        config: Optional[ResolverConfig] = None,
        registry: Optional[ParserRegistry] = None,
        ensure_runner: Optional[Callable[[Path], bool]] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            manager: Selected dependency manager
            config: Resolver configuration
            registry: Parser registry (defaults to the built-in one)
            ensure_runner: Callable running ``dep ensure`` in the project
                root and returning whether it succeeded; only used for dep
        """
        self.manager = manager
        self.config = config or ResolverConfig()
        self.registry = registry or default_registry
        self.ensure_runner = ensure_runner
        self.logger = get_logger("GoDependencyResolver")

    def get_excludes(self) -> Set[str]:
        """Glob patterns the host pipeline should not scan as sources."""
        if self.config.ignore_source_files:
            return {GO_SOURCE_PATTERN}
        return set()

    def resolve(self, root: Path) -> ResolutionResult:
        """Resolve dependencies declared under a project root.

        Args:
            root: Project root directory

        Returns:
            Resolution result, empty with ``error`` set on failure
        """
        root = Path(root)
        result = ResolutionResult(
            manager=self.manager,
            root=root,
            excludes=self.get_excludes(),
        )

        if self.manager is None:
            result.error = "No valid dependency manager was defined"
            self.logger.error(result.error)
            return result

        result.manifest = root / self.manager.manifest_name
        try:
            result.dependencies = self._collect(result.manifest, root, result)
        except (DepLensError, OSError, ValueError) as e:
            result.dependencies = []
            result.error = str(e)
            self.logger.error(result.error)
            return result

        self.logger.debug(
            f"Resolved {len(result.dependencies)} dependencies from {result.manifest}"
        )
        return result

    def _run_ensure(self, root: Path) -> bool:
        try:
            return bool(self.ensure_runner(root))
        except (OSError, subprocess.SubprocessError) as e:
            self.logger.debug(f"dep ensure failed in {root}: {e}")
            return False

    def _collect(self, manifest: Path, root: Path, result: ResolutionResult) -> List[Dependency]:
        if not manifest.is_file():
            raise MissingManifestError(self.manager.value, manifest, self.manager.remediation)

        if self.manager is GoDependencyManager.DEP and self.ensure_runner is not None:
            if not self._run_ensure(root):
                warning = (
                    "Can't run 'dep ensure' command, output might be outdated.  "
                    "Run the 'dep ensure' command manually."
                )
                result.warnings.append(warning)
                self.logger.warning(warning)

        parser_class = self.registry.get_parser_class(GO_ECOSYSTEM, self.manager.value)
        if parser_class is None:
            raise DepLensError(
                f"The selected dependency manager - {self.manager.value} - is not supported."
            )

        parser = parser_class.from_config(self.config)
        try:
            parsed = parser.parse(manifest)
        except PermissionError as e:
            raise UnreadableManifestError(manifest, str(e)) from e
        return parsed.dependencies


def resolve_dependencies(
    root: Path,
    manager: Optional[GoDependencyManager],
    config: Optional[ResolverConfig] = None,
) -> ResolutionResult:
    """Convenience function to resolve one project root."""
    return GoDependencyResolver(manager, config).resolve(root)

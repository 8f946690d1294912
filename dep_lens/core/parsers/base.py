"""Base parser class, data models and shared helpers for manifest parsing."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple, Any
import os

from ..config import ResolverConfig


GO_ECOSYSTEM = "go"
FORWARD_SLASH = "/"
QUOTE = '"'


class DepLensError(Exception):
    """Base class for manifest resolution errors."""


class MissingManifestError(DepLensError):
    """The manifest expected for the selected dependency manager is absent."""

    def __init__(self, manager: str, path: Path, remediation: str) -> None:
        self.manager = manager
        self.path = path
        self.remediation = remediation
        super().__init__(
            f"Can't find {path.name} file.  Please run '{remediation}' command"
        )


class UnreadableManifestError(DepLensError):
    """An existing manifest could not be opened or read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Can't read {path}: {reason}")


class MalformedManifestError(DepLensError):
    """A manifest could not be parsed."""

    def __init__(self, path: Path, reason: str, line_number: Optional[int] = None) -> None:
        self.path = path
        self.reason = reason
        self.line_number = line_number
        location = f"{path}:{line_number}" if line_number is not None else str(path)
        super().__init__(f"Malformed manifest {location}: {reason}")


def namespace_of(identity: str) -> str:
    """Derive the namespace of an import-path-like identity.

    The namespace is the second slash-separated segment, so
    ``github.com/pkg/errors`` gives ``pkg``. Identities without a slash
    have an empty namespace. This is a grouping key only; it is not an
    import path parser.

    Args:
        identity: Raw identity string

    Returns:
        Namespace or an empty string
    """
    if FORWARD_SLASH in identity:
        return identity.split(FORWARD_SLASH)[1]
    return ""


def extract_quoted(line: str) -> Optional[str]:
    """Return the text between the first and last double quote of a line."""
    first = line.find(QUOTE)
    last = line.rfind(QUOTE)
    if first == -1 or first == last:
        return None
    return line[first + 1:last]


def iter_lines(file_path: Path, encoding: str = "utf-8") -> Iterator[Tuple[int, str]]:
    """Lazily yield numbered lines of a text file without line terminators.

    Args:
        file_path: File to read
        encoding: Text encoding of the file

    Yields:
        Tuples of (line number, line)
    """
    with open(file_path, "r", encoding=encoding, newline=None) as f:
        for line_num, line in enumerate(f, 1):
            yield line_num, line.rstrip("\n")


@dataclass
class Dependency:
    """A single resolved dependency record."""

    name: str
    namespace: Optional[str] = None
    version: Optional[str] = None
    revision: Optional[str] = None
    ecosystem: str = GO_ECOSYSTEM
    source_file: Optional[Path] = None
    line_number: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the record and derive its namespace."""
        if not self.name:
            raise ValueError("Dependency name cannot be empty")

        if self.namespace is None:
            self.namespace = namespace_of(self.name)

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Return the record shape consumed by the host pipeline."""
        return {
            "namespace": self.namespace,
            "name": self.name,
            "version": self.version,
            "revision": self.revision,
            "ecosystem": self.ecosystem,
        }

    def __hash__(self) -> int:
        return hash((self.name, self.version, self.revision, self.ecosystem))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Dependency):
            return False
        return (
            self.name == other.name
            and self.version == other.version
            and self.revision == other.revision
            and self.ecosystem == other.ecosystem
        )


@dataclass
class ParsedDependencies:
    """Container for parsed dependencies from a file."""

    dependencies: List[Dependency] = field(default_factory=list)
    source_file: Optional[Path] = None
    ecosystem: str = GO_ECOSYSTEM
    parser_type: str = ""
    skipped_lines: List[int] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_dependency(self, dependency: Dependency) -> None:
        """Add a dependency to the collection.

        Args:
            dependency: Dependency to add
        """
        self.dependencies.append(dependency)

    def get_dependency_names(self) -> Set[str]:
        """Get set of dependency names."""
        return {dep.name for dep in self.dependencies}

    def find_dependency(self, name: str) -> Optional[Dependency]:
        """Find a dependency by name.

        Args:
            name: Dependency name to find

        Returns:
            Dependency if found, None otherwise
        """
        for dep in self.dependencies:
            if dep.name == name:
                return dep
        return None

    def to_records(self) -> List[Dict[str, Optional[str]]]:
        return [dep.to_dict() for dep in self.dependencies]


class BaseParser(ABC):
    """Abstract base class for manifest parsers."""

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the parser.

        Args:
            encoding: Text encoding used to read manifests
        """
        self.encoding = encoding
        self.file_names: List[str] = []
        self.ecosystem: str = GO_ECOSYSTEM
        self.parser_type: str = ""

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "BaseParser":
        """Build a parser honouring the resolver configuration."""
        return cls(encoding=config.encoding)

    def can_parse(self, file_path: Path) -> bool:
        """Check if this parser can handle the given file.

        Args:
            file_path: Path to the file to check

        Returns:
            True if parser can handle the file
        """
        return file_path.name in self.file_names

    @abstractmethod
    def parse(self, file_path: Path) -> ParsedDependencies:
        """Parse a manifest file.

        Args:
            file_path: Path to the file to parse

        Returns:
            Parsed dependencies from the file
        """
        pass

    def validate_file(self, file_path: Path) -> None:
        """Validate that the file exists and is readable.

        Args:
            file_path: Path to validate

        Raises:
            FileNotFoundError: If file doesn't exist
            PermissionError: If file is not readable
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        if not os.access(file_path, os.R_OK):
            raise PermissionError(f"File is not readable: {file_path}")

    def _new_result(self, file_path: Path) -> ParsedDependencies:
        return ParsedDependencies(
            source_file=file_path,
            ecosystem=self.ecosystem,
            parser_type=self.parser_type,
        )

    def _make_dependency(
        self,
        name: str,
        version: Optional[str] = None,
        revision: Optional[str] = None,
        source_file: Optional[Path] = None,
        line_number: Optional[int] = None,
    ) -> Dependency:
        """Assemble a record from a raw identity and its metadata.

        The namespace is always derived here so every format shares one rule.
        """
        return Dependency(
            name=name,
            namespace=namespace_of(name),
            version=version,
            revision=revision,
            ecosystem=self.ecosystem,
            source_file=source_file,
            line_number=line_number,
        )

"""Go dependency manager manifest parsers."""

import json
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ...utils.logging import get_logger
from ..config import ResolverConfig
from .base import (
    BaseParser,
    Dependency,
    FORWARD_SLASH,
    MalformedManifestError,
    ParsedDependencies,
    UnreadableManifestError,
    extract_quoted,
    iter_lines,
)


GOPKG_LOCK = "Gopkg.lock"
GODEPS_JSON = "Godeps.json"
VENDOR_CONF = "vendor.conf"

PROJECTS = "[[projects]]"
NAME = "name = "
VERSION = "version = "
REVISION = "revision = "
PACKAGES = "packages = "
BRACKET = "]"
DOT = "."

DEPS = "Deps"
IMPORT_PATH = "ImportPath"
REV = "Rev"
COMMENT = "Comment"

QUOTED_VALUE = re.compile(r'"([^"]*)"')


class LockState(Enum):
    """Position of the Gopkg.lock reader relative to a project stanza."""

    OUTSIDE = "outside"
    INSIDE_PROJECT = "inside_project"
    INSIDE_PACKAGES = "inside_packages"


@dataclass
class ProjectBlock:
    """One ``[[projects]]`` stanza being accumulated."""

    line_number: int
    name: Optional[str] = None
    version: Optional[str] = None
    revision: Optional[str] = None
    packages: Optional[List[str]] = None

    def add_package(self, suffix: Optional[str]) -> None:
        if self.packages is None:
            self.packages = []
        if suffix and suffix != DOT:
            self.packages.append(suffix)

    def package_names(self) -> List[str]:
        """Full identities of the nested sub-packages, root package excluded."""
        if not self.name or not self.packages:
            return []
        return [
            self.name + FORWARD_SLASH + suffix
            for suffix in self.packages
            if suffix != DOT
        ]


class GopkgLockParser(BaseParser):
    """Parser for ``dep`` Gopkg.lock files.

    The file is read line by line. Each ``[[projects]]`` stanza is collected
    into a :class:`ProjectBlock` and flushed on the next empty line. A stanza
    with a ``packages`` list expands into one record for the project and one
    per sub-package, all sharing the project's version and revision.
    """

    def __init__(self, encoding: str = "utf-8", flush_trailing_stanza: bool = False) -> None:
        """Initialize the Gopkg.lock parser.

        Args:
            encoding: Text encoding of the lock file
            flush_trailing_stanza: Emit a stanza left open at end of file
                instead of dropping it
        """
        super().__init__(encoding)
        self.parser_type = "dep"
        self.file_names = [GOPKG_LOCK]
        self.flush_trailing_stanza = flush_trailing_stanza
        self.logger = get_logger("GopkgLockParser")

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "GopkgLockParser":
        return cls(encoding=config.encoding, flush_trailing_stanza=config.flush_trailing_stanza)

    def parse(self, file_path: Path) -> ParsedDependencies:
        """Parse a Gopkg.lock file.

        Args:
            file_path: Path to the lock file

        Returns:
            Parsed dependencies
        """
        self.validate_file(file_path)
        result = self._new_result(file_path)

        state = LockState.OUTSIDE
        block: Optional[ProjectBlock] = None
        try:
            for line_num, line in iter_lines(file_path, self.encoding):
                state, block = self._step(state, line, line_num, block, result)
        except (OSError, UnicodeDecodeError) as e:
            raise UnreadableManifestError(file_path, str(e)) from e

        if state is not LockState.OUTSIDE and block is not None:
            if self.flush_trailing_stanza:
                self._flush(block, result)
            else:
                result.metadata["dropped_stanza"] = block.line_number
                self.logger.debug(
                    f"{file_path} does not end with a blank line, "
                    f"dropping stanza starting at line {block.line_number}"
                )

        self.logger.debug(f"Parsed {len(result.dependencies)} dependencies from {file_path}")
        return result

    def _step(
        self,
        state: LockState,
        line: str,
        line_num: int,
        block: Optional[ProjectBlock],
        result: ParsedDependencies,
    ) -> Tuple[LockState, Optional[ProjectBlock]]:
        """Apply one line to the reader state.

        Returns:
            The new state and the stanza being collected
        """
        if state is LockState.OUTSIDE:
            if line == PROJECTS:
                return LockState.INSIDE_PROJECT, ProjectBlock(line_number=line_num)
            return state, block

        if not line:
            self._flush(block, result)
            return LockState.OUTSIDE, None

        if state is LockState.INSIDE_PACKAGES:
            if BRACKET in line:
                return LockState.INSIDE_PROJECT, block
            block.add_package(extract_quoted(line))
            return state, block

        if NAME in line:
            block.name = extract_quoted(line)
        elif VERSION in line:
            block.version = extract_quoted(line)
        elif REVISION in line:
            block.revision = extract_quoted(line)
        elif PACKAGES in line:
            block.packages = []
            if BRACKET not in line:
                return LockState.INSIDE_PACKAGES, block
            # packages = ["a", "b"] written on a single line
            _, _, values = line.partition(PACKAGES)
            for suffix in QUOTED_VALUE.findall(values):
                block.add_package(suffix)
        return state, block

    def _flush(self, block: Optional[ProjectBlock], result: ParsedDependencies) -> None:
        if block is None:
            return
        if not block.name:
            result.skipped_lines.append(block.line_number)
            self.logger.warning(
                f"Skipping stanza without a name at {result.source_file}:{block.line_number}"
            )
            return

        names = [block.name] + block.package_names()
        for name in names:
            result.add_dependency(self._make_dependency(
                name,
                version=block.version,
                revision=block.revision,
                source_file=result.source_file,
                line_number=block.line_number,
            ))


class GodepsJsonParser(BaseParser):
    """Parser for ``godep`` Godeps.json files."""

    def __init__(self, encoding: str = "utf-8") -> None:
        super().__init__(encoding)
        self.parser_type = "godep"
        self.file_names = [GODEPS_JSON]
        self.logger = get_logger("GodepsJsonParser")

    def parse(self, file_path: Path) -> ParsedDependencies:
        """Parse a Godeps.json file.

        The document is loaded as a whole; invalid JSON is fatal for the
        file and no partial result is produced.

        Args:
            file_path: Path to the Godeps.json file

        Returns:
            Parsed dependencies

        Raises:
            MalformedManifestError: If the file is not valid JSON
            UnreadableManifestError: If the file cannot be read or decoded
        """
        self.validate_file(file_path)
        result = self._new_result(file_path)

        try:
            with open(file_path, "r", encoding=self.encoding) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedManifestError(file_path, e.msg, e.lineno) from e
        except (OSError, UnicodeDecodeError) as e:
            raise UnreadableManifestError(file_path, str(e)) from e

        for index, dep in enumerate(self._extract_deps(data)):
            dependency = self._create_dependency(dep, file_path)
            if dependency is None:
                result.metadata.setdefault("skipped_entries", []).append(index)
                self.logger.warning(f"Skipping {DEPS} entry {index} without {IMPORT_PATH} in {file_path}")
                continue
            result.add_dependency(dependency)

        return result

    def _extract_deps(self, data: Any) -> List[Any]:
        if not isinstance(data, dict):
            return []
        deps = data.get(DEPS)
        if not isinstance(deps, list):
            return []
        return deps

    def _create_dependency(self, dep: Any, file_path: Path) -> Optional[Dependency]:
        """Create a record from one ``Deps`` entry.

        The ``Comment`` field usually reads like ``v1.2-3-gabcdef``; only the
        part before the first hyphen is kept as the version.
        """
        if not isinstance(dep, dict):
            return None
        import_path = dep.get(IMPORT_PATH)
        if not import_path:
            return None

        version = None
        comment = dep.get(COMMENT)
        if comment is not None:
            version = str(comment).split("-", 1)[0]

        revision = dep.get(REV)
        return self._make_dependency(
            str(import_path),
            version=version,
            revision=str(revision) if revision is not None else None,
            source_file=file_path,
        )


class VendorConfParser(BaseParser):
    """Parser for ``vndr`` vendor.conf files.

    Each line reads ``<import path> <revision> [repository]``; columns are
    separated by runs of spaces or tabs.
    """

    def __init__(self, encoding: str = "utf-8", skip_malformed_lines: bool = True) -> None:
        super().__init__(encoding)
        self.parser_type = "vndr"
        self.file_names = [VENDOR_CONF]
        self.skip_malformed_lines = skip_malformed_lines
        self.logger = get_logger("VendorConfParser")

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "VendorConfParser":
        return cls(encoding=config.encoding, skip_malformed_lines=config.skip_malformed_lines)

    def parse(self, file_path: Path) -> ParsedDependencies:
        """Parse a vendor.conf file.

        Lines with fewer than two fields are logged and skipped. With
        ``skip_malformed_lines`` disabled they fail the whole file instead.

        Args:
            file_path: Path to the vendor.conf file

        Returns:
            Parsed dependencies

        Raises:
            MalformedManifestError: On a malformed line in strict mode
        """
        self.validate_file(file_path)
        result = self._new_result(file_path)

        try:
            for line_num, line in iter_lines(file_path, self.encoding):
                stripped = line.strip()
                if not stripped or stripped.startswith("#"):
                    continue

                dependency = self._parse_line(line, line_num, file_path)
                if dependency is None:
                    if not self.skip_malformed_lines:
                        raise MalformedManifestError(
                            file_path, f"expected '<import path> <revision>', got {line!r}", line_num
                        )
                    result.skipped_lines.append(line_num)
                    self.logger.warning(f"Skipping malformed line {file_path}:{line_num}: {line!r}")
                    continue
                result.add_dependency(dependency)
        except (OSError, UnicodeDecodeError) as e:
            raise UnreadableManifestError(file_path, str(e)) from e

        return result

    def _parse_line(self, line: str, line_num: int, file_path: Path) -> Optional[Dependency]:
        fields = line.split()
        if len(fields) < 2:
            return None
        return self._make_dependency(
            fields[0],
            revision=fields[1],
            source_file=file_path,
            line_number=line_num,
        )


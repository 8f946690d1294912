"""Registry of manifest parsers."""

from typing import Dict, List, Optional, Type
from pathlib import Path
from .base import BaseParser, ParsedDependencies


class ParserRegistry:
    """Registry for manifest parsers keyed by ecosystem and manager."""

    def __init__(self) -> None:
        """Initialize the parser registry."""
        self._parsers: Dict[tuple[str, str], BaseParser] = {}
        self._ecosystem_parsers: Dict[str, List[BaseParser]] = {}

    def register(self, ecosystem: str, parser_type: str, parser: BaseParser) -> None:
        """Register a parser for an ecosystem and manager.

        Args:
            ecosystem: Ecosystem name (e.g. 'go')
            parser_type: Dependency manager (e.g. 'dep', 'godep', 'vndr')
            parser: Parser instance to register
        """
        key = (ecosystem, parser_type)
        self._parsers[key] = parser

        if ecosystem not in self._ecosystem_parsers:
            self._ecosystem_parsers[ecosystem] = []
        self._ecosystem_parsers[ecosystem].append(parser)

    def get_parser(self, ecosystem: str, parser_type: str) -> Optional[BaseParser]:
        """Get the parser registered for an ecosystem and manager.

        Args:
            ecosystem: Ecosystem name
            parser_type: Dependency manager

        Returns:
            Parser instance or None if not found
        """
        return self._parsers.get((ecosystem, parser_type))

    def get_parser_class(self, ecosystem: str, parser_type: str) -> Optional[Type[BaseParser]]:
        parser = self.get_parser(ecosystem, parser_type)
        return type(parser) if parser is not None else None

    def get_ecosystem_parsers(self, ecosystem: str) -> List[BaseParser]:
        return self._ecosystem_parsers.get(ecosystem, [])

    def find_parser_for_file(self, file_path: Path) -> Optional[BaseParser]:
        """Find a parser that can handle the given file.

        Args:
            file_path: Path to the file

        Returns:
            Parser that can handle the file or None
        """
        for parser in self._parsers.values():
            if parser.can_parse(file_path):
                return parser
        return None

    def get_supported_ecosystems(self) -> List[str]:
        return list(self._ecosystem_parsers.keys())

    def get_supported_parser_types(self) -> List[str]:
        """Get list of supported managers, in registration order."""
        return [parser_type for _, parser_type in self._parsers.keys()]

    def parse_file(self, file_path: Path) -> Optional[ParsedDependencies]:
        """Parse a file using the appropriate parser.

        Args:
            file_path: Path to the file to parse

        Returns:
            Parsed dependencies or None if no parser found
        """
        parser = self.find_parser_for_file(file_path)
        if parser:
            return parser.parse(file_path)
        return None

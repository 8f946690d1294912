"""Resolver configuration."""

import codecs
from dataclasses import dataclass


@dataclass
class ResolverConfig:
    """Configuration for manifest resolution."""

    # Gopkg.lock files that do not end with a blank line lose their last
    # stanza unless this is set.
    flush_trailing_stanza: bool = False
    skip_malformed_lines: bool = True
    ignore_source_files: bool = False
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate configuration."""
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding}")

"""Manifest parsers for Go dependency managers."""

from .base import (
    BaseParser,
    Dependency,
    DepLensError,
    MalformedManifestError,
    MissingManifestError,
    ParsedDependencies,
    UnreadableManifestError,
    namespace_of,
)
from .golang import GodepsJsonParser, GopkgLockParser, VendorConfParser
from .registry import ParserRegistry

# Register built-in parsers
registry = ParserRegistry()

registry.register("go", "dep", GopkgLockParser())
registry.register("go", "godep", GodepsJsonParser())
registry.register("go", "vndr", VendorConfParser())

# Convenience exports
DependencyParser = registry
__all__ = [
    "BaseParser",
    "Dependency",
    "DepLensError",
    "DependencyParser",
    "GodepsJsonParser",
    "GopkgLockParser",
    "MalformedManifestError",
    "MissingManifestError",
    "ParsedDependencies",
    "ParserRegistry",
    "UnreadableManifestError",
    "VendorConfParser",
    "namespace_of",
    "registry",
]

"""Manifest parsing and resolution logic for DepLens."""

from .config import ResolverConfig
from .parsers import DependencyParser, Dependency, ParsedDependencies
from .resolver import GoDependencyManager, GoDependencyResolver, ResolutionResult, resolve_dependencies

__all__ = [
    "ResolverConfig",
    "DependencyParser",
    "Dependency",
    "ParsedDependencies",
    "GoDependencyManager",
    "GoDependencyResolver",
    "ResolutionResult",
    "resolve_dependencies",
]

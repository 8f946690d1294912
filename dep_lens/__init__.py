"""DepLens - declared Go dependencies from dep, godep and vndr manifests."""

__version__ = "0.1.0"
__author__ = "DepLens Team"

from .core.config import ResolverConfig
from .core.parsers import DependencyParser, Dependency
from .core.resolver import GoDependencyManager, GoDependencyResolver, ResolutionResult
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "ResolverConfig",
    "DependencyParser",
    "Dependency",
    "GoDependencyManager",
    "GoDependencyResolver",
    "ResolutionResult",
    "ConsoleFormatter",
    "JSONFormatter",
]

"""Logging utilities for DepLens."""

import logging
from pathlib import Path
from typing import Optional, Any
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


LOGGER_PREFIX = "dep_lens"


class DepLensLogger:
    """Thin wrapper over a stdlib logger living under the ``dep_lens`` namespace."""

    def __init__(self, name: str, level: int = logging.NOTSET) -> None:
        self.logger = logging.getLogger(f"{LOGGER_PREFIX}.{name}")
        if level:
            self.logger.setLevel(level)

    @property
    def name(self) -> str:
        return self.logger.name

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)


def _rich_handler(console: Optional[Console] = None) -> RichHandler:
    """Build the rich console handler with the DepLens theme."""
    console = console or Console(stderr=True, theme=Theme({
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
        "critical": "red bold",
        "debug": "dim",
    }))

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    verbose: bool = False
) -> None:
    """Setup logging configuration for DepLens.

    Args:
        level: Logging level
        log_file: Optional log file path
        verbose: Enable verbose logging
    """
    if verbose:
        level = logging.DEBUG

    handlers: list[logging.Handler] = [_rich_handler()]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.getLogger(LOGGER_PREFIX).setLevel(level)


def get_logger(name: str) -> DepLensLogger:
    """Get a DepLens logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return DepLensLogger(name)

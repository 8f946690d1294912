"""Output formatters for DepLens results."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.resolver import ResolutionResult
from ..utils.logging import get_logger


class ConsoleFormatter:
    """Rich console formatter for resolution results."""

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize the console formatter.

        Args:
            console: Rich console instance
        """
        self.console = console or Console()
        self.logger = get_logger("ConsoleFormatter")

    def format_dependencies(self, result: ResolutionResult) -> None:
        """Display resolved dependencies with a summary panel.

        Args:
            result: Resolution result to display
        """
        self.console.print(self._create_summary_panel(result))

        for warning in result.warnings:
            self.console.print(Panel(Text(warning), style="yellow"))

        if result.dependencies:
            self.console.print(self._create_dependencies_table(result))

    def _create_summary_panel(self, result: ResolutionResult) -> Panel:
        manager = result.manager.value if result.manager else "none"
        if result.error:
            return Panel(Text(result.error), title=f"Resolution failed ({manager})", style="red")

        content = Text(
            f"Manager: {manager}\n"
            f"Manifest: {result.manifest}\n"
            f"Dependencies: {len(result.dependencies)}"
        )
        title = "Dependencies resolved" if result.dependencies else "No dependencies found"
        return Panel(content, title=title, style="green")

    def _create_dependencies_table(self, result: ResolutionResult) -> Table:
        table = Table(title=f"Go dependencies ({result.manifest.name if result.manifest else ''})")

        table.add_column("Namespace", style="magenta")
        table.add_column("Name", style="cyan", no_wrap=True)
        table.add_column("Version", style="blue")
        table.add_column("Revision", style="yellow")

        for dep in result.dependencies:
            table.add_row(
                dep.namespace or "",
                dep.name,
                dep.version or "-",
                dep.revision or "-",
            )

        return table


class JSONFormatter:
    """JSON formatter for resolution results."""

    def __init__(self, output_path: Optional[Path] = None) -> None:
        """Initialize the JSON formatter.

        Args:
            output_path: File the results are written to
        """
        self.output_path = output_path
        self.logger = get_logger("JSONFormatter")

    def format_results(self, result: ResolutionResult) -> Dict[str, Any]:
        """Build a JSON-serializable document from a resolution result.

        Args:
            result: Resolution result

        Returns:
            Dictionary ready for ``json.dump``
        """
        return {
            "generated_at": datetime.now().isoformat(),
            "manager": result.manager.value if result.manager else None,
            "root": str(result.root) if result.root else None,
            "manifest": str(result.manifest) if result.manifest else None,
            "error": result.error,
            "warnings": list(result.warnings),
            "excludes": sorted(result.excludes),
            "total": len(result.dependencies),
            "dependencies": result.to_records(),
        }

    def to_json(self, result: ResolutionResult) -> str:
        return json.dumps(self.format_results(result), indent=2)

    def save_results(self, data: Dict[str, Any]) -> None:
        """Write a formatted document to the output path.

        Args:
            data: Document produced by :meth:`format_results`
        """
        if self.output_path is None:
            raise ValueError("No output path configured")

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        self.logger.info(f"Results saved to {self.output_path}")

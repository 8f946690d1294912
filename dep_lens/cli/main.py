"""Main CLI interface for DepLens."""

from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..utils.logging import setup_logging, get_logger
from ..utils.path_utils import detect_manager, find_manifests
from ..core.config import ResolverConfig
from ..core.parsers import DependencyParser
from ..core.resolver import GoDependencyManager, GoDependencyResolver
from ..output.formatters import ConsoleFormatter, JSONFormatter

app = typer.Typer(
    name="deplens",
    help="Extract declared Go dependencies from dep, godep and vndr manifests",
    add_completion=False
)

console = Console()
logger = get_logger("CLI")


def _build_config(flush_trailing_stanza: bool, strict: bool, ignore_source_files: bool) -> ResolverConfig:
    return ResolverConfig(
        flush_trailing_stanza=flush_trailing_stanza,
        skip_malformed_lines=not strict,
        ignore_source_files=ignore_source_files,
    )


@app.command()
def resolve(
    path: Path = typer.Argument(
        Path("."),
        help="Project root containing the manifest"
    ),
    manager: Optional[str] = typer.Option(
        None,
        "--manager",
        "-m",
        help="Dependency manager: 'dep', 'godep' or 'vndr' (detected when omitted)"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    flush_trailing_stanza: bool = typer.Option(
        False,
        "--flush-trailing-stanza",
        help="Keep a Gopkg.lock stanza that is not followed by a blank line"
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on malformed vendor.conf lines instead of skipping them"
    ),
    ignore_source_files: bool = typer.Option(
        False,
        "--ignore-source-files",
        help="Report *.go files as excluded from source scanning"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Resolve the dependencies declared by one project's manifest."""
    setup_logging(verbose=verbose)

    if not path.is_dir():
        console.print(f"[red]Error: Path is not a directory: {path}[/red]")
        raise typer.Exit(1)

    try:
        selected = GoDependencyManager.from_value(manager) if manager else detect_manager(path)
        config = _build_config(flush_trailing_stanza, strict, ignore_source_files)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    result = GoDependencyResolver(selected, config).resolve(path)
    ConsoleFormatter(console).format_dependencies(result)

    if output:
        json_formatter = JSONFormatter(output)
        json_formatter.save_results(json_formatter.format_results(result))
        console.print(f"[green]Results saved to: {output}[/green]")

    if not result.ok:
        raise typer.Exit(1)


@app.command()
def scan(
    path: Path = typer.Argument(
        Path("."),
        help="Directory tree to search for Go manifests"
    ),
    ignore_patterns: Optional[List[str]] = typer.Option(
        None,
        "--ignore",
        help="Additional ignore patterns"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Find every Go manifest below a directory and resolve each one."""
    setup_logging(verbose=verbose)

    try:
        manifests = find_manifests(path, ignore_patterns)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not manifests:
        console.print("[yellow]No Go manifests found[/yellow]")
        return

    console.print(f"Found {len(manifests)} manifests")
    failures = 0
    for manifest in manifests:
        result = GoDependencyResolver(manifest.manager).resolve(manifest.root)
        if result.ok:
            console.print(f"  ✓ {manifest.path} ({len(result.dependencies)} dependencies)")
        else:
            failures += 1
            console.print(f"  ✗ {manifest.path}: {escape(result.error)}")

    if failures:
        logger.error(f"{failures} of {len(manifests)} manifests failed to resolve")
        raise typer.Exit(1)


@app.command()
def managers() -> None:
    """Show supported dependency managers."""
    console.print(Panel.fit(
        "[bold blue]DepLens[/bold blue]\n"
        "Declared Go dependencies from dep, godep and vndr manifests",
        title="Information"
    ))

    table = Table(title="Supported Managers")
    table.add_column("Manager", style="cyan")
    table.add_column("Manifest", style="blue")
    table.add_column("Regenerate with", style="yellow")

    registered = DependencyParser.get_supported_parser_types()
    for go_manager in GoDependencyManager:
        if go_manager.value in registered:
            table.add_row(go_manager.value, go_manager.manifest_name, go_manager.remediation)

    console.print(table)


def main() -> None:
    """Main entry point for DepLens CLI."""
    app()


if __name__ == "__main__":
    main()

"""
impact-radar command line interface.

Commands for scanning a repository, building its dependency graph, and
computing the blast radius of a set of changed files.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from impact_radar import __version__
from impact_radar.config import Config, load_config
from impact_radar.exceptions import ImpactRadarError
from impact_radar.graph.builder import BuildResult, GraphBuilder
from impact_radar.graph.traversal import ImpactAnalyzer
from impact_radar.indexing.scanner import RepoScanner

console = Console()
error_console = Console(stderr=True)

logger = structlog.get_logger(__name__)


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]![/bold yellow] {escape(message)}")


def configure_logging(level: str) -> None:
    """Route structlog output through a level filter."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def build_graph(config: Config) -> tuple[list[str], BuildResult]:
    """Scan the project and build its dependency graph."""
    files = RepoScanner.from_config(config).scan()
    logger.info("Scanned repo files", files=len(files), cap=config.scan.max_files)

    result = GraphBuilder.from_config(config).build(files, debug=config.debug)
    logger.info(
        "Dependency graph built",
        nodes=len(result.graph),
        edges=result.graph.edge_count(),
        external_imports=result.stats.external_imports,
    )
    return files, result


@click.group()
@click.version_option(version=__version__, prog_name="impact-radar")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    help="Project root directory",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging and debug summaries",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None, project: Path, verbose: bool) -> None:
    """impact-radar - estimate the blast radius of a code change."""
    ctx.ensure_object(dict)

    try:
        loaded = load_config(config_path=config, project_root=project)
    except ImpactRadarError as e:
        print_error(str(e))
        sys.exit(1)

    if verbose:
        loaded = loaded.model_copy(update={"debug": True, "log_level": "DEBUG"})

    configure_logging(loaded.log_level)
    ctx.obj["config"] = loaded


@cli.command()
@click.option("--list", "list_files", is_flag=True, help="Print every candidate file")
@click.pass_context
def scan(ctx: click.Context, list_files: bool) -> None:
    """List candidate source files."""
    config: Config = ctx.obj["config"]

    try:
        files = RepoScanner.from_config(config).scan()
    except ImpactRadarError as e:
        print_error(str(e))
        sys.exit(1)

    console.print(f"[bold]{len(files)}[/bold] candidate files (cap={config.scan.max_files})")
    if list_files:
        for path in files:
            console.print(path, highlight=False)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the graph as JSON")
@click.pass_context
def graph(ctx: click.Context, as_json: bool) -> None:
    """Build the dependency graph and print its statistics."""
    config: Config = ctx.obj["config"]

    try:
        _, result = build_graph(config)
    except ImpactRadarError as e:
        print_error(str(e))
        sys.exit(1)

    if as_json:
        payload = {"stats": result.stats.to_dict(), **result.graph.to_dict()}
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title="Dependency Graph")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Nodes", str(len(result.graph)))
    table.add_row("Edges", str(result.graph.edge_count()))
    table.add_row("Parsed files", str(result.stats.parsed_files))
    table.add_row("External imports", str(result.stats.external_imports))
    table.add_row("Unresolved imports", str(result.stats.unresolved_imports))
    console.print(table)


@cli.command()
@click.argument("changed", nargs=-1, required=True)
@click.option("--max-depth", "-d", type=click.IntRange(1, 12), help="Traversal depth limit")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def impact(ctx: click.Context, changed: tuple[str, ...], max_depth: int | None, as_json: bool) -> None:
    """Show files affected by changes to CHANGED."""
    config: Config = ctx.obj["config"]

    try:
        _, result = build_graph(config)
    except ImpactRadarError as e:
        print_error(str(e))
        sys.exit(1)

    analyzer = ImpactAnalyzer(result.graph, max_depth=config.graph.max_depth)
    report = analyzer.analyze(changed, max_depth=max_depth)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    for warning in report.warnings:
        print_warning(warning)

    table = Table(title=f"Affected files (depth <= {report.max_depth})")
    table.add_column("File", style="cyan")
    table.add_column("Depth", justify="right")
    table.add_column("Dependents", justify="right")
    for path in sorted(report.affected, key=lambda p: (report.affected[p], p)):
        table.add_row(path, str(report.affected[path]), str(len(result.graph.in_neighbors(path))))
    console.print(table)

    if report.top_dependents:
        console.print("\n[bold]Most depended-upon changed files:[/bold]")
        for path in report.top_dependents:
            console.print(f"  {path} ({len(result.graph.in_neighbors(path))} direct dependents)")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()

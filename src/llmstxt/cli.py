"""CLI interface for llmstxt."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from llmstxt.config import load_config, merge_cli_overrides, warn_if_relative
from llmstxt.errors import GenerationReport
from llmstxt.pipeline import generate_llms_files_sync
from llmstxt.sources import load_directory

app = typer.Typer(
    name="llmstxt",
    help="Generate llms.txt and llms-full.txt from rendered site content.",
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from llmstxt import __version__

        console.print(f"llmstxt {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """llmstxt - LLM-friendly text artifacts for static sites."""
    pass


def _render_report(report: GenerationReport) -> None:
    if not report.written and not report.has_errors:
        console.print("[yellow]Nothing to write: no eligible content found.[/yellow]")
        return

    table = Table(title="llms.txt generation")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Candidates", str(report.candidates))
    table.add_row("Eligible", str(report.eligible))
    table.add_row("Dropped", str(len(report.dropped)))
    table.add_row("Files written", str(len(report.written)))
    console.print(table)

    for path in report.written:
        console.print(f"[green]Wrote[/green] {path}")
    for dropped in report.dropped:
        console.print(f"[dim]Skipped {dropped.input_path}: {dropped.reason}[/dim]")
    for error in report.errors:
        console.print(f"[red]Failed to write {error.source}: {error.message}[/red]")


@app.command()
def generate(
    content_dir: Annotated[
        Path,
        typer.Argument(
            help="Directory of rendered Markdown content.",
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Build output directory for the generated files."),
    ] = Path("_site"),
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .llmstxt.toml config file."),
    ] = None,
    site_url: Annotated[
        Optional[str],
        typer.Option("--site-url", help="Absolute base URL used for links."),
    ] = None,
    include_drafts: Annotated[
        Optional[bool],
        typer.Option("--include-drafts/--exclude-drafts", help="Include draft pages."),
    ] = None,
    all_files: Annotated[
        bool,
        typer.Option("--all-files", help="Consider every file, not only Markdown sources."),
    ] = False,
    source_comment: Annotated[
        Optional[bool],
        typer.Option(
            "--source-comment/--no-source-comment",
            help="Prefix each llms-full.txt block with a source comment.",
        ),
    ] = None,
    llms_filename: Annotated[
        Optional[str],
        typer.Option("--llms-filename", help="File name of the index artifact."),
    ] = None,
    llms_full_filename: Annotated[
        Optional[str],
        typer.Option("--llms-full-filename", help="File name of the full-content artifact."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug output."),
    ] = False,
) -> None:
    """Generate llms.txt and llms-full.txt from a content directory."""
    _setup_logging(verbose)

    config = merge_cli_overrides(
        load_config(config_path),
        site_url=site_url,
        include_drafts=include_drafts,
        markdown_only=False if all_files else None,
        include_source_comment=source_comment,
        llms_filename=llms_filename,
        llms_full_filename=llms_full_filename,
    )
    warn_if_relative(config)

    items = load_directory(content_dir)
    report = generate_llms_files_sync(items, output, config)
    _render_report(report)

    if report.has_errors:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

"""Main analysis command: run the pipeline and write ONBOARD.md."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import OnboardxError
from ..logging_config import setup_logging
from ..pipeline import run_analysis
from ..visualization import render_diagrams, write_report
from . import app
from ._common import console, resolve_config, top_files_table


@app.command("analyze")
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Repository root to analyze",
        file_okay=False,
        dir_okay=True,
    ),
    out: Path = typer.Option(
        Path("ONBOARD.md"),
        "-o",
        "--out",
        help="Output report file",
    ),
    diagrams: bool = typer.Option(
        False,
        "--diagrams",
        help="Print the Mermaid diagrams and embed them in the report",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        help="Number of files to promote into the report",
        min=1,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging below ERROR",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        hidden=True,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
    ),
):
    """
    Rank a repository's files by churn, ownership and import depth.

    This is the default command, so [bold]onboardx PATH[/bold] runs it.
    Missing git history or an unparsable project degrades the affected
    signal; the report is still written.

    [bold cyan]Examples:[/bold cyan]

      onboardx

      onboardx /path/to/repo --out docs/ONBOARD.md

      onboardx --diagrams

      onboardx init-ci
    """
    from .. import __version__

    if version:
        console.print(f"[bold cyan]onboardx[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)

    logger = setup_logging(
        verbose=verbose, quiet=quiet, log_file=str(log_file) if log_file else None
    )

    try:
        settings = resolve_config(config=config, top=top)
    except OnboardxError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    logger.info("Analyzing %s", path)
    result = run_analysis(str(path), settings)

    if result.top_files:
        console.print(top_files_table(result))
    else:
        console.print("[yellow]No churn data found.[/yellow] Is this a git repository?")

    if diagrams:
        for title, diagram in render_diagrams(result, settings).items():
            console.rule(title)
            # Plain print keeps Mermaid text free of rich markup handling
            typer.echo(diagram)

    try:
        report_path = write_report(result, str(out), include_diagrams=diagrams, config=settings)
    except OSError as e:
        logger.debug("Report write failed", exc_info=True)
        console.print(f"[red]Error:[/red] cannot write {out}: {e}")
        raise typer.Exit(1)

    console.print(f"\nReport saved to: [bold green]{report_path}[/bold green]")

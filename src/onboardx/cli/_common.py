"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from ..config import AnalysisConfig, load_config
from ..pipeline.models import AnalysisResult

console = Console()


def resolve_config(config: Optional[Path] = None, top: Optional[int] = None) -> AnalysisConfig:
    """Build configuration from CLI options."""
    overrides = {}
    if top is not None:
        overrides["top_n"] = top
    return load_config(config_file=config, **overrides)


def top_files_table(result: AnalysisResult) -> Table:
    table = Table(title="Top files by churn", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("File", style="cyan")
    table.add_column("Churn", justify="right")
    table.add_column("Primary contributor")
    table.add_column("Commits", justify="right")
    table.add_column("Depth", justify="right")
    for rank, ranked in enumerate(result.top_files, start=1):
        table.add_row(
            str(rank),
            ranked.file,
            str(ranked.churn),
            ranked.primary_contributor,
            str(ranked.contribution_count),
            str(ranked.import_depth),
        )
    return table

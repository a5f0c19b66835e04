"""Markdown onboarding report (ONBOARD.md)."""

from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig
from ..pipeline.models import AnalysisResult
from .mermaid import (
    GraphOptions,
    fenced,
    generate_churn_vs_depth_scatter,
    generate_dependency_graph,
    generate_ownership_graph,
)


def render_diagrams(
    result: AnalysisResult, config: Optional[AnalysisConfig] = None
) -> dict[str, str]:
    """The three report diagrams, keyed by section title."""
    config = config or AnalysisConfig()
    options = GraphOptions(
        direction=config.graph_direction,
        max_nodes=config.report_graph_max_nodes,
        include_churn=True,
        include_ownership=True,
    )
    return {
        "Dependency Graph": generate_dependency_graph(
            result.depth, result.churn, result.ownership, options, config.thresholds
        ),
        "Churn vs Import Depth": generate_churn_vs_depth_scatter(
            result.top_files, config.thresholds
        ),
        "Code Ownership": generate_ownership_graph(result.ownership),
    }


def build_report(
    result: AnalysisResult,
    include_diagrams: bool = False,
    config: Optional[AnalysisConfig] = None,
) -> str:
    """Render the ranked files, and optionally the diagrams, as markdown."""
    repo_name = Path(result.repo_root).resolve().name or result.repo_root
    lines = [f"# Onboarding guide: {repo_name}", ""]

    lines.append("## Top files by churn")
    lines.append("")
    if not result.top_files:
        lines.append("_No churn data: the repository has no readable git history in the window._")
    else:
        lines.append("| # | File | Churn | Primary contributor | Commits | Import depth |")
        lines.append("|---|------|------:|---------------------|--------:|-------------:|")
        for rank, ranked in enumerate(result.top_files, start=1):
            owner = ranked.primary_contributor.replace("|", "\\|")
            lines.append(
                f"| {rank} | `{ranked.file}` | {ranked.churn} | {owner} "
                f"| {ranked.contribution_count} | {ranked.import_depth} |"
            )
    lines.append("")

    if include_diagrams:
        for title, diagram in render_diagrams(result, config).items():
            lines.append(f"## {title}")
            lines.append("")
            lines.append(fenced(diagram))

    return "\n".join(lines).rstrip() + "\n"


def write_report(
    result: AnalysisResult,
    output_path: str = "ONBOARD.md",
    include_diagrams: bool = False,
    config: Optional[AnalysisConfig] = None,
) -> Path:
    """Write the report and return its absolute path."""
    path = Path(output_path)
    path.write_text(build_report(result, include_diagrams, config), encoding="utf-8")
    return path.resolve()

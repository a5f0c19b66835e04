"""Visualization layer: Mermaid diagrams and the markdown report."""

from .mermaid import (
    GraphOptions,
    display_name,
    generate_churn_vs_depth_scatter,
    generate_dependency_graph,
    generate_ownership_graph,
)
from .report import build_report, render_diagrams, write_report

__all__ = [
    "GraphOptions",
    "display_name",
    "generate_dependency_graph",
    "generate_churn_vs_depth_scatter",
    "generate_ownership_graph",
    "build_report",
    "render_diagrams",
    "write_report",
]

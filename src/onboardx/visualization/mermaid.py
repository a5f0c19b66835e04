"""Mermaid diagrams for the onboarding report.

All functions are pure: the same records in the same order always give
the same text, and empty input still yields a valid diagram.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional, Sequence

from ..config import DEFAULT_THRESHOLDS, Direction, ThresholdConfig
from ..graph.models import ImportDepthRecord
from ..pipeline.models import RankedFile
from ..temporal.models import ChurnRecord, OwnershipRecord

MAX_NAME_LENGTH = 25
TRUNCATED_LENGTH = 22
EDGES_PER_NODE = 2


@dataclass(frozen=True)
class GraphOptions:
    title: Optional[str] = "File Dependency Graph"
    direction: Direction = "TD"
    max_nodes: int = 20
    include_churn: bool = False
    include_ownership: bool = False


def generate_dependency_graph(
    import_results: Sequence[ImportDepthRecord],
    churn_results: Optional[Sequence[ChurnRecord]] = None,
    ownership_results: Optional[Sequence[OwnershipRecord]] = None,
    options: Optional[GraphOptions] = None,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> str:
    """Render the deepest files as a layered graph.

    Edges are not the real import relation. Nodes are grouped by depth and
    every node of one depth layer links to the first two nodes of the next
    layer, which gives a layered overview without rebuilding the graph.
    """
    options = options or GraphOptions()
    churn_map = {c.file: c.churn for c in churn_results or ()}
    owner_map = {o.file: o.primary_contributor for o in ownership_results or ()}
    top_files = list(import_results)[: options.max_nodes]

    lines = [f"graph {options.direction}"]
    if options.title:
        lines.append('    subgraph " "')
        lines.append("        direction TB")
        lines.append(f'        title["{_escape(options.title)}"]')
        lines.append("    end")
        lines.append("")

    node_ids: dict[str, str] = {}
    for counter, record in enumerate(top_files, start=1):
        node_id = f"node{counter}"
        node_ids[record.file] = node_id
        label = display_name(record.file)
        node_class = "default"

        if options.include_churn and record.file in churn_map:
            churn = churn_map[record.file]
            label += f"<br/>📈 {churn} changes"
            node_class = churn_tier(churn, thresholds)

        if options.include_ownership and record.file in owner_map:
            label += f"<br/>👤 {_escape(owner_map[record.file])}"

        label += f"<br/>🔗 depth: {record.depth}"
        lines.append(f'    {node_id}["{label}"]')
        if node_class != "default":
            lines.append(f"    class {node_id} {node_class}")

    depth_groups: dict[int, list[str]] = {}
    for record in top_files:
        depth_groups.setdefault(record.depth, []).append(record.file)

    layers = sorted(depth_groups)
    for current, following in zip(layers, layers[1:]):
        for current_file in depth_groups[current]:
            for next_file in depth_groups[following][:EDGES_PER_NODE]:
                lines.append(f"    {node_ids[current_file]} --> {node_ids[next_file]}")

    lines.append("")
    lines.append("    classDef high-churn fill:#ffcccc,stroke:#ff0000,stroke-width:2px")
    lines.append("    classDef med-churn fill:#ffffcc,stroke:#ffaa00,stroke-width:2px")
    lines.append("    classDef low-churn fill:#ccffcc,stroke:#00aa00,stroke-width:2px")
    lines.append("    classDef default fill:#e1f5fe,stroke:#0277bd,stroke-width:2px")
    return "\n".join(lines) + "\n"


def generate_churn_vs_depth_scatter(
    files: Sequence[RankedFile], thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> str:
    """Place each joined file in a churn x depth risk quadrant."""
    lines = ["graph TD", '    subgraph "Churn vs Import Depth Analysis"', "        direction TB"]

    for index, ranked in enumerate(files):
        node_id = f"file{index}"
        label = (
            f"{display_name(ranked.file)}<br/>📈 {ranked.churn} changes"
            f"<br/>🔗 depth {ranked.import_depth}"
        )
        quadrant = risk_quadrant(ranked.churn, ranked.import_depth, thresholds)
        lines.append(f'        {node_id}["{label}"]')
        lines.append(f"        class {node_id} {quadrant}")

    lines.append("    end")
    lines.append("")
    lines.append("    classDef high-risk fill:#ff6b6b,stroke:#d63031,stroke-width:3px")
    lines.append("    classDef high-churn-low-depth fill:#fdcb6e,stroke:#e17055,stroke-width:2px")
    lines.append("    classDef low-churn-high-depth fill:#74b9ff,stroke:#0984e3,stroke-width:2px")
    lines.append("    classDef stable fill:#55a3ff,stroke:#00b894,stroke-width:2px")
    return "\n".join(lines) + "\n"


def generate_ownership_graph(ownership_results: Sequence[OwnershipRecord]) -> str:
    """One node per primary contributor, linked to each file they own."""
    owner_groups: dict[str, list[OwnershipRecord]] = {}
    for record in ownership_results:
        owner_groups.setdefault(record.primary_contributor, []).append(record)

    lines = ["graph TD", '    subgraph "Code Ownership Map"', "        direction TB"]
    counter = 1
    for owner, owned in owner_groups.items():
        owner_id = f"owner{counter}"
        counter += 1
        lines.append(f'        {owner_id}["👤 {_escape(owner)}<br/>{len(owned)} files"]')
        for record in owned:
            file_id = f"file{counter}"
            counter += 1
            lines.append(
                f'        {file_id}["{display_name(record.file)}<br/>'
                f'{record.contribution_count} commits"]'
            )
            lines.append(f"        {owner_id} --> {file_id}")

    lines.append("    end")
    return "\n".join(lines) + "\n"


def churn_tier(churn: int, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> str:
    if churn > thresholds.high_churn:
        return "high-churn"
    if churn > thresholds.medium_churn:
        return "med-churn"
    return "low-churn"


def risk_quadrant(churn: int, depth: int, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> str:
    high_churn = churn > thresholds.risk_churn
    deep = depth > thresholds.risk_depth
    if high_churn and deep:
        return "high-risk"
    if high_churn:
        return "high-churn-low-depth"
    if deep:
        return "low-churn-high-depth"
    return "stable"


def display_name(file_path: str) -> str:
    """Base name of ``file_path``, truncated to keep nodes narrow."""
    name = PurePosixPath(file_path.replace("\\", "/")).name
    if len(name) > MAX_NAME_LENGTH:
        name = name[:TRUNCATED_LENGTH] + "..."
    return _escape(name)


def fenced(diagram: str) -> str:
    return f"```mermaid\n{diagram.rstrip()}\n```\n"


def _escape(text: str) -> str:
    # A bare double quote ends a Mermaid label
    return text.replace('"', "#quot;")

"""Import-depth scoring pass."""

from __future__ import annotations

from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import AnalysisError
from ..logging_config import get_logger
from .builder import build_import_graph
from .depth import compute_depths
from .models import ImportDepthRecord
from .parser import SourceProject

logger = get_logger(__name__)


def score_import_depth(
    repo_root: str, config: Optional[AnalysisConfig] = None
) -> list[ImportDepthRecord]:
    """Score every source file by how deep in the import chain it is consumed.

    Returns records sorted by depth descending, ties in discovery order.
    Returns an empty list if the project cannot be loaded.
    """
    try:
        project = SourceProject.load(repo_root, config)
        graph = build_import_graph(project)
    except (AnalysisError, OSError) as e:
        logger.warning("Import depth unavailable for %s: %s", repo_root, e)
        return []

    depths = compute_depths(graph)
    records = [ImportDepthRecord(file=f, depth=d) for f, d in zip(graph.files, depths)]
    return sorted(records, key=lambda r: r.depth, reverse=True)

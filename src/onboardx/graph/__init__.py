"""Import graph: source discovery, reverse-import graph, depth scoring."""

from .builder import build_import_graph
from .depth import compute_depths
from .engine import score_import_depth
from .models import ImportDepthRecord, ImportGraph
from .parser import SourceProject

__all__ = [
    "ImportDepthRecord",
    "ImportGraph",
    "SourceProject",
    "build_import_graph",
    "compute_depths",
    "score_import_depth",
]

"""Reverse-import graph construction from parsed import specifiers."""

import posixpath
from pathlib import PurePosixPath
from typing import Optional

from ..logging_config import get_logger
from .models import ImportGraph
from .parser import SourceProject, language_of

logger = get_logger(__name__)

# ESM sources often import "./x.js" while the file on disk is "./x.ts".
_COMPILED_TO_SOURCE = {
    ".js": (".ts", ".tsx"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}


def build_import_graph(project: SourceProject) -> ImportGraph:
    """Build the reverse-import graph for every source file in ``project``.

    Only specifiers that resolve to another discovered file produce an
    edge; external packages and unresolvable paths are dropped.
    """
    files = project.source_files()
    graph = ImportGraph.from_files(files)
    all_paths = set(files)
    module_index = _build_module_index(all_paths)
    extensions = project.config.source_extensions
    unresolved = 0

    for path in files:
        language = language_of(path)
        for spec in project.import_specifiers(path):
            if language == "python":
                resolved = _resolve_python(spec, path, module_index, all_paths)
            else:
                resolved = _resolve_javascript(
                    spec, path, all_paths, extensions, project.base_url
                )
            if resolved is None:
                unresolved += 1
                continue
            graph.add_edge(path, resolved)

    logger.debug(
        "Import graph: %d files, %d edges, %d unresolved specifiers",
        len(graph), graph.edge_count, unresolved,
    )
    return graph


def _resolve_javascript(
    spec: str,
    source_path: str,
    all_paths: set[str],
    extensions: list[str],
    base_url: Optional[str],
) -> Optional[str]:
    """Resolve a relative, root-relative, or baseUrl-relative specifier."""
    spec = spec.split("?", 1)[0]
    if spec.startswith("."):
        target = posixpath.join(posixpath.dirname(source_path), spec)
    elif spec.startswith("/"):
        target = spec.lstrip("/")
    elif base_url is not None:
        target = posixpath.join(base_url, spec) if base_url else spec
    else:
        return None

    target = posixpath.normpath(target)
    if target.startswith("..") or target == ".":
        return None
    return _match_candidates(target, all_paths, extensions)


def _match_candidates(target: str, all_paths: set[str], extensions: list[str]) -> Optional[str]:
    """Try the literal path, each extension, then ``index.<ext>`` in a directory."""
    if target in all_paths:
        return target

    for ext in extensions:
        if target + ext in all_paths:
            return target + ext

    stem, suffix = posixpath.splitext(target)
    for replacement in _COMPILED_TO_SOURCE.get(suffix, ()):
        if stem + replacement in all_paths:
            return stem + replacement

    for ext in extensions:
        index_path = posixpath.join(target, "index" + ext)
        if index_path in all_paths:
            return index_path

    return None


def _build_module_index(all_paths: set[str]) -> dict[str, str]:
    """Map dotted Python module paths to file paths.

    "src/pkg/models.py" is reachable as "src.pkg.models" and "pkg.models".
    """
    index: dict[str, str] = {}
    for path in sorted(all_paths):
        if not path.endswith(".py"):
            continue
        dotted = path[: -len(".py")].replace("/", ".")
        if dotted.endswith(".__init__"):
            dotted = dotted[: -len(".__init__")]
        index.setdefault(dotted, path)
        if dotted.startswith("src."):
            index.setdefault(dotted[len("src."):], path)
    return index


def _resolve_python(
    spec: str, source_path: str, module_index: dict[str, str], all_paths: set[str]
) -> Optional[str]:
    if spec.startswith("."):
        return _resolve_python_relative(spec, source_path, all_paths)
    return module_index.get(spec)


def _resolve_python_relative(spec: str, source_path: str, all_paths: set[str]) -> Optional[str]:
    """Resolve a Python relative import like ..models or .base."""
    dot_count = len(spec) - len(spec.lstrip("."))
    module_part = spec[dot_count:]

    source_dir = PurePosixPath(source_path).parent
    for _ in range(dot_count - 1):  # a single dot is the current package
        if source_dir == PurePosixPath("."):
            return None
        source_dir = source_dir.parent

    if module_part:
        module_as_path = source_dir / module_part.replace(".", "/")
        candidates = [f"{module_as_path}.py", f"{module_as_path}/__init__.py"]
    else:
        candidates = [f"{source_dir}/__init__.py"]

    for candidate in candidates:
        candidate = posixpath.normpath(candidate)
        if candidate in all_paths:
            return candidate

    return None

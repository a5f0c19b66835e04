"""Data models for the reverse-import graph."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImportDepthRecord:
    file: str  # repo-relative POSIX path
    depth: int  # 1 = imported by nothing


@dataclass
class ImportGraph:
    """Arena-indexed reverse-import graph.

    Node ``i`` is ``files[i]``. ``importers[i]`` lists the indices of the
    files that import ``files[i]``.
    """

    files: list[str] = field(default_factory=list)
    index: dict[str, int] = field(default_factory=dict)
    importers: list[list[int]] = field(default_factory=list)
    edge_count: int = 0

    @classmethod
    def from_files(cls, files: list[str]) -> "ImportGraph":
        graph = cls()
        for path in files:
            graph.add_node(path)
        return graph

    def add_node(self, path: str) -> int:
        if path in self.index:
            return self.index[path]
        idx = len(self.files)
        self.files.append(path)
        self.index[path] = idx
        self.importers.append([])
        return idx

    def add_edge(self, importer: str, imported: str) -> None:
        """Record that ``importer`` imports ``imported``. Duplicates are ignored."""
        src = self.index[importer]
        dst = self.index[imported]
        if src in self.importers[dst]:
            return
        self.importers[dst].append(src)
        self.edge_count += 1

    def __len__(self) -> int:
        return len(self.files)

"""Tests for depth computation over the reverse-import graph."""

from onboardx.graph.depth import compute_depths
from onboardx.graph.engine import score_import_depth
from onboardx.graph.models import ImportGraph


def make_graph(files, edges):
    """Build a graph from (importer, imported) pairs."""
    graph = ImportGraph.from_files(files)
    for importer, imported in edges:
        graph.add_edge(importer, imported)
    return graph


def depth_map(graph):
    return dict(zip(graph.files, compute_depths(graph)))


class TestComputeDepths:
    def test_fixture_chain(self):
        graph = make_graph(
            ["a", "b", "c", "d"], [("a", "b"), ("b", "c"), ("d", "b")]
        )
        assert depth_map(graph) == {"a": 1, "b": 2, "c": 3, "d": 1}

    def test_unimported_file_is_depth_one(self):
        graph = make_graph(["solo"], [])
        assert depth_map(graph) == {"solo": 1}

    def test_self_import_terminates(self):
        graph = make_graph(["a"], [("a", "a")])
        depths = depth_map(graph)
        assert depths["a"] == 2

    def test_mutual_import_terminates(self):
        graph = make_graph(["a", "b"], [("a", "b"), ("b", "a")])
        depths = depth_map(graph)
        assert all(d >= 1 for d in depths.values())
        assert depths == {"a": 3, "b": 2}

    def test_cycle_feeding_a_chain(self):
        graph = make_graph(
            ["x", "y", "z"], [("x", "y"), ("y", "x"), ("y", "z")]
        )
        depths = depth_map(graph)
        assert depths["z"] == depths["y"] + 1

    def test_deep_chain_does_not_hit_recursion_limit(self):
        n = 5000
        files = [f"f{i}" for i in range(n)]
        edges = [(files[i], files[i + 1]) for i in range(n - 1)]
        # deepest file first, so the first traversal walks the whole chain
        depths = depth_map(make_graph(list(reversed(files)), edges))
        assert depths["f0"] == 1
        assert depths[f"f{n - 1}"] == n

    def test_diamond_takes_longest_path(self):
        graph = make_graph(
            ["top", "left", "mid", "right", "bottom"],
            [
                ("top", "left"),
                ("top", "mid"),
                ("mid", "right"),
                ("left", "bottom"),
                ("right", "bottom"),
            ],
        )
        assert depth_map(graph)["bottom"] == 4

    def test_duplicate_edges_collapsed(self):
        graph = make_graph(["a", "b"], [("a", "b"), ("a", "b")])
        assert graph.edge_count == 1
        assert graph.importers[graph.index["b"]] == [graph.index["a"]]


class TestScoreImportDepth:
    def test_basic_fixture_depths(self, basic_ts_repo):
        results = score_import_depth(str(basic_ts_repo))
        assert {r.file: r.depth for r in results} == {"c.ts": 3, "b.ts": 2, "a.ts": 1, "d.ts": 1}
        assert len(results) == 4

    def test_sorted_by_depth_descending(self, basic_ts_repo):
        results = score_import_depth(str(basic_ts_repo))
        for current, following in zip(results, results[1:]):
            assert current.depth >= following.depth
        assert results[0].file == "c.ts"
        assert results[0].depth == 3
        assert [r.file for r in results] == ["c.ts", "b.ts", "a.ts", "d.ts"]

    def test_paths_are_relative(self, basic_ts_repo):
        for record in score_import_depth(str(basic_ts_repo)):
            assert not record.file.startswith("/")
            assert record.depth >= 1

    def test_nonexistent_root_returns_empty(self):
        assert score_import_depth("/non/existent/directory") == []

    def test_missing_project_config_returns_empty(self, tmp_path):
        (tmp_path / "a.ts").write_text("import './b'\n")
        assert score_import_depth(str(tmp_path)) == []

    def test_unparsable_project_config_returns_empty(self, tmp_path):
        (tmp_path / "tsconfig.json").write_text("{ not json")
        (tmp_path / "a.ts").write_text("export const a = 1\n")
        assert score_import_depth(str(tmp_path)) == []

    def test_undecodable_tsconfig_returns_empty(self, tmp_path):
        (tmp_path / "tsconfig.json").write_bytes(b'{"compilerOptions": {"baseUrl": "\xff\xfe"}}')
        (tmp_path / "a.ts").write_text("export const a = 1\n")
        assert score_import_depth(str(tmp_path)) == []

    def test_undecodable_pyproject_returns_empty(self, tmp_path):
        (tmp_path / "pyproject.toml").write_bytes(b'[project]\nname = "\xff\xfe"\n')
        (tmp_path / "a.py").write_text("import b\n")
        assert score_import_depth(str(tmp_path)) == []

    def test_tsconfig_with_byte_order_mark(self, tmp_path):
        (tmp_path / "tsconfig.json").write_bytes(b"\xef\xbb\xbf{}")
        (tmp_path / "a.ts").write_text("import { b } from './b'\n")
        (tmp_path / "b.ts").write_text("export const b = 1\n")
        results = {r.file: r.depth for r in score_import_depth(str(tmp_path))}
        assert results == {"b.ts": 2, "a.ts": 1}

    def test_circular_imports(self, tmp_path):
        (tmp_path / "tsconfig.json").write_text("{}")
        (tmp_path / "a.ts").write_text("import { b } from './b'\nexport const a = 1\n")
        (tmp_path / "b.ts").write_text("import { a } from './a'\nexport const b = 2\n")
        (tmp_path / "self.ts").write_text("import './self'\n")
        results = {r.file: r.depth for r in score_import_depth(str(tmp_path))}
        assert results == {"a.ts": 3, "b.ts": 2, "self.ts": 2}

"""Tests for source discovery, import extraction and graph building."""

import pytest

from onboardx.exceptions import ProjectConfigError
from onboardx.graph.builder import build_import_graph
from onboardx.graph.parser import SourceProject


def write(root, files):
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


def edges(graph):
    """Set of (importer, imported) pairs."""
    return {
        (graph.files[src], graph.files[dst])
        for dst, importers in enumerate(graph.importers)
        for src in importers
    }


class TestSourceProjectLoad:
    def test_requires_directory(self, tmp_path):
        with pytest.raises(ProjectConfigError):
            SourceProject.load(str(tmp_path / "missing"))

    def test_requires_configuration(self, tmp_path):
        with pytest.raises(ProjectConfigError) as excinfo:
            SourceProject.load(str(tmp_path))
        assert "no project configuration" in str(excinfo.value)

    def test_tsconfig_with_comments_and_urls(self, tmp_path):
        write(
            tmp_path,
            {
                "tsconfig.json": (
                    '{\n  "$schema": "https://json.schemastore.org/tsconfig",\n'
                    "  /* block */\n"
                    '  "compilerOptions": {"baseUrl": "./src", // line\n  },\n}\n'
                )
            },
        )
        project = SourceProject.load(str(tmp_path))
        assert project.config_file.name == "tsconfig.json"
        assert project.base_url == "src"

    def test_invalid_pyproject(self, tmp_path):
        write(tmp_path, {"pyproject.toml": "[project\nname = "})
        with pytest.raises(ProjectConfigError):
            SourceProject.load(str(tmp_path))

    def test_setup_py_marks_python_project(self, tmp_path):
        write(tmp_path, {"setup.py": "from setuptools import setup\nsetup()\n"})
        project = SourceProject.load(str(tmp_path))
        assert project.config_file.name == "setup.py"


class TestSourceFiles:
    def test_filters(self, tmp_path):
        write(
            tmp_path,
            {
                "tsconfig.json": "{}",
                "src/app.ts": "",
                "src/view.tsx": "",
                "src/types.d.ts": "",
                "src/app.test.ts": "",
                "src/app.spec.tsx": "",
                "src/data.json": "",
                "README.md": "",
                "node_modules/lib/index.ts": "",
                "dist/out.js": "",
                "scripts/tool.py": "",
                "tests/test_tool.py": "",
                "scripts/tool_test.py": "",
            },
        )
        files = SourceProject.load(str(tmp_path)).source_files()
        assert files == ["scripts/tool.py", "src/app.ts", "src/view.tsx"]


class TestImportSpecifiers:
    def test_javascript_forms(self, tmp_path):
        write(
            tmp_path,
            {
                "tsconfig.json": "{}",
                "a.ts": (
                    "import def from './one'\n"
                    "import {\n  x,\n  y,\n} from './two'\n"
                    "import type { T } from './types'\n"
                    "import './side-effect'\n"
                    "export * from './reexport'\n"
                    "const lazy = import('./lazy')\n"
                    "const req = require('./req')\n"
                    "// import gone from './commented'\n"
                    "/* import also from './block' */\n"
                    "const s = 'http://example.com'\n"
                    "import React from 'react'\n"
                    "import def2 from './one'\n"
                ),
            },
        )
        project = SourceProject.load(str(tmp_path))
        assert project.import_specifiers("a.ts") == [
            "./one",
            "./two",
            "./types",
            "./side-effect",
            "./reexport",
            "./lazy",
            "./req",
            "react",
        ]

    def test_python_forms(self, tmp_path):
        write(
            tmp_path,
            {
                "setup.py": "",
                "pkg/mod.py": (
                    "import os, pkg.util as u\n"
                    "from . import sibling\n"
                    "from ..base import (\n    Thing,\n    Other,\n)\n"
                    "# from pkg import hidden\n"
                ),
            },
        )
        project = SourceProject.load(str(tmp_path))
        assert project.import_specifiers("pkg/mod.py") == [
            "os",
            "pkg.util",
            ".",
            ".sibling",
            "..base",
            "..base.Thing",
            "..base.Other",
        ]

    def test_unreadable_file_yields_nothing(self, tmp_path):
        write(tmp_path, {"tsconfig.json": "{}"})
        project = SourceProject.load(str(tmp_path))
        assert project.import_specifiers("missing.ts") == []


class TestBuildImportGraph:
    def test_resolution_rules(self, tmp_path):
        write(
            tmp_path,
            {
                "tsconfig.json": '{"compilerOptions": {"baseUrl": "src"}}',
                "src/main.ts": (
                    "import './lib'\n"
                    "import { h } from './helpers.js'\n"
                    "import { c } from 'core/config'\n"
                    "import express from 'express'\n"
                    "import { x } from '../../outside'\n"
                ),
                "src/lib/index.ts": "",
                "src/helpers.ts": "",
                "src/core/config.ts": "",
            },
        )
        graph = build_import_graph(SourceProject.load(str(tmp_path)))
        assert edges(graph) == {
            ("src/main.ts", "src/lib/index.ts"),
            ("src/main.ts", "src/helpers.ts"),
            ("src/main.ts", "src/core/config.ts"),
        }

    def test_non_relative_without_base_url_is_external(self, tmp_path):
        write(
            tmp_path,
            {
                "tsconfig.json": "{}",
                "main.ts": "import { c } from 'config'\n",
                "config.ts": "",
            },
        )
        graph = build_import_graph(SourceProject.load(str(tmp_path)))
        assert graph.edge_count == 0

    def test_python_resolution(self, tmp_path):
        write(
            tmp_path,
            {
                "pyproject.toml": "[project]\nname = 'demo'\n",
                "src/demo/__init__.py": "",
                "src/demo/models.py": "",
                "src/demo/core.py": "from .models import Model\nimport json\n",
                "src/demo/cli/main.py": "from ..core import run\nimport demo.models\n",
            },
        )
        graph = build_import_graph(SourceProject.load(str(tmp_path)))
        assert edges(graph) == {
            ("src/demo/core.py", "src/demo/models.py"),
            ("src/demo/cli/main.py", "src/demo/core.py"),
            ("src/demo/cli/main.py", "src/demo/models.py"),
        }

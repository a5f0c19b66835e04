"""Shared test fixtures for onboardx."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from onboardx.exceptions import GitCommandError
from onboardx.temporal.git_runner import GitRunner


class FakeGitRunner(GitRunner):
    """GitRunner that serves canned output instead of calling git.

    ``authors`` maps a file path to its raw ``%an`` log output; files in
    ``failing`` raise GitCommandError.
    """

    def __init__(self, numstat_output="", authors=None, failing=(), numstat_error=False):
        super().__init__()
        self.numstat_output = numstat_output
        self.author_output = authors or {}
        self.failing = set(failing)
        self.numstat_error = numstat_error
        self.author_calls: list[str] = []

    def numstat(self, repo_root, since):
        if self.numstat_error:
            raise GitCommandError(["log", "--numstat"], "not a git repository", repo_root)
        return self.numstat_output

    def authors(self, repo_root, path):
        self.author_calls.append(path)
        if path in self.failing:
            raise GitCommandError(["log", "--follow", "--", path], "boom", repo_root)
        return self.author_output.get(path, "")


@pytest.fixture
def fake_runner():
    return FakeGitRunner


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def basic_ts_repo(tmp_path):
    """a.ts -> b.ts -> c.ts and d.ts -> b.ts (arrow = imports)."""
    return write_files(
        tmp_path,
        {
            "tsconfig.json": '{\n  // project\n  "compilerOptions": {"strict": true,},\n}\n',
            "a.ts": "import { b } from './b'\nconsole.log(b)\n",
            "b.ts": "import { c } from './c'\nexport const b = c + 1\n",
            "c.ts": "export const c = 1\n",
            "d.ts": "import { b } from './b'\nexport const d = b\n",
        },
    )


@pytest.fixture
def git_repo(tmp_path):
    """A real git repository with two authors; skipped when git is absent."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    repo = tmp_path / "repo"
    repo.mkdir()

    def git(*args, author="alice"):
        env = {
            "GIT_AUTHOR_NAME": author,
            "GIT_AUTHOR_EMAIL": f"{author}@example.com",
            "GIT_COMMITTER_NAME": author,
            "GIT_COMMITTER_EMAIL": f"{author}@example.com",
            "HOME": str(tmp_path),
            "PATH": os.environ.get("PATH", ""),
        }
        subprocess.run(["git", "-C", str(repo), *args], check=True, capture_output=True, env=env)

    git("init", "-q")
    write_files(repo, {"app.py": "import util\n" * 3, "util.py": "X = 1\n"})
    git("add", ".")
    git("commit", "-q", "-m", "initial")
    write_files(repo, {"app.py": "import util\n" * 10})
    git("commit", "-q", "-am", "grow app", author="bob")
    return repo

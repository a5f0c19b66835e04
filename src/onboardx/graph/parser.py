"""Source discovery and regex-based import extraction.

Best-effort: specifiers are pulled with regular expressions rather than a
full parser. Comments are stripped first so commented-out imports do not
create edges.

Supports: TypeScript, JavaScript, Python
"""

from __future__ import annotations

import json
import os
import re
import tomllib
from pathlib import Path, PurePosixPath
from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import ProjectConfigError
from ..logging_config import get_logger
from ..paths import has_extension, in_excluded_dir

logger = get_logger(__name__)

JS_CONFIG_FILES = ("tsconfig.json", "jsconfig.json")
PY_CONFIG_FILES = ("pyproject.toml", "setup.py", "setup.cfg")

_DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")
_JS_TEST_RE = re.compile(r"\.(test|spec)\.[cm]?[jt]sx?$")
_PY_TEST_RE = re.compile(r"(^test_.*|.*_test)\.py$")

# Strings are matched so comment markers inside them survive.
_JSON_COMMENT_RE = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)
_JSON_TRAILING_COMMA_RE = re.compile(r'("(?:\\.|[^"\\])*")|,(?=\s*[}\]])')
_JS_COMMENT_RE = re.compile(
    r"(\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*'|`(?:\\.|[^`\\])*`)|//[^\n]*|/\*.*?\*/",
    re.DOTALL,
)
_PY_COMMENT_RE = re.compile(r"#[^\n]*")

_JS_IMPORT_PATTERNS = [
    re.compile(r"\bimport\s+(?:type\s+)?[^'\";]*?\bfrom\s*['\"]([^'\"]+)['\"]"),
    re.compile(r"\bexport\s+(?:type\s+)?[^'\";]*?\bfrom\s*['\"]([^'\"]+)['\"]"),
    re.compile(r"\bimport\s*['\"]([^'\"]+)['\"]"),
    re.compile(r"\bimport\(\s*['\"]([^'\"]+)['\"]\s*\)"),
    re.compile(r"\brequire\(\s*['\"]([^'\"]+)['\"]\s*\)"),
]
_PY_IMPORT_RE = re.compile(r"^[ \t]*import[ \t]+([\w. \t,]+)", re.MULTILINE)
_PY_FROM_RE = re.compile(
    r"^[ \t]*from[ \t]+(\.*[\w.]*)[ \t]+import[ \t]+(\([^)]*\)|[^\n]+)", re.MULTILINE
)


def language_of(path: str) -> Optional[str]:
    suffix = PurePosixPath(path).suffix.lower()
    if suffix == ".py":
        return "python"
    if suffix in (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"):
        return "javascript"
    return None


class SourceProject:
    """A project root plus the configuration that marks it as one."""

    def __init__(
        self,
        root: Path,
        config_file: Path,
        base_url: Optional[str] = None,
        config: Optional[AnalysisConfig] = None,
    ):
        self.root = root
        self.config_file = config_file
        self.base_url = base_url
        self.config = config or AnalysisConfig()

    @classmethod
    def load(cls, repo_root: str, config: Optional[AnalysisConfig] = None) -> "SourceProject":
        """Locate and validate the project configuration under ``repo_root``.

        Raises:
            ProjectConfigError: if the root is missing, no configuration is
                present, or the configuration cannot be parsed
        """
        root = Path(repo_root).resolve()
        if not root.is_dir():
            raise ProjectConfigError(root, "not a directory")

        for name in JS_CONFIG_FILES:
            candidate = root / name
            if candidate.is_file():
                data = _read_jsonc(candidate)
                compiler = data.get("compilerOptions") or {}
                base_url = compiler.get("baseUrl") if isinstance(compiler, dict) else None
                if base_url is not None:
                    base_url = _normalize_base_url(str(base_url))
                return cls(root, candidate, base_url=base_url, config=config)

        for name in PY_CONFIG_FILES:
            candidate = root / name
            if candidate.is_file():
                if name == "pyproject.toml":
                    try:
                        with open(candidate, "rb") as f:
                            tomllib.load(f)
                    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
                        raise ProjectConfigError(root, f"unparsable {name}: {e}")
                return cls(root, candidate, config=config)

        raise ProjectConfigError(root, "no project configuration found")

    def source_files(self) -> list[str]:
        """Repo-relative POSIX paths of every file in the import graph."""
        files: list[str] = []
        excluded = set(self.config.excluded_dirs)
        extensions = self.config.source_extensions

        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = sorted(d for d in dirnames if d not in excluded)
            for filename in sorted(filenames):
                rel = Path(dirpath, filename).relative_to(self.root).as_posix()
                if self._include(rel, extensions):
                    files.append(rel)

        return files

    def _include(self, rel: str, extensions: list[str]) -> bool:
        if in_excluded_dir(rel, self.config.excluded_dirs):
            return False
        name = PurePosixPath(rel).name
        if name.endswith(_DECLARATION_SUFFIXES):
            return False
        if _JS_TEST_RE.search(name) or _PY_TEST_RE.match(name):
            return False
        return has_extension(rel, extensions)

    def import_specifiers(self, rel: str) -> list[str]:
        """Import specifiers of one file, in source order, without duplicates."""
        language = language_of(rel)
        if language is None:
            return []
        try:
            content = (self.root / rel).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Cannot read %s: %s", rel, e)
            return []

        if language == "python":
            found = _python_specifiers(content)
        else:
            found = _javascript_specifiers(content)
        return list(dict.fromkeys(found))


def _read_jsonc(path: Path) -> dict:
    """Read JSON that may carry comments and trailing commas (tsconfig style)."""
    try:
        # tsc accepts a leading BOM
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ProjectConfigError(path.parent, f"cannot read {path.name}: {e}")

    cleaned = _JSON_COMMENT_RE.sub(lambda m: m.group(1) or "", text)
    cleaned = _JSON_TRAILING_COMMA_RE.sub(lambda m: m.group(1) or "", cleaned)
    if not cleaned.strip():
        return {}
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ProjectConfigError(path.parent, f"unparsable {path.name}: {e}")
    if not isinstance(data, dict):
        raise ProjectConfigError(path.parent, f"{path.name} is not a JSON object")
    return data


def _normalize_base_url(base_url: str) -> str:
    normalized = PurePosixPath(base_url.replace("\\", "/")).as_posix()
    return "" if normalized == "." else normalized


def _javascript_specifiers(content: str) -> list[str]:
    code = _JS_COMMENT_RE.sub(lambda m: m.group(1) or "", content)
    hits: list[tuple[int, str]] = []
    for pattern in _JS_IMPORT_PATTERNS:
        for match in pattern.finditer(code):
            hits.append((match.start(), match.group(1)))
    hits.sort(key=lambda h: h[0])
    return [spec for _, spec in hits]


def _python_specifiers(content: str) -> list[str]:
    code = _PY_COMMENT_RE.sub("", content)
    hits: list[tuple[int, str]] = []

    for match in _PY_IMPORT_RE.finditer(code):
        for part in match.group(1).split(","):
            module = part.strip().split()[0] if part.strip() else ""
            if module:
                hits.append((match.start(), module))

    for match in _PY_FROM_RE.finditer(code):
        module = match.group(1)
        hits.append((match.start(), module))
        names = match.group(2).strip().strip("()").rstrip("\\")
        for part in names.split(","):
            name = part.strip().split()[0] if part.strip() else ""
            if not name or name == "*":
                continue
            joiner = "" if module.endswith(".") else "."
            hits.append((match.start(), f"{module}{joiner}{name}"))

    hits.sort(key=lambda h: h[0])
    return [spec for _, spec in hits]

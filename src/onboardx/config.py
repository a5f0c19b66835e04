"""Configuration loading and management for onboardx.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Project config (./onboardx.toml)
    3. Explicit config file (``--config``)
    4. Environment variables (ONBOARDX_* prefix)
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(top_n=10)
    >>> config.top_n
    10
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, InvalidPathError

Direction = Literal["TD", "BT", "LR", "RL"]


@dataclass(frozen=True)
class ThresholdConfig:
    """Classification thresholds used by the diagram renderer.

    Attributes:
        high_churn: Churn above this renders as ``high-churn``
        medium_churn: Churn above this renders as ``med-churn``
        risk_churn: Churn above this counts as the churn axis of the risk quadrant
        risk_depth: Import depth above this counts as the depth axis
    """

    high_churn: int = 100
    medium_churn: int = 50
    risk_churn: int = 50
    risk_depth: int = 2

    def __post_init__(self) -> None:
        if self.medium_churn < 0 or self.risk_churn < 0 or self.risk_depth < 0:
            raise ValueError("thresholds must be non-negative")
        if self.high_churn < self.medium_churn:
            raise ValueError("high_churn must be >= medium_churn")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one onboarding run.

    Attributes:
        Churn:
            churn_since: ``git log --since`` window for churn scoring
            churn_extensions: File extensions that count toward churn
            excluded_dirs: Directory names skipped by churn and import scans
            excluded_files: Lockfiles and generated files skipped by churn

        Import graph:
            source_extensions: Extensions parsed for import statements

        Ranking:
            top_n: Files promoted from the churn ranking into the report

        Git:
            git_timeout_seconds: Timeout for a single git invocation
            git_max_output_mb: Output ceiling for a single git invocation

        Rendering:
            graph_max_nodes: Node cap for a standalone dependency graph
            report_graph_max_nodes: Node cap for the graph embedded in the report
            graph_direction: Mermaid flow direction
    """

    # Churn
    churn_since: str = "1.year"
    churn_extensions: list[str] = field(
        default_factory=lambda: [
            ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs",
            ".py", ".go", ".rs", ".java", ".kt", ".rb", ".php",
            ".c", ".h", ".cc", ".cpp", ".hpp", ".cs", ".swift", ".scala",
            ".vue", ".svelte", ".css", ".scss", ".html",
            ".md", ".rst", ".txt", ".yml", ".yaml", ".toml", ".json", ".sh",
        ]
    )
    excluded_dirs: list[str] = field(
        default_factory=lambda: [
            "node_modules",
            "dist",
            "build",
            "out",
            "coverage",
            "vendor",
            ".git",
            ".hg",
            ".svn",
            ".next",
            ".venv",
            "venv",
            "__pycache__",
            ".tox",
            ".mypy_cache",
            ".pytest_cache",
            ".ruff_cache",
        ]
    )
    excluded_files: list[str] = field(
        default_factory=lambda: [
            "package-lock.json",
            "yarn.lock",
            "pnpm-lock.yaml",
            "npm-shrinkwrap.json",
            "poetry.lock",
            "Pipfile.lock",
            "uv.lock",
            "Cargo.lock",
            "go.sum",
            "composer.lock",
        ]
    )

    # Import graph
    source_extensions: list[str] = field(
        default_factory=lambda: [".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".py"]
    )

    # Ranking
    top_n: int = 5

    # Git
    git_timeout_seconds: int = 30
    git_max_output_mb: float = 10.0

    # Rendering
    graph_max_nodes: int = 20
    report_graph_max_nodes: int = 10
    graph_direction: Direction = "TD"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.churn_since.strip():
            raise ValueError("churn_since must not be empty")
        if self.top_n < 1:
            raise ValueError("top_n must be at least 1")
        if self.git_timeout_seconds < 1:
            raise ValueError("git_timeout_seconds must be at least 1")
        if self.git_max_output_mb <= 0:
            raise ValueError("git_max_output_mb must be positive")
        if self.graph_max_nodes < 1 or self.report_graph_max_nodes < 1:
            raise ValueError("graph node caps must be at least 1")
        if self.graph_direction not in ("TD", "BT", "LR", "RL"):
            raise ValueError("graph_direction must be one of TD, BT, LR, RL")

    @property
    def git_max_output_bytes(self) -> int:
        """Get the git output ceiling in bytes."""
        return int(self.git_max_output_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        InvalidPathError: If an explicit config file does not exist
        InvalidConfigError: If a config file or environment value is invalid
    """
    merged: dict = {}

    project_config = Path.cwd() / "onboardx.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise InvalidConfigError("onboardx.toml", project_config, str(e))

    if config_file is not None:
        if not config_file.exists():
            raise InvalidPathError(config_file, "config file not found")
        try:
            merged.update(_load_toml_file(config_file))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise InvalidConfigError("config_file", config_file, str(e))

    merged.update(_load_env_vars())
    merged.update(overrides)

    thresholds_dict = merged.pop("thresholds", None)
    if isinstance(thresholds_dict, dict):
        try:
            merged["thresholds"] = ThresholdConfig(**thresholds_dict)
        except (TypeError, ValueError) as e:
            raise InvalidConfigError("thresholds", thresholds_dict, str(e))
    elif isinstance(thresholds_dict, ThresholdConfig):
        merged["thresholds"] = thresholds_dict

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError("settings", ", ".join(sorted(merged)), str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from ONBOARDX_* environment variables.

    List-valued fields are not read from the environment.
    """
    type_hints = get_type_hints(AnalysisConfig)
    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"ONBOARDX_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return None
    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")
    if type_hint is int:
        return int(value)
    if type_hint is float:
        return float(value)
    if type_hint is str or origin is Literal:
        return value
    return None


def _load_toml_file(path: Path) -> dict:
    """Load a TOML file, accepting either a bare table or ``[tool.onboardx]``."""
    with open(path, "rb") as f:
        data = tomllib.load(f)
    tool_section = data.get("tool", {}).get("onboardx")
    if isinstance(tool_section, dict):
        return dict(tool_section)
    return data

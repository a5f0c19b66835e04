"""Onboarding pipeline: churn and depth in parallel, then ownership, then join."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional, TypeVar

from ..config import AnalysisConfig
from ..graph import score_import_depth
from ..logging_config import get_logger
from ..temporal import GitRunner, score_churn, top_file_ownership
from .join import join_signals
from .models import AnalysisResult

logger = get_logger(__name__)

T = TypeVar("T")


def run_analysis(
    repo_root: str,
    config: Optional[AnalysisConfig] = None,
    runner: Optional[GitRunner] = None,
) -> AnalysisResult:
    """Run every pass against ``repo_root`` and join the results.

    Never raises for an unreachable or malformed repository: each pass
    degrades to an empty result and the join fills in sentinels.
    """
    config = config or AnalysisConfig()
    runner = runner or GitRunner(config.git_timeout_seconds, config.git_max_output_bytes)
    root = str(Path(repo_root))
    logger.info("Analyzing %s", root)

    with ThreadPoolExecutor(max_workers=2) as executor:
        churn_future = executor.submit(
            _run_pass, "churn", lambda: score_churn(root, runner=runner, config=config)
        )
        depth_future = executor.submit(
            _run_pass, "import depth", lambda: score_import_depth(root, config)
        )
        churn = churn_future.result()
        depth = depth_future.result()

    top_churn = churn[: config.top_n]
    ownership = _run_pass("ownership", lambda: top_file_ownership(root, top_churn, runner))
    top_files = join_signals(top_churn, ownership, depth)

    return AnalysisResult(
        repo_root=root,
        top_files=top_files,
        churn=churn,
        ownership=ownership,
        depth=depth,
    )


def _run_pass(name: str, func: Callable[[], list[T]]) -> list[T]:
    """Run one scoring pass; any failure becomes an empty result."""
    start = time.perf_counter()
    try:
        result = func()
    except Exception:
        logger.exception("%s pass failed", name)
        return []
    logger.info("%s pass: %d records in %.2fs", name, len(result), time.perf_counter() - start)
    return result

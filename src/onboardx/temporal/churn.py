"""Per-file churn scoring from ``git log --numstat``."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import GitCommandError
from ..logging_config import get_logger
from ..paths import has_extension, in_excluded_dir, rename_target, to_posix
from .git_runner import GitRunner
from .models import ChurnRecord

logger = get_logger(__name__)


def score_churn(
    repo_root: str,
    since: Optional[str] = None,
    runner: Optional[GitRunner] = None,
    config: Optional[AnalysisConfig] = None,
) -> list[ChurnRecord]:
    """Score files by lines added plus deleted since ``since``.

    Returns records sorted by churn descending; ties keep the order in
    which files first appeared in the log. Returns an empty list when git
    cannot be run against ``repo_root``.
    """
    config = config or AnalysisConfig()
    runner = runner or GitRunner(config.git_timeout_seconds, config.git_max_output_bytes)
    since = since or config.churn_since

    try:
        raw = runner.numstat(repo_root, since)
    except GitCommandError as e:
        logger.warning("Churn unavailable for %s: %s", repo_root, e)
        return []

    totals = parse_numstat(raw, config)
    records = [ChurnRecord(file=f, churn=c) for f, c in totals.items() if c > 0]
    # sorted() is stable, so equal churn keeps first-encounter order
    records = sorted(records, key=lambda r: r.churn, reverse=True)
    logger.debug("Scored churn for %d files", len(records))
    return records


def parse_numstat(raw: str, config: Optional[AnalysisConfig] = None) -> dict[str, int]:
    """Accumulate ``adds + dels`` per path from numstat output.

    Short lines, binary ``-`` deltas and non-numeric counts are skipped.
    The returned dict preserves first-encounter order.
    """
    config = config or AnalysisConfig()
    totals: dict[str, int] = {}

    for line in raw.splitlines():
        parts = line.split("\t")
        if len(parts) < 3:
            continue
        adds, dels = parts[0].strip(), parts[1].strip()
        path = rename_target(to_posix("\t".join(parts[2:]).strip()))
        if not path or not adds.isdigit() or not dels.isdigit():
            continue
        if not should_count(path, config):
            continue
        totals[path] = totals.get(path, 0) + int(adds) + int(dels)

    return totals


def should_count(path: str, config: AnalysisConfig) -> bool:
    """Churn inclusion policy: human-authored source and text only."""
    if in_excluded_dir(path, config.excluded_dirs):
        return False
    if PurePosixPath(path).name in config.excluded_files:
        return False
    return has_extension(path, config.churn_extensions)

"""Primary-owner attribution from per-file commit authors."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional, Sequence

from ..exceptions import GitCommandError
from ..logging_config import get_logger
from .git_runner import GitRunner
from .models import ChurnRecord, Contributor, OwnershipRecord

logger = get_logger(__name__)


def attribute_ownership(
    repo_root: str, files: Sequence[str], runner: Optional[GitRunner] = None
) -> list[OwnershipRecord]:
    """Determine the primary contributor of each file in ``files``.

    One git query per file, run sequentially. Files without history, or
    whose query fails, are left out of the result; the rest keep input
    order.
    """
    runner = runner or GitRunner()
    results: list[OwnershipRecord] = []

    for file in files:
        try:
            raw = runner.authors(repo_root, file)
        except GitCommandError as e:
            logger.warning("Ownership lookup failed for %s: %s", file, e)
            continue

        record = build_ownership(file, raw.splitlines())
        if record is None:
            logger.debug("No history for %s", file)
            continue
        results.append(record)

    return results


def build_ownership(file: str, authors: Iterable[str]) -> Optional[OwnershipRecord]:
    """Tally author identities into an OwnershipRecord.

    Ties on commit count keep first-seen order: Counter preserves
    insertion order and sorted() is stable.
    """
    counts: Counter[str] = Counter()
    for author in authors:
        name = author.strip()
        if name:
            counts[name] += 1

    if not counts:
        return None

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    contributors = tuple(Contributor(author=a, commits=n) for a, n in ranked)
    primary = contributors[0]
    return OwnershipRecord(
        file=file,
        primary_contributor=primary.author,
        contribution_count=primary.commits,
        all_contributors=contributors,
    )


def top_file_ownership(
    repo_root: str, top_files: Sequence[ChurnRecord], runner: Optional[GitRunner] = None
) -> list[OwnershipRecord]:
    """Attribute ownership for the files of a churn ranking."""
    return attribute_ownership(repo_root, [r.file for r in top_files], runner)

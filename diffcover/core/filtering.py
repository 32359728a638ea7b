"""
Intersection of coverage blocks with changed lines, and statement tallies.
"""

import logging
from typing import AbstractSet, Dict, List, Optional, Sequence, Set

from diffcover.core.models import ChangedLineIndex, CoverageBlock, FileCoverage

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Use forward slashes regardless of the platform that wrote the path."""
    return path.replace("\\", "/")


def suffix_candidates(block_path: str, changed: ChangedLineIndex) -> List[str]:
    """
    Diff paths that are a literal suffix of ``block_path``.

    Longest suffix first, ties broken by path, so that the lookup does not
    depend on the insertion order of the index.
    """
    base = normalize_path(block_path)
    matches = [diff_path for diff_path in changed if base.endswith(diff_path)]
    return sorted(matches, key=lambda p: (-len(p), p))


def resolve_diff_path(block_path: str, changed: ChangedLineIndex) -> Optional[str]:
    """
    The diff entry a profile path belongs to.

    An exact key wins; otherwise the longest suffix candidate. None when the
    path has no counterpart in the diff.
    """
    if block_path in changed:
        return block_path
    candidates = suffix_candidates(block_path, changed)
    return candidates[0] if candidates else None


def block_matches(block: CoverageBlock, changed: ChangedLineIndex) -> bool:
    """Check whether a block overlaps any changed line of its file."""
    changed_lines: Optional[Set[int]] = changed.get(block.file)
    if changed_lines is not None:
        return block.touches(changed_lines)

    for diff_path in suffix_candidates(block.file, changed):
        if block.touches(changed[diff_path]):
            return True
    return False


def filter_blocks(
    blocks: Sequence[CoverageBlock],
    changed: ChangedLineIndex,
    excluded: AbstractSet[str] = frozenset(),
) -> List[CoverageBlock]:
    """
    Keep the blocks touching at least one changed line.

    Blocks whose file resolves to an ``excluded`` diff entry are dropped, and
    the remaining blocks are matched only against entries that are not
    excluded. The result is a subsequence of ``blocks`` in their original
    order, and each block appears at most once.
    """
    if excluded:
        active = {path: lines for path, lines in changed.items() if path not in excluded}
    else:
        active = changed

    filtered = []
    for block in blocks:
        if excluded and resolve_diff_path(block.file, changed) in excluded:
            continue
        if block_matches(block, active):
            filtered.append(block)

    logger.debug(f"Kept {len(filtered)} of {len(blocks)} coverage blocks")
    return filtered


def summarize(blocks: Sequence[CoverageBlock]) -> tuple[int, int, float]:
    """
    Sum statements over blocks.

    Returns:
        ``(covered, total, percent)``, percent being 0.0 when total is 0
    """
    total = 0
    covered = 0
    for block in blocks:
        total += block.num_statements
        if block.covered:
            covered += block.num_statements

    percent = 0.0
    if total > 0:
        percent = (covered / total) * 100
    return covered, total, percent


def per_file_breakdown(blocks: Sequence[CoverageBlock]) -> List[FileCoverage]:
    """Tally statements per source file, in first-seen order."""
    by_file: Dict[str, FileCoverage] = {}
    for block in blocks:
        stats = by_file.setdefault(block.file, FileCoverage(file=block.file))
        stats.total += block.num_statements
        if block.covered:
            stats.covered += block.num_statements
    return list(by_file.values())

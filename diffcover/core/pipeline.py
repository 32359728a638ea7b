"""
Main pipeline orchestration for diff coverage.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import pathspec

from diffcover.core.config import DiffCoverConfig, get_default_config
from diffcover.core.filtering import filter_blocks, per_file_breakdown, summarize
from diffcover.core.models import ChangedLineIndex, CoverageBlock, FileCoverage
from diffcover.io.coverage import parse_coverage
from diffcover.io.diff import parse_diff

logger = logging.getLogger(__name__)


@dataclass
class DiffCoverageResult:
    """Result of a diff coverage run."""

    blocks: List[CoverageBlock]
    changed: ChangedLineIndex
    filtered: List[CoverageBlock]
    covered: int
    total: int
    percent: float
    excluded: List[str] = field(default_factory=list)

    def passes(self, threshold: float) -> bool:
        """
        Check the result against a minimum percentage.

        A run with no statements on changed lines passes vacuously; otherwise
        the percentage must reach the threshold (equality passes).
        """
        return self.total == 0 or self.percent >= threshold

    @property
    def files(self) -> List[FileCoverage]:
        """Per-file tallies over the kept blocks."""
        return per_file_breakdown(self.filtered)

    @property
    def summary_line(self) -> str:
        """Human-readable one-line summary."""
        return f"Diff coverage: {self.percent:.2f}% ({self.covered}/{self.total} statements)"


class Pipeline:
    """Diff coverage pipeline."""

    def __init__(self, config: Optional[DiffCoverConfig] = None) -> None:
        self.config = config or get_default_config()
        self.exclude_spec = pathspec.PathSpec.from_lines("gitwildmatch", self.config.exclude)

    def run(
        self,
        diff_path: Union[str, Path],
        coverage_path: Union[str, Path],
    ) -> DiffCoverageResult:
        """
        Compute diff coverage for a diff and a coverage profile.

        Args:
            diff_path: Path to a unified diff
            coverage_path: Path to a coverage profile

        Returns:
            Filtered blocks with statement totals

        Raises:
            InputReadError: If either input cannot be read
        """
        logger.info("Stage 1: Parsing coverage profile")
        blocks = parse_coverage(coverage_path)

        logger.info("Stage 2: Parsing diff")
        changed = parse_diff(diff_path)

        logger.info("Stage 3: Filtering blocks against changed lines")
        return self.evaluate(blocks, changed)

    def evaluate(
        self,
        blocks: List[CoverageBlock],
        changed: ChangedLineIndex,
    ) -> DiffCoverageResult:
        """
        Filter already-parsed blocks and aggregate statement counts.

        Excluded diff entries stay in the index while blocks are resolved to
        their file, so a block of an excluded file cannot fall back to a
        shorter entry. The result's ``changed`` omits them.
        """
        excluded = self._excluded_paths(changed)
        if excluded:
            logger.info(f"Excluded {len(excluded)} diff paths: {', '.join(excluded)}")

        filtered = filter_blocks(blocks, changed, frozenset(excluded))
        covered, total, percent = summarize(filtered)
        logger.info(f"Kept {len(filtered)} blocks: {covered}/{total} statements covered")

        return DiffCoverageResult(
            blocks=blocks,
            changed={path: lines for path, lines in changed.items() if path not in excluded},
            filtered=filtered,
            covered=covered,
            total=total,
            percent=percent,
            excluded=excluded,
        )

    def _excluded_paths(self, changed: ChangedLineIndex) -> List[str]:
        """Diff paths matching the configured exclude patterns."""
        return [path for path in changed if self.exclude_spec.match_file(path)]


def analyze(
    diff_path: Union[str, Path],
    coverage_path: Union[str, Path],
    config: Optional[DiffCoverConfig] = None,
) -> DiffCoverageResult:
    """
    Convenience function to run the diff coverage pipeline.

    Args:
        diff_path: Path to a unified diff
        coverage_path: Path to a coverage profile
        config: Optional configuration

    Returns:
        Diff coverage result
    """
    return Pipeline(config).run(diff_path, coverage_path)

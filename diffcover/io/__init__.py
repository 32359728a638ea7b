"""I/O components for diffcover."""

from diffcover.io.coverage import parse_coverage, write_profile
from diffcover.io.diff import DiffScanState, parse_diff

__all__ = [
    "parse_coverage",
    "write_profile",
    "DiffScanState",
    "parse_diff",
]

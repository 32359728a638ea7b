"""
Reading and writing line-oriented coverage profiles.

A profile starts with a ``mode:`` header followed by one block per line::

    mode: set
    path/to/file.go:5.1,7.2 3 1

Malformed block lines are tolerated: a line without exactly three fields is
skipped, and a numeric subfield that does not parse counts as zero.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from diffcover.core.errors import InputReadError, OutputWriteError
from diffcover.core.models import CoverageBlock

logger = logging.getLogger(__name__)

MODE_PREFIX = "mode:"
OUTPUT_MODE_LINE = "mode: set"

_INT_RE = re.compile(r"^[+-]?[0-9]+$")


def _to_int(text: str) -> int:
    """Convert a numeric field, falling back to zero on anything unparsable."""
    if _INT_RE.match(text):
        return int(text)
    return 0


def _split_position(position: str) -> tuple[int, int]:
    """Split a ``line.col`` pair into integers."""
    parts = position.split(".")
    line = _to_int(parts[0])
    col = _to_int(parts[1]) if len(parts) > 1 else 0
    return line, col


def parse_coverage_line(line: str) -> Optional[CoverageBlock]:
    """
    Parse a single profile line.

    Args:
        line: Profile line without its terminator

    Returns:
        The block, or None when the line carries no block data
    """
    if line.startswith(MODE_PREFIX):
        return None

    fields = line.split()
    if len(fields) != 3:
        return None

    location, num_statements, execution_count = fields

    file_path, sep, range_expr = location.partition(":")
    if not sep:
        return None

    ranges = range_expr.split(",")
    if len(ranges) != 2:
        return None

    start_line, start_col = _split_position(ranges[0])
    end_line, end_col = _split_position(ranges[1])

    return CoverageBlock(
        file=file_path,
        start_line=start_line,
        start_col=start_col,
        end_line=end_line,
        end_col=end_col,
        num_statements=_to_int(num_statements),
        execution_count=_to_int(execution_count),
        raw_line=line,
    )


def parse_coverage_lines(lines: Iterable[str]) -> List[CoverageBlock]:
    """Parse profile lines into blocks, preserving read order."""
    blocks = []
    skipped = 0

    for raw in lines:
        line = raw.rstrip("\r\n")
        block = parse_coverage_line(line)
        if block is None:
            if line.strip() and not line.startswith(MODE_PREFIX):
                skipped += 1
            continue
        blocks.append(block)

    if skipped:
        logger.debug(f"Skipped {skipped} malformed coverage lines")

    return blocks


def parse_coverage(path: Union[str, Path]) -> List[CoverageBlock]:
    """
    Parse a coverage profile file.

    Args:
        path: Path to the coverage profile

    Returns:
        Blocks in the order they appear in the file

    Raises:
        InputReadError: If the file cannot be opened or read
    """
    profile_path = Path(path)
    try:
        with profile_path.open("r", encoding="utf-8", errors="surrogateescape") as f:
            blocks = parse_coverage_lines(f)
    except OSError as e:
        raise InputReadError(str(path), str(e)) from e

    logger.info(f"Parsed {len(blocks)} coverage blocks from {profile_path}")
    return blocks


def write_profile(path: Union[str, Path], blocks: Iterable[CoverageBlock]) -> None:
    """
    Write blocks as a coverage profile.

    The header is always ``mode: set`` regardless of the input mode, and each
    block is written back verbatim.

    Raises:
        OutputWriteError: If the file cannot be created or written
    """
    out_path = Path(path)
    try:
        with out_path.open("w", encoding="utf-8", errors="surrogateescape") as f:
            f.write(OUTPUT_MODE_LINE + "\n")
            for block in blocks:
                f.write(block.raw_line + "\n")
    except OSError as e:
        raise OutputWriteError(str(path), str(e)) from e

    logger.debug(f"Wrote filtered profile to {out_path}")

"""
Unified diff scanning into per-file sets of added line numbers.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Union

from diffcover.core.errors import InputReadError
from diffcover.core.models import ChangedLineIndex

logger = logging.getLogger(__name__)

FILE_HEADER_RE = re.compile(r"^\+\+\+ b/(.+)")
HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


@dataclass
class DiffScanState:
    """
    State carried through a diff scan.

    ``current_file`` is empty until the first ``+++ b/`` header is seen, and
    ``new_line`` is the line number in the new version of the file that the
    next added or context line occupies.

    ``old_remaining`` and ``new_remaining`` count the body lines still owed
    by the current hunk header. While either is positive, lines starting
    with ``---`` or ``+++`` are hunk content, not file headers.
    """

    current_file: str = ""
    new_line: int = 0
    changed: ChangedLineIndex = field(default_factory=dict)
    old_remaining: int = 0
    new_remaining: int = 0

    @property
    def in_hunk(self) -> bool:
        return self.old_remaining > 0 or self.new_remaining > 0

    def feed(self, line: str) -> None:
        """Apply a single diff line."""
        if self.in_hunk:
            self._feed_hunk_line(line)
            return

        header = FILE_HEADER_RE.match(line)
        if header:
            self.current_file = header.group(1)
            self.changed.setdefault(self.current_file, set())
            return

        hunk = HUNK_HEADER_RE.match(line)
        if hunk:
            old_count, new_start, new_count = hunk.groups()
            self.new_line = int(new_start)
            self.old_remaining = int(old_count) if old_count is not None else 1
            self.new_remaining = int(new_count) if new_count is not None else 1
            return

        if line.startswith("+") and not line.startswith("+++"):
            self._add()
        elif line.startswith("-") and not line.startswith("---"):
            # Removed lines do not exist in the new file
            pass
        else:
            self.new_line += 1

    def _feed_hunk_line(self, line: str) -> None:
        if line.startswith("+"):
            self._add()
            self.new_remaining -= 1
        elif line.startswith("-"):
            self.old_remaining -= 1
        elif line.startswith("\\"):
            # "\ No newline at end of file" belongs to neither side
            pass
        else:
            self.new_line += 1
            self.old_remaining -= 1
            self.new_remaining -= 1

    def _add(self) -> None:
        if self.current_file:
            self.changed[self.current_file].add(self.new_line)
        self.new_line += 1


def parse_diff_lines(lines: Iterable[str]) -> ChangedLineIndex:
    """Scan diff lines and return the changed-line index."""
    state = DiffScanState()
    for line in lines:
        state.feed(line.rstrip("\r\n"))
    return state.changed


def parse_diff(path: Union[str, Path]) -> ChangedLineIndex:
    """
    Parse a unified diff file.

    Args:
        path: Path to the diff

    Returns:
        Mapping of new-file path to the set of added line numbers. Files with
        a header but no additions map to an empty set.

    Raises:
        InputReadError: If the file cannot be opened or read
    """
    diff_path = Path(path)
    try:
        with diff_path.open("r", encoding="utf-8", errors="replace") as f:
            changed = parse_diff_lines(f)
    except OSError as e:
        raise InputReadError(str(path), str(e)) from e

    added = sum(len(lines) for lines in changed.values())
    logger.info(f"Parsed diff {diff_path}: {len(changed)} files, {added} added lines")
    return changed

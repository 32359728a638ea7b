"""
Shared data types for coverage blocks and changed-line indices.
"""

from dataclasses import dataclass
from typing import Dict, Set

# file path (as written in the diff's "+++ b/" marker) -> added line numbers
ChangedLineIndex = Dict[str, Set[int]]


@dataclass(frozen=True)
class CoverageBlock:
    """One block record of a coverage profile."""
    
    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_statements: int
    execution_count: int
    raw_line: str
    
    @property
    def covered(self) -> bool:
        """Whether the block was executed at least once."""
        return self.execution_count > 0
    
    @property
    def lines(self) -> range:
        """Source lines spanned by the block, inclusive."""
        return range(self.start_line, self.end_line + 1)
    
    def touches(self, changed_lines: Set[int]) -> bool:
        """Check if any line of the block is in ``changed_lines``."""
        return any(line in changed_lines for line in self.lines)


@dataclass
class FileCoverage:
    """Diff coverage tally for a single source file."""
    
    file: str
    covered: int = 0
    total: int = 0
    
    @property
    def percent(self) -> float:
        """Covered percentage, 0.0 when no statements were counted."""
        if self.total == 0:
            return 0.0
        return (self.covered / self.total) * 100

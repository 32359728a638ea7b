"""
Diffcover: code coverage restricted to the lines changed by a patch.

Parses a line-oriented coverage profile and a unified diff, keeps the coverage
blocks that touch added lines, and reports the covered share of their
statements against a minimum threshold.
"""

__version__ = "0.1.0"

from diffcover.core.config import DiffCoverConfig
from diffcover.core.models import CoverageBlock
from diffcover.core.pipeline import DiffCoverageResult, Pipeline, analyze

__all__ = [
    "DiffCoverConfig",
    "CoverageBlock",
    "DiffCoverageResult",
    "Pipeline",
    "analyze",
    "__version__",
]

"""Core diffcover components."""

from diffcover.core.config import DiffCoverConfig, get_default_config, load_config
from diffcover.core.filtering import filter_blocks, summarize
from diffcover.core.pipeline import DiffCoverageResult, Pipeline, analyze

__all__ = [
    "DiffCoverConfig",
    "get_default_config",
    "load_config",
    "filter_blocks",
    "summarize",
    "DiffCoverageResult",
    "Pipeline",
    "analyze",
]

"""
Configuration models for diffcover using Pydantic v2.
"""

from pathlib import Path
from typing import Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from diffcover.core.errors import ConfigurationError


class ReportConfig(BaseModel):
    """Configuration for reporting beyond the summary line."""

    show_files: bool = Field(default=False, description="Print a per-file diff coverage table")
    summary_path: Optional[str] = Field(default=None, description="Write a summary report to this path")
    summary_format: Literal["json", "markdown"] = Field(default="json", description="Summary report format")


class DiffCoverConfig(BaseModel):
    """Main configuration model for diffcover."""

    version: int = Field(default=1, description="Configuration version")
    exclude: list[str] = Field(
        default_factory=list,
        description="Gitwildmatch patterns for diff paths left out of diff coverage"
    )
    report: ReportConfig = Field(default_factory=ReportConfig)

    @field_validator("exclude")
    @classmethod
    def validate_exclude(cls, v: list[str]) -> list[str]:
        """Reject blank patterns."""
        for pattern in v:
            if not pattern.strip():
                raise ValueError("Exclude patterns must not be blank")
        return v


def load_config(config_path: Union[str, Path]) -> DiffCoverConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Parsed configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    try:
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        with config_file.open("r") as f:
            data = yaml.safe_load(f)

        if not data:
            data = {}

        return DiffCoverConfig.model_validate(data)

    except (OSError, yaml.YAMLError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def get_default_config() -> DiffCoverConfig:
    """Get default configuration."""
    return DiffCoverConfig()

"""
Core exception classes for diffcover.
"""

from typing import Any, Optional


class DiffCoverError(Exception):
    """Base exception for all diffcover errors."""
    
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DiffCoverError):
    """Raised when configuration is invalid or missing."""
    pass


class InputReadError(DiffCoverError):
    """Raised when a diff or coverage profile cannot be read."""
    
    def __init__(self, file_path: str, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(f"Cannot read {file_path}: {message}", details)
        self.file_path = file_path


class OutputWriteError(DiffCoverError):
    """Raised when a filtered profile or summary cannot be written."""
    
    def __init__(self, file_path: str, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(f"Cannot write {file_path}: {message}", details)
        self.file_path = file_path

"""
Exception types raised by suki.

Every error the core can raise derives from SukiError so callers can catch
the whole family in one place.
"""

from pathlib import Path
from typing import Optional, Union


class SukiError(Exception):
    """Base class for all suki errors."""
    pass


class DatabaseSyntaxError(SukiError):
    """
    Raised when a line of a `.suki` database does not follow the grammar.
    
    Attributes:
        line_number: 1-based number of the offending line
        reason: Human-readable description of the problem
    """
    
    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"bad syntax at line {line_number} - {reason}")


class DatabaseIOError(SukiError):
    """Raised when the database file cannot be opened, read, or written."""
    
    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class DatabaseEncodingError(DatabaseIOError):
    """Raised when the database file is not valid text in the configured encoding."""
    pass


class InvalidArgumentError(SukiError, ValueError):
    """Raised when a tag operation receives an unusable file name or tag label."""
    pass


class ConfigurationError(SukiError):
    """Raised when configuration parsing or validation fails."""
    pass

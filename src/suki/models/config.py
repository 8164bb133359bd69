"""
Configuration data model for suki.

This module defines the settings that control where the database lives
inside a directory, how it is encoded, and how it is written back to disk.
"""

import codecs
import logging
from pathlib import Path
from typing import Dict, Any, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class SukiConfig(BaseModel):
    """
    Settings for the tag database.
    
    Attributes:
        database_name: Name of the database file inside the tagged directory
        encoding: Text encoding used to read and write the database
        atomic_write: Write to a temporary file and rename it over the database
        dedupe_on_add: Skip file names that are already listed under a tag
        log_level: Logging level used by the command-line front end
    """
    
    model_config = ConfigDict(extra='forbid')
    
    database_name: str = Field(".suki", min_length=1, description="Database file name")
    encoding: str = Field("utf-8", description="Database text encoding")
    atomic_write: bool = Field(True, description="Replace the database via temp file and rename")
    dedupe_on_add: bool = Field(False, description="Do not add a file twice under one tag")
    log_level: str = Field("WARNING", description="Logging level name")
    
    @field_validator('database_name')
    @classmethod
    def validate_database_name(cls, v: str) -> str:
        """The database must be a bare file name inside the directory."""
        if Path(v).name != v or v in ('.', '..'):
            raise ValueError(f"Database name must be a plain file name: {v!r}")
        return v
    
    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Ensure the encoding is known to Python."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v
    
    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v) -> str:
        """Normalize and validate the logging level name."""
        if not isinstance(v, str):
            raise ValueError(f"Invalid log level: {v}")
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {LOG_LEVELS}")
        return level
    
    def database_path(self, directory) -> Path:
        """Get the database file path for a directory."""
        return Path(directory) / self.database_name
    
    def get_log_level(self) -> int:
        """Get the numeric logging level."""
        return logging.getLevelName(self.log_level)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SukiConfig':
        """Create a SukiConfig instance from a dictionary."""
        return cls.model_validate(data)
    
    def __str__(self) -> str:
        parts = [f"Database: {self.database_name} ({self.encoding})"]
        parts.append(f"Atomic write: {self.atomic_write}")
        parts.append(f"Dedupe on add: {self.dedupe_on_add}")
        return " | ".join(parts)


def validate_config_dict(config_data: Dict[str, Any]) -> List[str]:
    """
    Validate a raw configuration mapping without building a config.
    
    Args:
        config_data: Raw configuration data, typically from YAML
        
    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    allowed = set(SukiConfig.model_fields)
    for key in config_data:
        if key not in allowed:
            errors.append(f"Unknown configuration key: {key}")
    if errors:
        return errors
    
    try:
        SukiConfig.model_validate(config_data)
    except ValueError as e:
        errors.append(str(e))
    return errors

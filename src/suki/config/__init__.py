"""
Configuration management package for suki.

This package provides configuration parsing, validation, and management
functionality for suki.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    load_config,
    validate_config_file,
    create_config_template
)
from ..errors import ConfigurationError

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'load_config',
    'validate_config_file',
    'create_config_template'
]

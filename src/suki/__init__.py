"""
suki - Core Package

A minimal personal file-tagging index that keeps tag -> file name lists
in a flat-text `.suki` database inside a directory.
"""

__version__ = "0.1.0"
__author__ = "suki Team"

from .errors import (
    SukiError,
    DatabaseSyntaxError,
    DatabaseIOError,
    DatabaseEncodingError,
    InvalidArgumentError,
    ConfigurationError
)
from .models import Database, Tag, SukiConfig
from .tools.codec import load, save, parse, serialize
from .tools.tag_index import add_file_to_tags, remove_file_from_tags, intersect_search

__all__ = [
    'SukiError',
    'DatabaseSyntaxError',
    'DatabaseIOError',
    'DatabaseEncodingError',
    'InvalidArgumentError',
    'ConfigurationError',
    'Database',
    'Tag',
    'SukiConfig',
    'load',
    'save',
    'parse',
    'serialize',
    'add_file_to_tags',
    'remove_file_from_tags',
    'intersect_search'
]

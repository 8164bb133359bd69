"""
Data models for suki.

This module contains the core data structures used throughout the system.
"""

from .database import Tag, Database
from .config import SukiConfig

__all__ = ['Tag', 'Database', 'SukiConfig']

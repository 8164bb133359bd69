"""
Database tools for suki.

This module contains the `.suki` file codec and the tag index operations
that run over a loaded database.
"""

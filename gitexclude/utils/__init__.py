"""Utilities module for common helper functions.

This module contains:
- Path normalization and resolution against a base directory
- Working tree root discovery
"""

from gitexclude.utils.paths import clean_base, resolve_relative, find_repository_root

__all__ = [
    'clean_base', 'resolve_relative', 'find_repository_root',
]

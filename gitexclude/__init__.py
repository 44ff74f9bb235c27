"""gitexclude - .gitignore pattern compilation and matching."""

__version__ = '0.1.0'

from gitexclude.core.errors import (
    IgnoreError, SourceUnavailable, MalformedPattern, PathResolutionError,
    PatternMatchError, ConfigError,
)
from gitexclude.core.pattern import CompiledPattern, compile_pattern, scan_patterns
from gitexclude.core.matcher import matches
from gitexclude.core.group import ExcludeGroup, Verdict
from gitexclude.core.ignorer import Ignorer, IgnoreSource, DEFAULT_SOURCES, new_ignorer
from gitexclude.core.config import Config

__all__ = [
    'IgnoreError',
    'SourceUnavailable',
    'MalformedPattern',
    'PathResolutionError',
    'PatternMatchError',
    'ConfigError',
    'CompiledPattern',
    'compile_pattern',
    'scan_patterns',
    'matches',
    'ExcludeGroup',
    'Verdict',
    'Ignorer',
    'IgnoreSource',
    'DEFAULT_SOURCES',
    'new_ignorer',
    'Config',
]

"""Exceptions raised by the ignore engine.

Every error carries enough context (offending line, path, base directory)
for the caller to decide whether to skip, abort or report.
"""

from typing import Optional


class IgnoreError(Exception):
    """Base class for all gitexclude errors."""


class SourceUnavailable(IgnoreError):
    """An ignore file could not be read."""
    
    def __init__(self, source: str, path: str, reason: str = "not found"):
        self.source = source
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read ignore source {source} ({path}): {reason}")


class MalformedPattern(IgnoreError):
    """An ignore line could not be compiled."""
    
    def __init__(self, line: str, line_number: Optional[int] = None,
                 reason: str = "unbalanced range notation"):
        self.line = line
        self.line_number = line_number
        self.reason = reason
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}{reason} in pattern: {line}")


class PathResolutionError(IgnoreError):
    """A candidate path cannot be expressed relative to a group's base."""
    
    def __init__(self, path: str, base_path: str, reason: str):
        self.path = path
        self.base_path = base_path
        self.reason = reason
        super().__init__(f"cannot resolve {path} against {base_path}: {reason}")


class PatternMatchError(IgnoreError):
    """A glob string is malformed at match time."""
    
    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"bad glob pattern {pattern!r}: {reason}")


class ConfigError(IgnoreError):
    """A configuration value is invalid."""

"""Exclude groups: the compiled rules of one ignore file."""

import os
from typing import Iterable, Iterator, List, Optional, Sequence

from gitexclude.core.errors import MalformedPattern, SourceUnavailable
from gitexclude.core.matcher import matches
from gitexclude.core.pattern import (
    CompiledPattern, ON_MALFORMED_SKIP, Line, scan_patterns,
)
from gitexclude.utils.paths import PathLike, clean_base, resolve_relative

PRECEDENCE_LAST = 'last'
PRECEDENCE_FIRST = 'first'
PRECEDENCES = (PRECEDENCE_LAST, PRECEDENCE_FIRST)


class Verdict:
    """Outcome of evaluating a path against a group."""
    EXCLUDED = 'excluded'
    INCLUDED = 'included'
    NO_OPINION = 'no-opinion'


class ExcludeGroup:
    """
    Ordered patterns from one ignore file, anchored to a base directory.

    Groups are built once and never modified, so any number of threads
    may query the same group.
    """

    def __init__(self, source: str, base_path: PathLike,
                 patterns: Iterable[CompiledPattern] = (),
                 errors: Iterable[MalformedPattern] = (),
                 precedence: str = PRECEDENCE_LAST):
        """
        Initialize an exclude group.

        Args:
            source: Label of the ignore file (e.g. '.gitignore')
            base_path: Directory the patterns are relative to
            patterns: Compiled patterns in source order
            errors: Malformed lines that were skipped while loading
            precedence: 'last' (last matching line wins) or 'first'
        """
        if precedence not in PRECEDENCES:
            raise ValueError(f"Unknown precedence: {precedence}")

        self.source = source
        self.base_path = clean_base(base_path)
        self.patterns = tuple(patterns)
        self.errors = tuple(errors)
        self.precedence = precedence

    @classmethod
    def from_lines(cls, source: str, base_path: PathLike, lines: Iterable[Line],
                   on_malformed: str = ON_MALFORMED_SKIP,
                   precedence: str = PRECEDENCE_LAST) -> 'ExcludeGroup':
        """Build a group from a stream of raw lines."""
        patterns, errors = scan_patterns(lines, on_malformed)
        return cls(source, base_path, patterns, errors, precedence)

    @classmethod
    def from_file(cls, base_path: PathLike, file_path: str,
                  on_malformed: str = ON_MALFORMED_SKIP,
                  precedence: str = PRECEDENCE_LAST) -> 'ExcludeGroup':
        """
        Load a group from an ignore file.

        Args:
            base_path: Directory the ignore file's rules are anchored to
            file_path: Ignore file path, relative to ``base_path``
            on_malformed: 'skip' or 'abort'
            precedence: 'last' or 'first'

        Raises:
            SourceUnavailable: If the file cannot be opened or read
            MalformedPattern: On a bad line with the 'abort' policy
        """
        full_path = os.path.join(os.fspath(base_path), file_path)

        try:
            with open(full_path, 'rb') as f:
                return cls.from_lines(file_path, base_path, f, on_malformed, precedence)
        except FileNotFoundError as e:
            raise SourceUnavailable(file_path, full_path) from e
        except OSError as e:
            raise SourceUnavailable(file_path, full_path, e.strerror or str(e)) from e

    def __len__(self) -> int:
        return len(self.patterns)

    def __iter__(self) -> Iterator[CompiledPattern]:
        return iter(self.patterns)

    def __repr__(self) -> str:
        return f"ExcludeGroup({self.source!r}, {self.base_path!r}, {len(self)} patterns)"

    def relative_path(self, path: PathLike) -> str:
        """Resolve a path against this group's base directory."""
        return resolve_relative(path, self.base_path)

    def _ordered(self) -> Sequence[CompiledPattern]:
        if self.precedence == PRECEDENCE_LAST:
            return self.patterns[::-1]
        return self.patterns

    def _decide(self, rel: str, is_dir: bool) -> Optional[CompiledPattern]:
        for pattern in self._ordered():
            if matches(pattern, rel, is_dir):
                return pattern
        return None

    def find_match(self, path: PathLike, is_dir: bool = False) -> Optional[CompiledPattern]:
        """
        Find the pattern that decides a path's verdict.

        Leading directories are checked first: once a directory is
        excluded nothing below it can be re-included.

        Args:
            path: Absolute path, or path relative to the base
            is_dir: Whether the path is a directory

        Returns:
            The deciding pattern, or None if no pattern applies

        Raises:
            PathResolutionError: If the path cannot be made relative
            PatternMatchError: If a glob is malformed
        """
        rel = self.relative_path(path)
        if rel == '.':
            return None

        parts = rel.split('/')
        for i in range(1, len(parts)):
            parent = self._decide('/'.join(parts[:i]), True)
            if parent is not None and not parent.negated:
                return parent

        return self._decide(rel, is_dir)

    def verdict(self, path: PathLike, is_dir: bool = False) -> str:
        """Evaluate a path: excluded, re-included, or no opinion."""
        pattern = self.find_match(path, is_dir)
        if pattern is None:
            return Verdict.NO_OPINION
        if pattern.negated:
            return Verdict.INCLUDED
        return Verdict.EXCLUDED

    def match(self, path: PathLike, is_dir: bool = False) -> bool:
        """Check if a path is excluded by this group."""
        return self.verdict(path, is_dir) == Verdict.EXCLUDED

    def to_dicts(self) -> List[dict]:
        """Serialize every pattern for debug output."""
        return [pattern.to_dict() for pattern in self.patterns]

"""Compilation of raw ignore-file lines into structured patterns.

A line such as ``!/build/`` is turned into a glob string (``build``) plus a
set of flags (``NEGATE | MUST_BE_DIR``). The flags tell the matcher which
comparison to run; the glob string is what actually gets compared.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from gitexclude.core.errors import MalformedPattern, PatternMatchError
from gitexclude.core.flags import (
    NO_DIR, MUST_BE_DIR, WILDCARD, MATCHER, RANGE_NOTATION, NEGATE,
    flag_names, has_flag,
)
from gitexclude.core.matcher import glob_regex

ON_MALFORMED_SKIP = 'skip'
ON_MALFORMED_ABORT = 'abort'
MALFORMED_POLICIES = (ON_MALFORMED_SKIP, ON_MALFORMED_ABORT)

Line = Union[bytes, str]


@dataclass(frozen=True)
class CompiledPattern:
    """A single compiled ignore rule."""
    flags: int
    pattern: str
    original: str
    line_number: Optional[int] = field(default=None, compare=False)

    def has_flag(self, flag: int) -> bool:
        """Check whether a flag is set on this pattern."""
        return has_flag(self.flags, flag)

    @property
    def negated(self) -> bool:
        return self.has_flag(NEGATE)

    @property
    def directory_only(self) -> bool:
        return self.has_flag(MUST_BE_DIR)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for debug and dry-run output."""
        return {
            'original-pattern': self.original,
            'formatted-pattern': self.pattern,
            'flags': self.flags,
            'flag-names': flag_names(self.flags),
            'line': self.line_number,
        }

    def __repr__(self) -> str:
        names = '|'.join(flag_names(self.flags)) or '0'
        return f"CompiledPattern({self.original!r} -> {self.pattern!r}, {names})"


def _decode(line: Line) -> str:
    if isinstance(line, bytes):
        return line.decode('utf-8', 'surrogateescape')
    return line


def _trim(text: str) -> str:
    """Strip surrounding whitespace, keeping one backslash-escaped trailing blank."""
    text = text.lstrip().rstrip('\r\n')
    trimmed = text.rstrip()
    backslashes = len(trimmed) - len(trimmed.rstrip('\\'))
    if backslashes % 2 and len(trimmed) < len(text):
        return text[:len(trimmed) + 1]
    return trimmed


def compile_pattern(line: Line, line_number: Optional[int] = None) -> CompiledPattern:
    """
    Compile one ignore line.

    The line must not be blank or a comment; those are filtered by
    :func:`scan_patterns`. Surrounding whitespace is trimmed (a trailing
    blank escaped with ``\\`` is kept) so that compiling
    ``pattern.original`` again yields the same result. Repeated
    separators collapse to one.

    Args:
        line: Raw line, as bytes or text
        line_number: 1-based position in the source file, if known

    Returns:
        The compiled pattern

    Raises:
        MalformedPattern: If a ``[`` character class is never closed, or
            the glob cannot be matched (empty class, dangling escape)
    """
    text = _trim(_decode(line))
    flags = 0
    buf = []
    separators = 0
    last = len(text) - 1
    # First index after an optional negation marker
    start = 1 if text.startswith('!') else 0
    i = 0

    while i < len(text):
        c = text[i]

        if c == '!':
            if i == 0:
                flags |= NEGATE
            else:
                buf.append(c)
        elif c == '/':
            separators += 1
            # A leading separator anchors the pattern to the base, it is not
            # part of the matched string.
            if i == start:
                pass
            elif i == last:
                flags |= MUST_BE_DIR
                if buf and buf[-1] == '/':
                    buf.pop()
            elif buf and buf[-1] != '/':
                buf.append(c)
        elif c == '*':
            flags |= WILDCARD
            if i < last and text[i + 1] == '*':
                buf.append('**')
                i += 1
            else:
                buf.append(c)
        elif c == '?':
            flags |= MATCHER
            buf.append(c)
        elif c == '[':
            end = text.find(']', i + 1)
            if end == -1:
                raise MalformedPattern(text, line_number)
            buf.append(text[i:end + 1])
            flags |= RANGE_NOTATION
            i = end
        else:
            buf.append(c)
        i += 1

    if separators == 0:
        flags |= NO_DIR

    pattern = ''.join(buf)
    try:
        glob_regex(pattern, flags)
    except PatternMatchError as e:
        raise MalformedPattern(text, line_number, e.reason) from e

    return CompiledPattern(flags, pattern, text, line_number)


def is_pattern_line(line: str) -> bool:
    """Return False for blank lines and comments."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith('#')


def scan_patterns(lines: Iterable[Line],
                  on_malformed: str = ON_MALFORMED_SKIP
                  ) -> Tuple[List[CompiledPattern], List[MalformedPattern]]:
    """
    Compile every rule in a line stream.

    Args:
        lines: A file object opened in binary or text mode, or any iterable
            of lines
        on_malformed: ``skip`` to collect malformed lines and keep going,
            ``abort`` to raise on the first one

    Returns:
        Tuple of (compiled patterns in source order, skipped line errors)
    """
    if on_malformed not in MALFORMED_POLICIES:
        raise ValueError(f"Unknown malformed-line policy: {on_malformed}")

    patterns = []
    errors = []

    for number, raw in enumerate(lines, start=1):
        line = _decode(raw)
        if not is_pattern_line(line):
            continue

        try:
            patterns.append(compile_pattern(line, number))
        except MalformedPattern as e:
            if on_malformed == ON_MALFORMED_ABORT:
                raise
            errors.append(e)

    return patterns, errors

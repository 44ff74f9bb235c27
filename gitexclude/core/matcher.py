"""Evaluation of a compiled pattern against a candidate path.

Glob strings are translated to regular expressions once and cached:
- ``*`` matches anything except ``/``
- ``?`` matches a single character except ``/``
- ``[...]`` is a character class, ``!`` or ``^`` negates it
- ``**`` as a whole path segment matches zero or more segments
"""

import re
from functools import lru_cache
from typing import TYPE_CHECKING, List

from gitexclude.core.errors import PatternMatchError
from gitexclude.core.flags import NO_DIR, MUST_BE_DIR, WILDCARD

if TYPE_CHECKING:
    from gitexclude.core.pattern import CompiledPattern


def normalize_candidate(path: str) -> str:
    """Normalize separators and drop a leading ``./``."""
    path = path.replace('\\', '/')
    while path.startswith('./'):
        path = path[2:]
    return path.rstrip('/') or path


def _translate_class(glob: str, i: int) -> tuple:
    """Translate the class starting at ``glob[i] == '['``; return (regex, next index)."""
    j = i + 1
    negate = j < len(glob) and glob[j] in '!^'
    if negate:
        j += 1

    members = []
    while j < len(glob) and glob[j] != ']':
        c = glob[j]
        if c == '\\':
            j += 1
            if j == len(glob):
                raise PatternMatchError(glob, "trailing escape in character class")
            c = glob[j]
        if c == '-' and members and j + 1 < len(glob) and glob[j + 1] != ']':
            members.append('-')
        else:
            members.append(re.escape(c))
        j += 1

    if j == len(glob):
        raise PatternMatchError(glob, "unterminated character class")
    if not members:
        raise PatternMatchError(glob, "empty character class")

    # Classes never match the separator, negated or not.
    body = ''.join(members)
    if negate:
        return f'[^/{body}]', j + 1
    return f'(?!/)[{body}]', j + 1


def _translate_segment(glob: str) -> str:
    """Translate a glob in which no wildcard crosses ``/``."""
    parts = []
    i = 0
    while i < len(glob):
        c = glob[i]
        if c == '*':
            # A run of stars is a single wildcard
            while i < len(glob) and glob[i] == '*':
                i += 1
            parts.append('[^/]*')
        elif c == '?':
            parts.append('[^/]')
            i += 1
        elif c == '[':
            regex, i = _translate_class(glob, i)
            parts.append(regex)
        elif c == '\\':
            if i + 1 == len(glob):
                raise PatternMatchError(glob, "trailing escape")
            parts.append(re.escape(glob[i + 1]))
            i += 2
        else:
            parts.append(re.escape(c))
            i += 1
    return ''.join(parts)


@lru_cache(maxsize=1024)
def segment_regex(glob: str) -> re.Pattern:
    """Compile a single-segment glob."""
    return re.compile(_translate_segment(glob))


@lru_cache(maxsize=1024)
def globstar_regex(glob: str) -> re.Pattern:
    """Compile a glob in which ``**`` segments may span directories."""
    segments = []
    for segment in glob.split('/'):
        # Adjacent globstars match the same as one
        if segment == '**' and segments and segments[-1] == '**':
            continue
        segments.append(segment)
    regex_parts: List[str] = []

    for idx, segment in enumerate(segments):
        is_last = idx == len(segments) - 1

        if segment == '**':
            if is_last and idx == 0:
                regex_parts.append('.*')
            elif is_last:
                # a/** matches a itself and everything below it
                regex_parts[-1] = regex_parts[-1][:-1]
                regex_parts.append('(?:/.*)?')
            else:
                regex_parts.append('(?:.*/)?')
            continue

        regex_parts.append(_translate_segment(segment) + ('' if is_last else '/'))

    return re.compile(''.join(regex_parts))


def match_segment(glob: str, name: str) -> bool:
    """Match with wildcards confined to one path segment."""
    return segment_regex(glob).fullmatch(name) is not None


def match_globstar(glob: str, path: str) -> bool:
    """Match with ``**`` segments allowed to cross separators."""
    return globstar_regex(glob).fullmatch(path) is not None


def glob_regex(glob: str, flags: int) -> re.Pattern:
    """
    Compile a glob with the strategy its flags select.

    Basename (NO_DIR) and plain anchored globs use single-segment
    semantics; WILDCARD globs use globstar semantics.

    Raises:
        PatternMatchError: If the glob is malformed
    """
    if flags & NO_DIR or not flags & WILDCARD:
        return segment_regex(glob)
    return globstar_regex(glob)


def matches(pattern: 'CompiledPattern', path: str, is_dir: bool = False) -> bool:
    """
    Check if a relative path matches a compiled pattern.

    Args:
        pattern: The compiled pattern
        path: Path relative to the pattern's base directory
        is_dir: Whether the path is a directory

    Returns:
        True if the path matches

    Raises:
        PatternMatchError: If the glob string is malformed
    """
    if pattern.has_flag(MUST_BE_DIR) and not is_dir:
        return False

    path = normalize_candidate(path)

    if pattern.has_flag(NO_DIR):
        return match_segment(pattern.pattern, path.rsplit('/', 1)[-1])
    if pattern.has_flag(WILDCARD):
        return match_globstar(pattern.pattern, path)
    return match_segment(pattern.pattern, path)

"""Behavioral flags attached to a compiled ignore pattern.

Flags are plain int bits so a pattern's flag set can be combined with ``|``
and serialized as a single number in debug output.
"""

from typing import List

NO_DIR = 1 << 0
MUST_BE_DIR = 1 << 1
WILDCARD = 1 << 2
MATCHER = 1 << 3
RANGE_NOTATION = 1 << 4
NEGATE = 1 << 5

FLAG_NAMES = (
    (NO_DIR, 'NO_DIR'),
    (MUST_BE_DIR, 'MUST_BE_DIR'),
    (WILDCARD, 'WILDCARD'),
    (MATCHER, 'MATCHER'),
    (RANGE_NOTATION, 'RANGE_NOTATION'),
    (NEGATE, 'NEGATE'),
)


def has_flag(flags: int, flag: int) -> bool:
    """Check whether ``flag`` is set in ``flags``."""
    return flags & flag != 0


def flag_names(flags: int) -> List[str]:
    """Return the names of the flags set in ``flags``, in bit order."""
    return [name for bit, name in FLAG_NAMES if flags & bit]

"""Path helpers shared by exclude groups and the ignorer."""

import os
from pathlib import Path
from typing import Optional, Union

from gitexclude.core.errors import PathResolutionError

PathLike = Union[str, Path]


def clean_base(path: PathLike) -> str:
    """Return an absolute, normalized directory path."""
    return os.path.normpath(os.path.abspath(os.fspath(path)))


def resolve_relative(path: PathLike, base_path: str) -> str:
    """
    Express a path relative to a base directory, using ``/`` separators.

    Relative paths are taken as relative to the base already.

    Args:
        path: Absolute path, or path relative to ``base_path``
        base_path: Absolute, normalized directory

    Returns:
        Relative path, or ``'.'`` for the base itself

    Raises:
        PathResolutionError: If the path lies outside the base or on
            another drive
    """
    raw = os.fspath(path)
    candidate = raw if os.path.isabs(raw) else os.path.join(base_path, raw)
    candidate = os.path.normpath(candidate)

    try:
        rel = os.path.relpath(candidate, base_path)
    except ValueError as e:
        raise PathResolutionError(raw, base_path, str(e)) from e

    rel = rel.replace(os.sep, '/')
    if rel == '..' or rel.startswith('../'):
        raise PathResolutionError(raw, base_path, "path is outside the base directory")
    return rel


def is_within(path: PathLike, base_path: str) -> bool:
    """Check whether a path resolves inside a base directory."""
    try:
        resolve_relative(path, base_path)
    except PathResolutionError:
        return False
    return True


def find_repository_root(path: PathLike = '.') -> Optional[Path]:
    """
    Find the working tree root by searching up for a ``.git`` entry.

    Args:
        path: Starting path for search

    Returns:
        The directory containing ``.git``, or None if not found
    """
    current = Path(path).resolve()

    while True:
        if (current / '.git').exists():
            return current

        # Reached filesystem root
        if current == current.parent:
            return None

        current = current.parent

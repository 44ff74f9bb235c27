"""Shared pytest fixtures for gitexclude tests."""

import pytest
from pathlib import Path

from gitexclude.core.config import Config


def write_worktree(root: Path, gitignore=None, exclude=None) -> Path:
    """
    Lay out a working tree with optional ignore files.

    Args:
        root: Directory to populate
        gitignore: Contents of .gitignore, or None to leave it out
        exclude: Contents of .git/info/exclude, or None to leave it out

    Returns:
        The root directory
    """
    (root / '.git' / 'info').mkdir(parents=True, exist_ok=True)
    if gitignore is not None:
        (root / '.gitignore').write_text(gitignore)
    if exclude is not None:
        (root / '.git' / 'info' / 'exclude').write_text(exclude)
    return root


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep the user's global config and environment out of tests."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.gitexcluderc')
    for key in ('SOURCES', 'OPTIONAL', 'ON_MALFORMED', 'PRECEDENCE'):
        monkeypatch.delenv(f'GITEXCLUDE_EXCLUDE_{key}', raising=False)
    return home


@pytest.fixture
def worktree(tmp_path):
    """Working tree with a typical .gitignore and an empty exclude file."""
    return write_worktree(
        tmp_path,
        gitignore="# build output\ndist/\n*.log\n!keep.log\n/TODO\n",
        exclude="",
    )


@pytest.fixture
def make_worktree(tmp_path):
    """Factory for working trees with custom ignore file contents."""
    def factory(gitignore=None, exclude=None, name='repo'):
        root = tmp_path / name
        root.mkdir()
        return write_worktree(root, gitignore, exclude)
    return factory

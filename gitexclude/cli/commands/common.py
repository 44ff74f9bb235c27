"""Helpers shared by the CLI commands."""

from pathlib import Path

import click

from gitexclude.cli.output import error, warning
from gitexclude.core.config import Config
from gitexclude.core.errors import IgnoreError
from gitexclude.core.ignorer import Ignorer, new_ignorer
from gitexclude.utils.paths import find_repository_root

# Exit status for fatal errors, as git uses
EXIT_FATAL = 128


def resolve_root(ctx) -> Path:
    """Root from --root, else the enclosing working tree, else the cwd."""
    root = ctx.obj.get('root')
    if root:
        return Path(root).resolve()
    return find_repository_root() or Path.cwd()


def load_ignorer(ctx) -> Ignorer:
    """
    Build the ignorer for the current invocation.

    Fatal errors are reported and end the command; malformed lines that
    were skipped are reported as warnings.
    """
    root = resolve_root(ctx)
    config = Config.for_root(root, ctx.obj.get('overrides'))

    try:
        ignorer = new_ignorer(root, config)
    except IgnoreError as e:
        click.echo(error(str(e)), err=True)
        ctx.exit(EXIT_FATAL)

    for group in ignorer.groups:
        for e in group.errors:
            click.echo(warning(f"{group.source}: {e}"), err=True)

    return ignorer

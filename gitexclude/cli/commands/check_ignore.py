"""Check-ignore command - report which paths are excluded."""

import os

import click

from gitexclude.cli.commands.common import EXIT_FATAL, load_ignorer
from gitexclude.cli.output import error, format_verdict
from gitexclude.core.errors import IgnoreError


@click.command('check-ignore')
@click.argument('paths', nargs=-1, required=True)
@click.option('-d', '--dir', 'is_dir', is_flag=True, help='Treat every path as a directory')
@click.option('-v', '--verbose', is_flag=True, help='Show the rule that decided each path')
@click.option('-n', '--non-matching', is_flag=True, help='Also show paths that are not excluded')
@click.pass_context
def check_ignore_cmd(ctx, paths, is_dir, verbose, non_matching):
    """
    Show which PATHS are excluded by ignore rules.

    Paths are relative to the working tree root unless absolute. Exits
    with status 0 if at least one path is excluded, 1 if none is.

    Examples:
        gitexclude check-ignore build/out.o
        gitexclude check-ignore -v --dir node_modules
    """
    ignorer = load_ignorer(ctx)
    any_excluded = False

    for path in paths:
        directory = is_dir or os.path.isdir(os.path.join(ignorer.root, path))

        try:
            decided = ignorer.explain(path, directory)
        except IgnoreError as e:
            click.echo(error(str(e)), err=True)
            ctx.exit(EXIT_FATAL)

        excluded = decided is not None and not decided[1].negated
        any_excluded = any_excluded or excluded

        if not excluded and not non_matching:
            continue

        if verbose:
            click.echo(format_verdict(path, decided))
        else:
            click.echo(path)

    ctx.exit(0 if any_excluded else 1)

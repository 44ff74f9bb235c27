"""Main CLI entry point for gitexclude."""

import click
from colorama import init

from gitexclude import __version__
from gitexclude.cli.commands import check_ignore_cmd, patterns_cmd, compile_cmd

# Initialize colorama for cross-platform colored output
init(autoreset=True)


@click.group()
@click.version_option(version=__version__)
@click.option('--root', type=click.Path(file_okay=False), default=None,
              help='Working tree root (default: nearest directory containing .git)')
@click.option('--strict', is_flag=True, help='Fail on malformed ignore lines instead of skipping them')
@click.option('--first-match', is_flag=True, help='Let the first matching line of a file win')
@click.pass_context
def cli(ctx, root, strict, first_match):
    """Check paths against .gitignore rules."""
    overrides = {}
    if strict:
        overrides['on-malformed'] = 'abort'
    if first_match:
        overrides['precedence'] = 'first'

    ctx.ensure_object(dict)
    ctx.obj['root'] = root
    ctx.obj['overrides'] = overrides


# Register commands
cli.add_command(check_ignore_cmd)
cli.add_command(patterns_cmd)
cli.add_command(compile_cmd)


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == '__main__':
    main()

"""Pattern commands - inspect compiled ignore rules."""

import json

import click

from gitexclude.cli.commands.common import EXIT_FATAL, load_ignorer
from gitexclude.cli.output import error, format_pattern, info, success
from gitexclude.core.errors import MalformedPattern
from gitexclude.core.pattern import compile_pattern


@click.command('patterns')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.pass_context
def patterns_cmd(ctx, as_json):
    """
    List the compiled patterns of every ignore file.

    Examples:
        gitexclude patterns
        gitexclude patterns --json
    """
    ignorer = load_ignorer(ctx)

    if as_json:
        data = [
            {
                'source': group.source,
                'base': group.base_path,
                'patterns': group.to_dicts(),
                'errors': [
                    {'line': e.line_number, 'original-pattern': e.line, 'reason': e.reason}
                    for e in group.errors
                ],
            }
            for group in ignorer.groups
        ]
        click.echo(json.dumps(data, indent=2))
        return

    for group in ignorer.groups:
        click.echo(info(f"{group.source} ({len(group)} patterns)"))
        for pattern in group:
            click.echo(format_pattern(pattern))


@click.command('compile')
@click.argument('lines', nargs=-1, required=True)
@click.pass_context
def compile_cmd(ctx, lines):
    """
    Compile ignore LINES and show their flags.

    Examples:
        gitexclude compile '*.log' '!keep.log' '/build/'
    """
    failed = False

    for number, line in enumerate(lines, start=1):
        try:
            pattern = compile_pattern(line, number)
        except MalformedPattern as e:
            click.echo(error(str(e)), err=True)
            failed = True
            continue
        click.echo(format_pattern(pattern))

    if failed:
        ctx.exit(EXIT_FATAL)
    click.echo(success(f"Compiled {len(lines)} pattern(s)"))

"""CLI commands for gitexclude."""

from gitexclude.cli.commands.check_ignore import check_ignore_cmd
from gitexclude.cli.commands.patterns import patterns_cmd, compile_cmd

__all__ = ['check_ignore_cmd', 'patterns_cmd', 'compile_cmd']

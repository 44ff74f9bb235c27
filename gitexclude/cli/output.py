"""CLI output utilities and formatting."""

from colorama import Fore, Style

from gitexclude.core.flags import flag_names


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def describe_source(group, pattern) -> str:
    """Render the rule behind a verdict as source:line:pattern."""
    line = pattern.line_number if pattern.line_number is not None else ''
    return f"{group.source}:{line}:{pattern.original}"


def format_verdict(path: str, decided=None) -> str:
    """
    Render one check-ignore line: ``source:line:pattern<TAB>path``.

    Paths no rule decided get an empty ``::`` rule, as git prints them.
    """
    rule = describe_source(*decided) if decided else '::'
    return f"{rule}\t{path}"


def format_pattern(pattern) -> str:
    """One listing line: line number, original text, glob and flags."""
    line = pattern.line_number if pattern.line_number is not None else '-'
    names = ','.join(flag_names(pattern.flags)) or '-'
    return (f"{Fore.YELLOW}{line:>4}{Style.RESET_ALL}  {pattern.original:<30} "
            f"{Fore.CYAN}{pattern.pattern:<30}{Style.RESET_ALL} {names}")

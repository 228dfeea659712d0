"""
CLI Error Handling
==================

Provides consistent error handling and exit codes for the CLI tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    DIAGNOSTICS = 1      # Source has lexical, syntax or semantic errors
    INVALID_ARGS = 2     # Unreadable input file
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for the CLI tools.

    Formats the error message appropriately, optionally prints traceback
    in verbose mode, and exits with the correct exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from mylang.frontend.errors import CompilationError

    if isinstance(error, CompilationError):
        # One diagnostic per line, already prefixed with [line:column]
        for diagnostic in error.diagnostics:
            click.echo(str(diagnostic), err=True)
        sys.exit(ExitCode.DIAGNOSTICS)

    elif isinstance(error, OSError):
        # Input vanished or became unreadable after click validated the path
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)

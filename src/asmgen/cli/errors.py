"""
Unified CLI Error Handling
==========================

Provides consistent error reporting and exit codes for the CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Toolchain, listing, or configuration error
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching status.

    A failed external command exits with that command's own status, so
    `genasm` fails the same way the tool it wrapped did.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from asmgen.errors import AsmGenError, CommandFailedError

    if isinstance(error, CommandFailedError):
        click.echo(f"Error: {error}", err=True)
        # Signals give negative codes; POSIX keeps only the low 8 bits
        code = error.returncode
        sys.exit(code if 1 <= code <= 255 else ExitCode.BUILD_ERROR)

    elif isinstance(error, AsmGenError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)

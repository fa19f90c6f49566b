"""
Unified CLI Error Handling
==========================

Maps the exceptions a hackasm run can raise to exit codes and messages.

Exit Codes
----------
- 0: assembly succeeded
- 1: the source has an error (bad instruction, duplicate label, ...)
- 2: the command line is wrong, or an input/output file cannot be used
- 3: anything else (a bug in the assembler)
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from hack_assembler.errors import HackError


class ExitCode(IntEnum):
    """Standard exit codes for hackasm."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Error in the assembly source
    INVALID_ARGS = 2     # Invalid arguments or unusable files
    INTERNAL_ERROR = 3   # Unexpected internal error


# Checked in order; the first matching class wins.
EXIT_CODES: tuple[tuple[type[BaseException], ExitCode], ...] = (
    (HackError, ExitCode.BUILD_ERROR),
    (click.BadParameter, ExitCode.INVALID_ARGS),
    (UnicodeDecodeError, ExitCode.INVALID_ARGS),
    (OSError, ExitCode.INVALID_ARGS),
)


def exit_code_for(error: BaseException) -> ExitCode:
    """Return the exit code for an exception raised during a run."""
    for error_class, code in EXIT_CODES:
        if isinstance(error, error_class):
            return code
    return ExitCode.INTERNAL_ERROR


def format_cli_error(error: BaseException, error_type: str | None = None) -> str:
    """
    Build the message printed to stderr for an error.

    Source errors already carry their location and context, so they only
    get the prefix. A source file that is not text is reported as such
    rather than with the codec's byte offsets.
    """
    if isinstance(error, HackError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        return f"{prefix}{error}"
    if isinstance(error, UnicodeDecodeError):
        return "Error: input is not a text file"
    if exit_code_for(error) == ExitCode.INVALID_ARGS:
        return f"Error: {error}"
    return f"Internal error: {error}"


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception and exit with its exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Optional prefix for source errors (e.g., "Assembly")

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)
    click.echo(format_cli_error(error, error_type), err=True)
    if code == ExitCode.INTERNAL_ERROR and verbose:
        traceback.print_exc()
    sys.exit(code)

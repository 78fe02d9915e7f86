"""
CLI Error Handling
==================

Maps exceptions raised by xivdat commands to messages and exit codes.

A StorageIOError that wraps a missing file or a permission problem is a
usage error (exit 2); every other DATError means the DAT file itself was
rejected (exit 1).
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from xivdat.errors import DATError, StorageIOError


class ExitCode(IntEnum):
    """Exit codes of the xivdat tool."""
    SUCCESS = 0
    DAT_ERROR = 1        # Malformed file, overflow, wrong type, etc.
    INVALID_ARGS = 2     # Bad arguments, missing or unwritable paths
    INTERNAL_ERROR = 3   # Unexpected internal error

# OSError subclasses that point at the command line rather than the file.
_USAGE_OS_ERRORS = (FileNotFoundError, FileExistsError, IsADirectoryError, PermissionError)


def exit_code_for(error: Exception) -> ExitCode:
    """Choose the exit code for an exception raised by a command."""
    if isinstance(error, StorageIOError):
        if isinstance(error.os_error, _USAGE_OS_ERRORS):
            return ExitCode.INVALID_ARGS
        return ExitCode.DAT_ERROR
    if isinstance(error, DATError):
        return ExitCode.DAT_ERROR
    if isinstance(error, (click.BadParameter, *_USAGE_OS_ERRORS)):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised by a command and exit.

    Errors are printed as "Error: <kind>: <description>". Unexpected
    errors print a traceback in verbose mode.

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)
    if code == ExitCode.INTERNAL_ERROR:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
    else:
        click.echo(f"Error: {error}", err=True)
    sys.exit(code)

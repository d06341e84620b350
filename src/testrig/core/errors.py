# topmark:header:start
#
#   project      : testrig
#   file         : errors.py
#   file_relpath : src/testrig/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Exceptions for testrig.

Usage:
    Raise these exceptions from the parser, the bootstrap sequencer or the
    CLI to signal errors with standardized messages and exit codes.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's
    default styling.

Hierarchy:
    TestrigError
    ├── TestrigUsageError
    │   ├── CommandRequiredError
    │   ├── CommandInvalidError
    │   ├── OptionInvalidError
    │   ├── OptionInvalidValueError
    │   ├── OptionRequiredError
    │   └── ParamInvalidError
    ├── ConfigFileError
    ├── FileMissingError
    ├── FileReadError
    └── FormatError
"""

from __future__ import annotations

from typing import IO, Any

import click

from testrig.core.exit_codes import ExitCode


class TestrigError(click.ClickException):
    """Base class for all testrig errors."""

    # Keep pytest from collecting these classes as test cases
    __test__ = False

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text.

        Notes:
            - Unlike Click's default, this method does not add color.
            - Colorization is applied in `show()` when a project console is present.
        """
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(
                    console.styled(f"Error: {self.format_message()}", fg="bright_red")
                )
                return
        super().show(file)


class TestrigUsageError(TestrigError):
    """Error for command-line invocation errors (invalid flags/args/commands)."""

    exit_code = ExitCode.USAGE_ERROR


class CommandRequiredError(TestrigUsageError):
    """No command was found in an argument list that requires one."""


class CommandInvalidError(TestrigUsageError):
    """The command is unknown or may not be selected by the user."""


class OptionInvalidError(TestrigUsageError):
    """The option is unknown, repeated, or not valid for the selected command."""


class OptionInvalidValueError(TestrigUsageError):
    """The option value could not be coerced to the option's type."""


class OptionRequiredError(TestrigUsageError):
    """A value option was given without a value."""


class ParamInvalidError(TestrigUsageError):
    """Positional parameters were given to a command that accepts none."""


class ConfigFileError(TestrigError):
    """Error for configuration file errors (malformed TOML, unknown keys)."""

    exit_code = ExitCode.CONFIG_ERROR


class FileMissingError(TestrigError):
    """Error when a required file does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class FileReadError(TestrigError):
    """Error for I/O failures while reading a file."""

    exit_code = ExitCode.IO_ERROR


class FormatError(TestrigError):
    """Error for system calls that fail while preparing the process environment."""

    exit_code = ExitCode.ENVIRONMENT_ERROR

# topmark:header:start
#
#   project      : testrig
#   file         : exit_codes.py
#   file_relpath : src/testrig/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Exit codes for the testrig CLI.

testrig aligns with the BSD `sysexits` convention so that wrapper scripts and
CI jobs can tell a usage mistake from a broken environment without parsing
error text.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the testrig CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error). Prefer a more specific
            code if available.
        USAGE_ERROR: Command-line invocation error (unknown option, invalid
            value, invalid or missing command). Mirrors BSD ``EX_USAGE (64)``.
        FILE_NOT_FOUND: A required input file does not exist. Mirrors BSD
            ``EX_NOINPUT (66)``.
        ENVIRONMENT_ERROR: A system call needed to set up the process failed
            (e.g. the current working directory cannot be determined).
            Mirrors BSD ``EX_OSERR (71)``.
        IO_ERROR: I/O error reading a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration file error (malformed TOML, unknown key).
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    ENVIRONMENT_ERROR = 71  # EX_OSERR
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255

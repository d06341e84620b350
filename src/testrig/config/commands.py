# topmark:header:start
#
#   project      : testrig
#   file         : commands.py
#   file_relpath : src/testrig/config/commands.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Command identifiers recognized by the testrig command line."""

from __future__ import annotations

from typing import Final

from testrig.core.enums import LabeledStrEnum


class Command(LabeledStrEnum):
    """Commands the parser can resolve from an argument list."""

    NONE = ("none", "No command given")
    NOOP = ("noop", "Placeholder holding options that are declared but unused")
    HELP = ("help", "Get help")
    VERSION = ("version", "Get version")
    TEST = ("test", "Run the test suite")


# Commands that only report information and must not touch process state
INFORMATIONAL_COMMANDS: Final[frozenset[Command]] = frozenset(
    {Command.NONE, Command.HELP, Command.VERSION}
)

# Anchors option declarations; never user-selectable
PLACEHOLDER_COMMAND: Final[Command] = Command.NOOP

# Injected when no command is found but one is required
FALLBACK_COMMAND: Final[Command] = Command.TEST

# Commands that accept positional parameters after the command name
PARAM_COMMANDS: Final[frozenset[Command]] = frozenset({Command.TEST})

# Commands that may appear by name on the command line ("none" cannot)
NAMED_COMMANDS: Final[dict[str, Command]] = {
    command.value: command for command in Command if command is not Command.NONE
}

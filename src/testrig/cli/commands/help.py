# topmark:header:start
#
#   project      : testrig
#   file         : help.py
#   file_relpath : src/testrig/cli/commands/help.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Render general help and per-command help."""

from __future__ import annotations

from typing import TYPE_CHECKING

from testrig.config.commands import NAMED_COMMANDS, PLACEHOLDER_COMMAND, Command
from testrig.config.options import OptionSource
from testrig.config.types import format_size
from testrig.constants import PROJECT_NAME, TESTRIG_VERSION, VALUE_NOT_SET

if TYPE_CHECKING:
    from testrig.cli.console import ClickConsole
    from testrig.config.options import OptionDef, OptionSet


def _format_value(option: OptionDef, value: object | None) -> str:
    if value is None:
        return VALUE_NOT_SET
    if isinstance(value, bool):
        return "y" if value else "n"
    if option.param_type.name == "size" and isinstance(value, int):
        return format_size(value)
    return str(value)


def render_help(console: ClickConsole) -> None:
    """Print the list of commands."""
    console.print(console.styled(f"{PROJECT_NAME} {TESTRIG_VERSION} - General help", bold=True))
    console.print()
    console.print("Usage:")
    console.print(f"    {PROJECT_NAME} [options] [command]")
    console.print()
    console.print("Commands:")
    commands: list[Command] = sorted(
        (c for c in NAMED_COMMANDS.values() if c is not PLACEHOLDER_COMMAND),
        key=lambda c: c.value,
    )
    width: int = max(len(c.value) for c in commands)
    for command in commands:
        console.print(f"    {command.value:<{width}}  {command.label}")
    console.print()
    console.print(f"Use '{PROJECT_NAME} help [command]' for more information.")


def render_command_help(console: ClickConsole, options: OptionSet) -> None:
    """Print the options valid for ``options.command`` with defaults and current values."""
    command: Command = options.command
    console.print(
        console.styled(f"{PROJECT_NAME} {TESTRIG_VERSION} - '{command}' command help", bold=True)
    )
    console.print()
    console.print(command.label)

    entries = list(options.items())
    if not entries:
        return

    console.print()
    console.print("Command Options:")
    width: int = max(len(option.name) for option, _ in entries) + 2
    for option, entry in entries:
        notes: list[str] = []
        if entry.source is not OptionSource.DEFAULT:
            notes.append(f"current={_format_value(option, entry.value)}")
        if option.default is not None:
            notes.append(f"default={_format_value(option, option.default)}")
        suffix: str = f" [{', '.join(notes)}]" if notes else ""
        console.print(f"  --{option.name:<{width}}{option.help}{suffix}")


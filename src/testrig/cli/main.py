# topmark:header:start
#
#   project      : testrig
#   file         : main.py
#   file_relpath : src/testrig/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""testrig command-line entry point.

The click command accepts the raw argument list unprocessed and hands it to
the bootstrap sequencer (`testrig.config.load.load_config`), which owns all
option and command parsing. Once bootstrap returns, the selected command body
runs and, for real commands, the command-end hook logs the outcome.

Errors raised during bootstrap are `TestrigError` subclasses of
`click.ClickException`; Click renders them and exits with their exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from testrig.cli.commands.help import render_command_help, render_help
from testrig.cli.commands.test import run_test_command
from testrig.cli.commands.version import render_version
from testrig.cli.console import ClickConsole, resolve_color
from testrig.config.commands import Command
from testrig.config.load import ProcessContext, load_config
from testrig.config.logging import get_logger, setup_logging
from testrig.core.errors import TestrigError
from testrig.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from testrig.config.logging import TestrigLogger
    from testrig.config.options import OptionSet

logger: TestrigLogger = get_logger(__name__)


def dispatch(console: ClickConsole, options: OptionSet) -> int:
    """Run the body of the command selected during bootstrap.

    Args:
        console (ClickConsole): Program-output console.
        options (OptionSet): Options resolved by bootstrap.

    Returns:
        int: The command's exit code.
    """
    if options.command_help:
        render_command_help(console, options)
    elif options.command in (Command.NONE, Command.HELP):
        render_help(console)
    elif options.command is Command.VERSION:
        render_version(console)
    else:
        return run_test_command(console, options)
    return ExitCode.SUCCESS


@click.command(
    name="testrig",
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "help_option_names": [],
    },
    add_help_option=False,
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx: click.Context, args: tuple[str, ...]) -> None:
    """Entry point for the testrig CLI."""
    ctx.ensure_object(dict)
    console = ClickConsole(enable_color=resolve_color())
    ctx.obj["console"] = console

    # Replaced by the configured channels once bootstrap has parsed the log options
    setup_logging()

    context = ProcessContext()
    options: OptionSet = load_config(args, context=context)
    ctx.obj["options"] = options

    try:
        code: int = dispatch(console, options)
    except TestrigError as exc:
        context.end_command(exc.exit_code)
        raise
    context.end_command(code)
    if code != ExitCode.SUCCESS:
        ctx.exit(code)


if __name__ == "__main__":
    cli()

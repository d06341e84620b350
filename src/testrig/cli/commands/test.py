# topmark:header:start
#
#   project      : testrig
#   file         : test.py
#   file_relpath : src/testrig/cli/commands/test.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""testrig `test` command.

Test execution itself is delegated to the harness; this command reports the
configuration the harness will run with, one option per line, together with
where each value came from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from testrig.config.logging import get_logger
from testrig.config.types import format_size
from testrig.constants import VALUE_NOT_SET
from testrig.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from testrig.cli.console import ClickConsole
    from testrig.config.logging import TestrigLogger
    from testrig.config.options import OptionSet

logger: TestrigLogger = get_logger(__name__)


def run_test_command(console: ClickConsole, options: OptionSet) -> int:
    """Print the resolved test configuration.

    Args:
        console (ClickConsole): Program-output console.
        options (OptionSet): Options resolved by bootstrap.

    Returns:
        int: The exit code (always `ExitCode.SUCCESS`).
    """
    console.print(console.styled("test configuration:", bold=True))
    entries = list(options.items())
    width: int = max((len(option.name) for option, _ in entries), default=0)
    for option, entry in entries:
        value: object | None = entry.value
        if value is None:
            text = VALUE_NOT_SET
        elif option.param_type.name == "size" and isinstance(value, int):
            text = format_size(value)
        else:
            text = str(value)
        console.print(f"  {option.name:<{width}} = {text} ({entry.source.label})")
    if options.params:
        console.print(f"  {'params':<{width}} = {' '.join(options.params)}")
    logger.detail("reported %d options", len(entries))
    return ExitCode.SUCCESS

# topmark:header:start
#
#   project      : testrig
#   file         : lifecycle.py
#   file_relpath : src/testrig/command/lifecycle.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Command begin/end hooks.

`CommandLifecycle.begin` is the last step of bootstrap: it records the start
time and logs which command starts with which (non-default) options.
`CommandLifecycle.end` logs the outcome and elapsed time once the command
body returns.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from testrig.config.logging import get_logger
from testrig.config.options import OptionSource
from testrig.constants import TESTRIG_VERSION
from testrig.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Callable

    from testrig.config.commands import Command
    from testrig.config.logging import TestrigLogger
    from testrig.config.options import OptionDef, OptionSet

logger: TestrigLogger = get_logger(__name__)


def format_option(option: OptionDef, value: object | None) -> str:
    """Render an option the way it would be written on the command line.

    Args:
        option (OptionDef): The option declaration.
        value (object | None): Its resolved value.

    Returns:
        str: e.g. ``--log-level=debug``, ``--no-log-timestamp`` or ``--module="a b"``.
    """
    if value is None or value is False:
        return f"--no-{option.name}"
    if value is True:
        return f"--{option.name}"
    text = str(value)
    if " " in text:
        return f'--{option.name}="{text}"'
    return f"--{option.name}={text}"


def begin_message(options: OptionSet) -> str:
    """Return the ``<command> command begin <version>: <options>`` log line."""
    message: str = f"{options.command} command begin {TESTRIG_VERSION}"
    rendered: list[str] = [
        format_option(option, entry.value)
        for option, entry in options.items()
        if entry.source is not OptionSource.DEFAULT
    ]
    if rendered:
        message += ": " + " ".join(rendered)
    return message


class CommandLifecycle:
    """Tracks a single command run from begin to end.

    Args:
        clock (Callable[[], float]): Monotonic clock in seconds.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._command: Command | None = None
        self._started: float | None = None

    @property
    def running(self) -> bool:
        """True between `begin` and `end`."""
        return self._started is not None

    def begin(self, options: OptionSet) -> None:
        """Mark the command as started and log its options.

        Args:
            options (OptionSet): The options the command runs with.
        """
        self._command = options.command
        self._started = self._clock()
        logger.info("%s", begin_message(options))

    def end(self, code: int) -> None:
        """Log the command outcome and elapsed time.

        Args:
            code (int): The exit code of the command body.

        Raises:
            RuntimeError: If `begin` was not called first.
        """
        if self._started is None:
            raise RuntimeError("command end called before command begin")

        elapsed_ms = int((self._clock() - self._started) * 1000)
        if code == ExitCode.SUCCESS:
            logger.info("%s command end: completed successfully (%dms)", self._command, elapsed_ms)
        else:
            logger.info("%s command end: aborted with exception [%03d]", self._command, code)
        self._started = None

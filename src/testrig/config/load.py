# topmark:header:start
#
#   project      : testrig
#   file         : load.py
#   file_relpath : src/testrig/config/load.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Bootstrap sequencer: from raw process arguments to a ready-to-run command.

`load_config` runs once per process, before any command body:

1. copy the arguments and append ``--no-config`` so a stray config file can
   never change bootstrap behavior;
2. parse, retrying exactly once with the fallback command appended if the
   first parse finds no command;
3. reject the placeholder command ``noop``;
4. stop early for informational commands (``none``, ``help``, ``version``);
5. otherwise initialize logging, neutralize the umask, set the IO buffer
   size, normalize path options, and begin the command, in that order.

Process-wide state is only touched through a `BootstrapContext`, so tests can
substitute a recording fake for `ProcessContext`.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Final, Protocol

from testrig.command.lifecycle import CommandLifecycle
from testrig.config.commands import FALLBACK_COMMAND, INFORMATIONAL_COMMANDS, PLACEHOLDER_COMMAND
from testrig.config.log_settings import LogSettings, resolve_log_settings
from testrig.config.logging import get_logger
from testrig.config.options import OptionId
from testrig.config.parse import parse_config
from testrig.config.paths import PlatformKind, normalize_paths
from testrig.core.errors import CommandInvalidError, CommandRequiredError, FormatError
from testrig.io.buffer import set_buffer_size
from testrig.storage.posix import PosixStorage

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from testrig.config.logging import TestrigLogger
    from testrig.config.options import OptionSet

    Parser = Callable[[PosixStorage, Sequence[str]], OptionSet]

logger: TestrigLogger = get_logger(__name__)

# Appended to every argument list so no config file is loaded implicitly
NO_CONFIG_ARG: Final[str] = f"--no-{OptionId.CONFIG}"

# File-creation mask that imposes no restriction
NEUTRAL_UMASK: Final[int] = 0o000


class BootstrapContext(Protocol):
    """Process-wide effects applied by the bootstrap sequencer."""

    def getcwd(self) -> str:
        """Return the current working directory."""
        ...

    def init_logging(self, settings: LogSettings) -> None:
        """Initialize the logging subsystem."""
        ...

    def set_umask(self, mask: int) -> None:
        """Set the process file-creation mask."""
        ...

    def set_buffer_size(self, size: int) -> None:
        """Set the default IO buffer size."""
        ...

    def begin_command(self, options: OptionSet) -> None:
        """Signal that bootstrap is complete and the command may run."""
        ...


class ProcessContext:
    """`BootstrapContext` acting on the real process.

    Args:
        lifecycle (CommandLifecycle | None): Lifecycle used for the begin/end hooks.
    """

    def __init__(self, lifecycle: CommandLifecycle | None = None) -> None:
        self.lifecycle: CommandLifecycle = lifecycle or CommandLifecycle()

    def getcwd(self) -> str:
        """Return ``os.getcwd()``.

        Raises:
            FormatError: If the working directory cannot be determined.
        """
        try:
            return os.getcwd()
        except OSError as exc:
            raise FormatError(f"unable to get cwd: {exc.strerror}") from exc

    def init_logging(self, settings: LogSettings) -> None:
        """Apply ``settings`` to the logging subsystem."""
        settings.apply()

    def set_umask(self, mask: int) -> None:
        """Set the process umask."""
        os.umask(mask)

    def set_buffer_size(self, size: int) -> None:
        """Set the process-wide default IO buffer size."""
        set_buffer_size(size)

    def begin_command(self, options: OptionSet) -> None:
        """Run the command-begin hook."""
        self.lifecycle.begin(options)

    def end_command(self, code: int) -> None:
        """Run the command-end hook if a command was begun."""
        if self.lifecycle.running:
            self.lifecycle.end(code)


def parse_with_fallback(parser: Parser, storage: PosixStorage, args: list[str]) -> OptionSet:
    """Parse ``args``; on `CommandRequiredError` append the fallback command and parse once more.

    The protocol has exactly two attempts. Errors from the second attempt,
    including another `CommandRequiredError`, propagate unchanged.

    Args:
        parser (Parser): Parse function, called with a snapshot of ``args``.
        storage (PosixStorage): Storage handed to the parser.
        args (list[str]): Argument list; the fallback command is appended in place.

    Returns:
        OptionSet: The options from whichever attempt succeeded.
    """
    try:
        return parser(storage, tuple(args))
    except CommandRequiredError:
        logger.debug("no command found, retrying with command '%s'", FALLBACK_COMMAND)

    args.append(FALLBACK_COMMAND.value)
    return parser(storage, tuple(args))


def load_config(
    args: Sequence[str],
    *,
    context: BootstrapContext | None = None,
    platform: PlatformKind | None = None,
    parser: Parser = parse_config,
) -> OptionSet:
    """Bootstrap the configuration for one process run.

    Args:
        args (Sequence[str]): Process arguments without the program name; never mutated.
        context (BootstrapContext | None): Process effects; defaults to `ProcessContext`.
        platform (PlatformKind | None): Path convention; defaults to the running platform.
        parser (Parser): Parse function (see `testrig.config.parse.parse_config`).

    Returns:
        OptionSet: The validated options, with path options made absolute for
        real commands.

    Raises:
        CommandInvalidError: If the placeholder command was selected.
        FormatError: If the working directory cannot be determined.
        TestrigError: Any parse error other than a recovered `CommandRequiredError`.
    """
    if context is None:
        context = ProcessContext()
    if platform is None:
        platform = PlatformKind.current()

    arg_list: list[str] = list(args)
    arg_list.append(NO_CONFIG_ARG)

    storage = PosixStorage(platform.storage_root)
    options: OptionSet = parse_with_fallback(parser, storage, arg_list)

    if options.command is PLACEHOLDER_COMMAND:
        raise CommandInvalidError(f"invalid command '{PLACEHOLDER_COMMAND}'")

    if options.command in INFORMATIONAL_COMMANDS:
        logger.debug("informational command '%s', bootstrap done", options.command)
        return options

    # Captured before any process state changes so a failure leaves none behind
    cwd: str = context.getcwd()

    # Help output must not be affected by log settings
    if not options.command_help:
        context.init_logging(resolve_log_settings(options))

    if options.valid(OptionId.NEUTRAL_UMASK) and options.get_bool(OptionId.NEUTRAL_UMASK):
        context.set_umask(NEUTRAL_UMASK)

    if options.valid(OptionId.BUFFER_SIZE):
        context.set_buffer_size(options.get_int(OptionId.BUFFER_SIZE))

    # Hide the config option from the option list reported by the command
    options.invalidate(OptionId.CONFIG)
    normalize_paths(options, cwd, platform)

    context.begin_command(options)
    return options

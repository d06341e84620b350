# topmark:header:start
#
#   project      : testrig
#   file         : log_settings.py
#   file_relpath : src/testrig/config/log_settings.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Derive logging parameters from resolved options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from testrig.config.logging import LogLevel, init_logging
from testrig.config.options import OptionId

if TYPE_CHECKING:
    from testrig.config.options import OptionSet


@dataclass(frozen=True)
class LogSettings:
    """Console logging parameters chosen during bootstrap.

    Attributes:
        console (LogLevel): Console (stdout) log level.
        timestamp (bool): Whether log lines carry a timestamp.
    """

    console: LogLevel = LogLevel.OFF
    timestamp: bool = True

    def apply(self) -> None:
        """Initialize logging: console as configured, file and structured channels off."""
        init_logging(
            self.console,
            LogLevel.OFF,
            LogLevel.OFF,
            self.timestamp,
            process_id=0,
            process_max=1,
            dry_run=False,
        )


def resolve_log_settings(options: OptionSet) -> LogSettings:
    """Return the logging parameters for ``options``.

    The console level is ``off`` unless ``log-level`` is valid for the
    command; the timestamp flag is on unless ``log-timestamp`` is valid and
    false.

    Args:
        options (OptionSet): Resolved options.

    Returns:
        LogSettings: The parameters to initialize logging with.
    """
    console: LogLevel = LogLevel.OFF
    timestamp: bool = True

    if options.valid(OptionId.LOG_LEVEL):
        parsed: LogLevel | None = LogLevel.parse(options.get_str(OptionId.LOG_LEVEL))
        if parsed is None:
            raise ValueError(f"invalid log level '{options.get(OptionId.LOG_LEVEL)}'")
        console = parsed

    if options.valid(OptionId.LOG_TIMESTAMP):
        timestamp = options.get_bool(OptionId.LOG_TIMESTAMP)

    return LogSettings(console=console, timestamp=timestamp)

# topmark:header:start
#
#   project      : testrig
#   file         : logging.py
#   file_relpath : src/testrig/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Custom testrig logging with TRACE and DETAIL levels.

This module extends the standard logging module with testrig-specific features:
a custom TRACE level below DEBUG, a DETAIL level between DEBUG and INFO, a
specialized logger class, colored console output, and a JSON-lines formatter
for the structured channel.

Three channels can be enabled independently by `init_logging`:

- console: human-readable, chalk-colored lines on stdout;
- file: plain lines appended to a log file;
- structured: one JSON object per line on stderr.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from testrig.core.enums import LabeledStrEnum

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

TRACE_LEVEL: Final[int] = logging.DEBUG - 5
DETAIL_LEVEL: Final[int] = logging.INFO - 5
# Above CRITICAL: nothing passes a logger set to this level
OFF_LEVEL: Final[int] = logging.CRITICAL + 10


class TestrigLogger(logging.Logger):
    """Custom logger class with TRACE and DETAIL convenience methods."""

    __test__ = False

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg=msg, args=args, extra=extra, stacklevel=2)

    def detail(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'DETAIL'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(DETAIL_LEVEL):
            self._log(DETAIL_LEVEL, msg=msg, args=args, extra=extra, stacklevel=2)


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    logging.TRACE = TRACE_LEVEL  # type: ignore
if not hasattr(logging, "DETAIL"):
    logging.addLevelName(DETAIL_LEVEL, "DETAIL")
    logging.DETAIL = DETAIL_LEVEL  # type: ignore

logging.setLoggerClass(TestrigLogger)


class LogLevel(LabeledStrEnum):
    """Severity scale accepted by the ``log-level`` option.

    Members are ordered from least to most verbose; ``OFF`` disables a channel.
    """

    OFF = ("off", "Off")
    ERROR = ("error", "Error")
    WARN = ("warn", "Warning", ("warning",))
    INFO = ("info", "Info")
    DETAIL = ("detail", "Detail")
    DEBUG = ("debug", "Debug")
    TRACE = ("trace", "Trace")

    @property
    def level(self) -> int:
        """The stdlib logging level number for this severity."""
        return _LEVEL_NUMBERS[self]


_LEVEL_NUMBERS: Final[dict[LogLevel, int]] = {
    LogLevel.OFF: OFF_LEVEL,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DETAIL: DETAIL_LEVEL,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.TRACE: TRACE_LEVEL,
}

TIMESTAMP_FORMAT = "%(asctime)s.%(msecs)03d "
TIMESTAMP_DATEFMT = "%Y-%m-%d %H:%M:%S"
DRY_RUN_PREFIX = "[DRY-RUN] "


def build_log_format(
    *,
    timestamp: bool,
    process_id: int = 0,
    process_max: int = 1,
    dry_run: bool = False,
) -> str:
    """Return the ``logging`` format string for the console and file channels.

    Lines look like ``2025-01-02 10:11:12.345 P00   INFO: message``; the
    timestamp is omitted when ``timestamp`` is False.

    Args:
        timestamp (bool): Prefix each line with date and time.
        process_id (int): Process number rendered after the timestamp.
        process_max (int): Highest process number; sets the width of the process field.
        dry_run (bool): Prefix each message with ``[DRY-RUN]``.

    Returns:
        str: A ``%``-style format string.
    """
    width: int = max(2, len(str(process_max)))
    fmt: str = f"P{process_id:0{width}d} %(levelname)6s: "
    if timestamp:
        fmt = TIMESTAMP_FORMAT + fmt
    if dry_run:
        fmt += DRY_RUN_PREFIX
    return fmt + "%(message)s"


class ChalkFormatter(logging.Formatter):
    """Formatter that outputs log records with chalk-colored formatting based on severity level."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the specified record with colors based on log level.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The colorized formatted log message as a string.
        """
        level = record.levelno
        message = super().format(record)

        if level >= logging.CRITICAL:
            return chalk.red_bright(message)
        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        if level >= DETAIL_LEVEL:
            return chalk.cyan(message)
        if level >= logging.DEBUG:
            return chalk.gray(message)
        if level >= TRACE_LEVEL:
            return chalk.blue(message)
        return chalk.dim.red(message)


class JsonLineFormatter(logging.Formatter):
    """Formatter that renders each record as a single-line JSON object."""

    def __init__(self, *, process_id: int = 0, dry_run: bool = False) -> None:
        super().__init__(datefmt=TIMESTAMP_DATEFMT)
        self.process_id = process_id
        self.dry_run = dry_run

    def format(self, record: logging.LogRecord) -> str:
        """Format the record as JSON.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: A JSON object with ``time``, ``level``, ``process``, ``logger``,
            ``message`` and ``dryRun`` keys.
        """
        payload: dict[str, object] = {
            "time": f"{self.formatTime(record, self.datefmt)}.{int(record.msecs):03d}",
            "level": record.levelname,
            "process": self.process_id,
            "logger": record.name,
            "message": record.getMessage(),
            "dryRun": self.dry_run,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, sort_keys=True)


def init_logging(
    console: LogLevel,
    file: LogLevel,
    structured: LogLevel,
    timestamp: bool,
    process_id: int = 0,
    process_max: int = 1,
    dry_run: bool = False,
    *,
    log_file: str | Path | None = None,
) -> None:
    """Configure the root logger with one handler per enabled channel.

    Existing root handlers are removed first so repeated calls never duplicate
    output. When every channel is ``OFF`` the root logger is silenced.

    Args:
        console (LogLevel): Level of the colored stdout channel.
        file (LogLevel): Level of the log file channel.
        structured (LogLevel): Level of the JSON-lines stderr channel.
        timestamp (bool): Prefix console and file lines with a timestamp.
        process_id (int): Process number shown in every line.
        process_max (int): Highest process number (sets the process field width).
        dry_run (bool): Mark every message as a dry run.
        log_file (str | Path | None): Destination of the file channel.

    Raises:
        ValueError: If the file channel is enabled without a ``log_file``.
    """
    if file is not LogLevel.OFF and log_file is None:
        raise ValueError("file logging requires a log_file")

    root_logger = logging.getLogger()

    # Iterate over a copy since we're modifying the list
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
        existing.close()

    fmt: str = build_log_format(
        timestamp=timestamp, process_id=process_id, process_max=process_max, dry_run=dry_run
    )
    handler: logging.Handler

    if console is not LogLevel.OFF:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(console.level)
        handler.setFormatter(ChalkFormatter(fmt, datefmt=TIMESTAMP_DATEFMT))
        root_logger.addHandler(handler)

    if file is not LogLevel.OFF and log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file.level)
        handler.setFormatter(logging.Formatter(fmt, datefmt=TIMESTAMP_DATEFMT))
        root_logger.addHandler(handler)

    if structured is not LogLevel.OFF:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(structured.level)
        handler.setFormatter(JsonLineFormatter(process_id=process_id, dry_run=dry_run))
        root_logger.addHandler(handler)

    root_logger.setLevel(min(level.level for level in (console, file, structured)))

    # Disable propagation to avoid duplicate logs in parent loggers
    root_logger.propagate = False


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure the root logger with a single colored stdout handler at ``level``.

    The CLI calls this before bootstrap so warnings raised while parsing (e.g.
    unknown ``TESTRIG_*`` variables) are shown; `init_logging` replaces it
    once the log options are known.

    Args:
        level (int): A stdlib logging level number.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
        existing.close()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ChalkFormatter(build_log_format(timestamp=False)))
    root_logger.addHandler(handler)
    root_logger.propagate = False


def get_logger(name: str) -> TestrigLogger:
    """Retrieve a TestrigLogger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        TestrigLogger: A TestrigLogger instance.
    """
    logger = logging.getLogger(name)
    return cast("TestrigLogger", logger)

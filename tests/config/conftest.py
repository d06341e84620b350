# topmark:header:start
#
#   project      : testrig
#   file         : conftest.py
#   file_relpath : tests/config/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Fixtures and fakes for bootstrap sequencer tests.

`RecordingContext` stands in for `ProcessContext`: it records every
process-wide effect in call order instead of applying it, so tests can assert
exact sequencing without touching the real umask or logging setup.
`ScriptedParser` replays a list of outcomes and records every argument list
it was called with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from testrig.config.commands import Command
from testrig.config.options import OptionId, OptionSet, OptionSource
from testrig.core.errors import FormatError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from testrig.config.log_settings import LogSettings
    from testrig.storage.posix import PosixStorage


@dataclass
class RecordingContext:
    """A `BootstrapContext` that records calls instead of applying them."""

    cwd: str = "/work"
    fail_cwd: bool = False
    calls: list[tuple[str, object]] = field(default_factory=list)

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def getcwd(self) -> str:
        if self.fail_cwd:
            raise FormatError("unable to get cwd")
        self.calls.append(("getcwd", self.cwd))
        return self.cwd

    def init_logging(self, settings: LogSettings) -> None:
        self.calls.append(("init_logging", settings))

    def set_umask(self, mask: int) -> None:
        self.calls.append(("set_umask", mask))

    def set_buffer_size(self, size: int) -> None:
        self.calls.append(("set_buffer_size", size))

    def begin_command(self, options: OptionSet) -> None:
        # Snapshot path values to check they were normalized before the hook ran
        snapshot = {
            option_id: options.get(option_id)
            for option_id in (OptionId.REPO_PATH, OptionId.TEST_PATH)
            if options.valid(option_id)
        }
        self.calls.append(("begin_command", snapshot))


@dataclass
class ScriptedParser:
    """Parser fake returning (or raising) one scripted outcome per call."""

    outcomes: list[OptionSet | Exception]
    attempts: list[tuple[str, ...]] = field(default_factory=list)
    roots: list[str] = field(default_factory=list)

    def __call__(self, storage: PosixStorage, args: Sequence[str]) -> OptionSet:
        self.attempts.append(tuple(args))
        self.roots.append(str(storage.root))
        outcome = self.outcomes[len(self.attempts) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_options(command: Command = Command.TEST, **values: object) -> OptionSet:
    """Build an `OptionSet` for ``command`` with defaults plus ``values`` (as params).

    Keyword names use underscores, e.g. ``repo_path="data"``.
    """
    options = OptionSet(command)
    for key, value in values.items():
        options.set(OptionId(key.replace("_", "-")), OptionSource.PARAM, value)
    return options


@pytest.fixture
def recording_context() -> RecordingContext:
    """Return a fresh `RecordingContext` with cwd ``/work``."""
    return RecordingContext()

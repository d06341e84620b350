# topmark:header:start
#
#   project      : testrig
#   file         : options.py
#   file_relpath : src/testrig/config/options.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Option declarations and the resolved option set.

The option table (`OPTION_DEFS`) declares every option testrig understands:
its value type, default, the commands it is valid for, and whether it can be
negated with ``--no-<name>``. The parser resolves the table against an
argument list and produces an `OptionSet`, which the bootstrap sequencer
then post-processes (invalidating ``config``, normalizing path options).

Every resolved value carries an `OptionSource` so downstream consumers can
tell a value given on the command line from one that came from the
environment, the config file, or the declared default.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

import click

from testrig.config.commands import Command
from testrig.config.logging import LogLevel
from testrig.config.types import SizeParamType
from testrig.constants import DEFAULT_CONFIG_PATH, ENV_PREFIX
from testrig.core.enums import LabeledStrEnum
from testrig.core.errors import OptionInvalidValueError

if TYPE_CHECKING:
    from collections.abc import Iterator


class OptionSource(LabeledStrEnum):
    """Provenance of a resolved option value."""

    DEFAULT = ("default", "default value")
    CONFIG = ("config", "config file")
    ENV = ("env", "environment")
    PARAM = ("param", "command line")


class OptionId(LabeledStrEnum):
    """Identifiers (and long option names) of all declared options."""

    CONFIG = ("config", "Config file")
    LOG_LEVEL = ("log-level", "Console log level")
    LOG_TIMESTAMP = ("log-timestamp", "Timestamp log lines")
    NEUTRAL_UMASK = ("neutral-umask", "Use a neutral umask")
    BUFFER_SIZE = ("buffer-size", "IO buffer size")
    REPO_PATH = ("repo-path", "Repository path")
    TEST_PATH = ("test-path", "Test path")
    MODULE = ("module", "Module to test")
    SCALE = ("scale", "Scale performance tests")
    COMPRESS_LEVEL = ("compress-level", "Compression level")


ALL_COMMANDS: Final[frozenset[Command]] = frozenset(Command)


@dataclass(frozen=True)
class OptionDef:
    """Declaration of a single option.

    Attributes:
        id (OptionId): Identifier; its value is the long option name.
        param_type (click.ParamType): Click type used to coerce raw values.
        default (object | None): Value used when no other source sets the option.
        commands (frozenset[Command]): Commands the option is valid for.
        negatable (bool): Whether ``--no-<name>`` is accepted.
        cli_only (bool): Whether the option is rejected in the config file.
        help (str): One-line description shown in command help.
    """

    id: OptionId
    param_type: click.ParamType
    default: object | None
    commands: frozenset[Command]
    negatable: bool = False
    cli_only: bool = False
    help: str = ""

    @property
    def name(self) -> str:
        """Long option name without leading dashes."""
        return self.id.value

    @property
    def env_var(self) -> str:
        """Environment variable that carries this option's value."""
        return ENV_PREFIX + self.name.upper().replace("-", "_")

    @property
    def is_boolean(self) -> bool:
        """True for flag options that take no value on the command line."""
        return isinstance(self.param_type, click.types.BoolParamType)

    def valid_for(self, command: Command) -> bool:
        """Return True if the option is declared for ``command``."""
        return command in self.commands

    def convert(self, raw: object, *, origin: str) -> object:
        """Coerce ``raw`` with the option's Click type.

        Args:
            raw (object): Raw value from the command line, environment, or config file.
            origin (str): Where the value came from; used in the error message.

        Returns:
            object: The coerced value.

        Raises:
            OptionInvalidValueError: If Click rejects the value.
        """
        try:
            return self.param_type.convert(raw, None, None)
        except click.BadParameter as exc:
            raise OptionInvalidValueError(
                f"'{raw}' is not valid for '{self.name}' option ({origin}): {exc.message}"
            ) from exc


OPTION_DEFS: Final[tuple[OptionDef, ...]] = (
    OptionDef(
        OptionId.CONFIG,
        click.STRING,
        DEFAULT_CONFIG_PATH,
        ALL_COMMANDS,
        negatable=True,
        cli_only=True,
        help="Path of the TOML config file.",
    ),
    OptionDef(
        OptionId.LOG_LEVEL,
        click.Choice(LogLevel.tokens(), case_sensitive=False),
        LogLevel.INFO.value,
        frozenset({Command.TEST}),
        help="Level for console logging.",
    ),
    OptionDef(
        OptionId.LOG_TIMESTAMP,
        click.BOOL,
        True,
        frozenset({Command.TEST}),
        negatable=True,
        help="Prefix log lines with a timestamp.",
    ),
    OptionDef(
        OptionId.NEUTRAL_UMASK,
        click.BOOL,
        True,
        frozenset({Command.TEST, Command.NOOP}),
        negatable=True,
        help="Reset the umask so file modes do not depend on the invoking shell.",
    ),
    OptionDef(
        OptionId.BUFFER_SIZE,
        SizeParamType(min_size=16 * 1024, max_size=16 * 1024**2, power_of_two=True),
        64 * 1024,
        frozenset({Command.TEST}),
        help="Buffer size for IO operations.",
    ),
    OptionDef(
        OptionId.REPO_PATH,
        click.STRING,
        ".",
        frozenset({Command.TEST}),
        help="Path of the repository under test.",
    ),
    OptionDef(
        OptionId.TEST_PATH,
        click.STRING,
        "test",
        frozenset({Command.TEST}),
        help="Working path for test output.",
    ),
    OptionDef(
        OptionId.MODULE,
        click.STRING,
        None,
        frozenset({Command.TEST}),
        help="Run only the tests of this module.",
    ),
    OptionDef(
        OptionId.SCALE,
        click.IntRange(min=1),
        1,
        frozenset({Command.TEST}),
        help="Scale factor for performance tests.",
    ),
    OptionDef(
        OptionId.COMPRESS_LEVEL,
        click.IntRange(min=0, max=9),
        3,
        frozenset({Command.NOOP}),
        help="Compression level (declared for completeness, unused).",
    ),
)

OPTIONS: Final[dict[OptionId, OptionDef]] = {option.id: option for option in OPTION_DEFS}

# Options whose relative values are made absolute during bootstrap
PATH_OPTIONS: Final[tuple[OptionId, ...]] = (OptionId.REPO_PATH, OptionId.TEST_PATH)


def option_by_name(name: str) -> OptionDef | None:
    """Return the option declared as ``name`` (without dashes), or None."""
    option_id: OptionId | None = next((o for o in OptionId if o.value == name), None)
    return OPTIONS[option_id] if option_id is not None else None


@dataclass(frozen=True)
class OptionValue:
    """A resolved option value tagged with its source."""

    value: object | None
    source: OptionSource


@dataclass
class OptionSet:
    """Resolved options for one parse of the command line.

    Attributes:
        command (Command): The selected command.
        command_help (bool): True when help for ``command`` was requested.
        params (tuple[str, ...]): Positional parameters that followed the command.
    """

    command: Command
    command_help: bool = False
    params: tuple[str, ...] = ()
    _values: dict[OptionId, OptionValue] = field(default_factory=dict, init=False, repr=False)
    _invalidated: set[OptionId] = field(default_factory=set, init=False, repr=False)

    def valid(self, option_id: OptionId) -> bool:
        """Return True if the option is declared for the command and not invalidated."""
        return option_id not in self._invalidated and OPTIONS[option_id].valid_for(self.command)

    def test(self, option_id: OptionId) -> bool:
        """Return True if the option is valid and has a (non-None) value."""
        return self.valid(option_id) and self._entry(option_id).value is not None

    def get(self, option_id: OptionId) -> object | None:
        """Return the option's value.

        Raises:
            KeyError: If the option is not valid for the command.
        """
        return self._entry(option_id).value

    def get_str(self, option_id: OptionId) -> str:
        """Return the option's value as a string."""
        return str(self._entry(option_id).value)

    def get_bool(self, option_id: OptionId) -> bool:
        """Return the option's value as a boolean."""
        return bool(self._entry(option_id).value)

    def get_int(self, option_id: OptionId) -> int:
        """Return the option's value as an integer."""
        value = self._entry(option_id).value
        if not isinstance(value, int):
            raise TypeError(f"option '{option_id}' has no integer value")
        return value

    def source(self, option_id: OptionId) -> OptionSource:
        """Return where the option's value came from."""
        return self._entry(option_id).source

    def set(self, option_id: OptionId, source: OptionSource, value: object | None) -> None:
        """Store ``value`` for the option, tagged with ``source``.

        Raises:
            KeyError: If the option is not valid for the command.
        """
        if not self.valid(option_id):
            raise KeyError(f"option '{option_id}' is not valid for command '{self.command}'")
        self._values[option_id] = OptionValue(value, source)

    def invalidate(self, option_id: OptionId) -> None:
        """Hide the option: it no longer reports as valid nor shows up in `items()`."""
        self._invalidated.add(option_id)

    def items(self) -> Iterator[tuple[OptionDef, OptionValue]]:
        """Yield valid options with their resolved values, in declaration order."""
        for option in OPTION_DEFS:
            if self.valid(option.id):
                yield option, self._entry(option.id)

    def _entry(self, option_id: OptionId) -> OptionValue:
        if not self.valid(option_id):
            raise KeyError(f"option '{option_id}' is not valid for command '{self.command}'")
        # Valid options the parser never resolved fall back to their declared default
        default = OptionValue(OPTIONS[option_id].default, OptionSource.DEFAULT)
        return self._values.get(option_id, default)

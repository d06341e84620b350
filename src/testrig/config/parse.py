# topmark:header:start
#
#   project      : testrig
#   file         : parse.py
#   file_relpath : src/testrig/config/parse.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Parse an argument list into an `OptionSet`.

Sources are resolved per option in this order (first hit wins):

1. the command line (``--name=value``, ``--name value``, ``--name``, ``--no-name``);
2. the environment (``TESTRIG_<NAME>``);
3. the TOML config file, table ``[<command>]`` before table ``[global]``;
4. the declared default.

``--reset-<name>`` skips the environment and the config file for that option.
``--no-config`` disables the config file altogether.

Command resolution:

- the first positional argument names the command;
- ``help <command>`` (or ``<command> --help``) requests help for a command;
- with no command, ``--help`` selects ``help``, ``--version`` selects
  ``version``, and an empty argument list selects ``none``. Any other
  argument list raises `CommandRequiredError`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from testrig.config.commands import NAMED_COMMANDS, PARAM_COMMANDS, Command
from testrig.config.logging import get_logger
from testrig.config.options import (
    OPTION_DEFS,
    OPTIONS,
    OptionDef,
    OptionId,
    OptionSet,
    OptionSource,
    option_by_name,
)
from testrig.constants import CONFIG_SECTION_GLOBAL, ENV_PREFIX
from testrig.core.errors import (
    CommandInvalidError,
    CommandRequiredError,
    ConfigFileError,
    OptionInvalidError,
    OptionInvalidValueError,
    OptionRequiredError,
    ParamInvalidError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from testrig.config.logging import TestrigLogger
    from testrig.storage.posix import PosixStorage

logger: TestrigLogger = get_logger(__name__)

NEGATE_PREFIX = "no-"
RESET_PREFIX = "reset-"


@dataclass
class CommandLine:
    """Result of lexing an argument list (no values coerced yet).

    Attributes:
        command (Command | None): The command named on the command line, if any.
        help (bool): ``help``, ``-h`` or ``--help`` was given.
        version (bool): ``-V`` or ``--version`` was given.
        params (list[str]): Positional arguments after the command.
        values (dict[OptionId, str | bool]): Raw values of set options.
        negated (set[OptionId]): Options given as ``--no-<name>``.
        reset (set[OptionId]): Options given as ``--reset-<name>``.
    """

    command: Command | None = None
    help: bool = False
    version: bool = False
    params: list[str] = field(default_factory=list)
    values: dict[OptionId, str | bool] = field(default_factory=dict)
    negated: set[OptionId] = field(default_factory=set)
    reset: set[OptionId] = field(default_factory=set)

    def given(self) -> set[OptionId]:
        """Return every option mentioned on the command line."""
        return set(self.values) | self.negated | self.reset


def _lex_option(arg: str) -> tuple[OptionDef, str, str | None]:
    """Split ``--[no-|reset-]name[=value]`` into (option, prefix, value).

    Raises:
        OptionInvalidError: If the option is unknown or misuses a prefix.
    """
    name, sep, value = arg[2:].partition("=")
    prefix: str = ""
    option: OptionDef | None = option_by_name(name)

    if option is None:
        for candidate in (NEGATE_PREFIX, RESET_PREFIX):
            if name.startswith(candidate):
                option = option_by_name(name[len(candidate) :])
                prefix = candidate
                break
    if option is None:
        raise OptionInvalidError(f"invalid option '--{name}'")
    if prefix == NEGATE_PREFIX and not option.negatable:
        raise OptionInvalidError(f"option '{option.name}' cannot be negated")
    if prefix and sep:
        raise OptionInvalidError(f"option '--{name}' does not allow a value")
    if not prefix and sep and option.is_boolean:
        raise OptionInvalidError(f"boolean option '--{name}' does not allow a value")
    return option, prefix, (value if sep else None)


def lex_args(args: Sequence[str]) -> CommandLine:
    """Lex ``args`` into a `CommandLine`.

    Args:
        args (Sequence[str]): Process arguments without the program name.

    Returns:
        CommandLine: Options, command and parameters found in ``args``.

    Raises:
        OptionInvalidError: For unknown or repeated options.
        OptionRequiredError: For a value option at the end of ``args`` with no value.
        CommandInvalidError: For an unknown command name.
    """
    result = CommandLine()
    idx = 0

    while idx < len(args):
        arg: str = args[idx]
        idx += 1

        if arg in ("-h", "--help"):
            result.help = True
        elif arg in ("-V", "--version"):
            result.version = True
        elif arg.startswith("--"):
            option, prefix, value = _lex_option(arg)
            if option.id in result.given():
                raise OptionInvalidError(f"option '{option.name}' cannot be set multiple times")
            if prefix == NEGATE_PREFIX:
                result.negated.add(option.id)
            elif prefix == RESET_PREFIX:
                result.reset.add(option.id)
            elif option.is_boolean:
                result.values[option.id] = True
            else:
                if value is None:
                    if idx >= len(args):
                        raise OptionRequiredError(f"option '{arg}' requires a value")
                    value = args[idx]
                    idx += 1
                result.values[option.id] = value
        elif arg.startswith("-") and arg != "-":
            raise OptionInvalidError(f"invalid option '{arg}'")
        elif result.command is None:
            command: Command | None = NAMED_COMMANDS.get(arg)
            if command is None:
                raise CommandInvalidError(f"invalid command '{arg}'")
            if command is Command.HELP and not result.help:
                # "help <command>": the next positional names the command
                result.help = True
            else:
                result.command = command
        else:
            result.params.append(arg)

    return result


def _resolve_command(cmdline: CommandLine, args: Sequence[str]) -> tuple[Command, bool]:
    """Return (command, command_help) for a lexed command line."""
    if cmdline.command is not None:
        return cmdline.command, cmdline.help
    if cmdline.help:
        return Command.HELP, False
    if cmdline.version:
        return Command.VERSION, False
    if not args:
        return Command.NONE, False
    raise CommandRequiredError("no command found")


def _read_env(option: OptionDef, environ: Mapping[str, str]) -> str | None:
    raw: str | None = environ.get(option.env_var)
    if raw is None:
        return None
    if raw == "":
        raise OptionInvalidValueError(f"environment variable '{option.env_var}' must have a value")
    return raw


def _warn_unknown_env(environ: Mapping[str, str]) -> None:
    known: set[str] = {option.env_var for option in OPTION_DEFS}
    for key in sorted(environ):
        if key.startswith(ENV_PREFIX) and key not in known:
            logger.warning("environment contains invalid option '%s'", key)


def load_config_file(
    storage: PosixStorage,
    path: str,
    command: Command,
    *,
    required: bool,
    strict: bool,
) -> dict[OptionId, Any]:
    """Read option values for ``command`` from the TOML file at ``path``.

    Args:
        storage (PosixStorage): Storage used to read the file.
        path (str): Path of the config file.
        command (Command): Selected command; picks the command table.
        required (bool): Raise if the file is missing (the path was given explicitly).
        strict (bool): Raise on unknown keys instead of warning.

    Returns:
        dict[OptionId, Any]: Raw values of options valid for ``command``.

    Raises:
        ConfigFileError: If the file is not valid TOML, or (strict) contains
            unknown or command-line-only keys.
    """
    text: str | None = storage.get(path, ignore_missing=not required)
    if text is None:
        return {}

    try:
        document: dict[str, Any] = tomlkit.parse(text).unwrap()
    except TomlkitParseError as exc:
        raise ConfigFileError(f"unable to parse config file '{path}': {exc}") from exc

    def _complain(message: str) -> None:
        if strict:
            raise ConfigFileError(message)
        logger.warning("%s", message)

    result: dict[OptionId, Any] = {}
    # Global table first so the command table overrides it
    for section in (CONFIG_SECTION_GLOBAL, command.value):
        table: object = document.get(section, {})
        if not isinstance(table, dict):
            _complain(f"config file '{path}' section '{section}' must be a table")
            continue
        for key, value in table.items():
            option: OptionDef | None = option_by_name(key)
            if option is None or option.cli_only:
                _complain(f"config file '{path}' contains invalid option '{key}'")
                continue
            if not option.valid_for(command):
                logger.debug("config file option '%s' not valid for command '%s'", key, command)
                continue
            result[option.id] = value

    for key in document:
        if key != CONFIG_SECTION_GLOBAL and key not in {c.value for c in Command}:
            _complain(f"config file '{path}' contains invalid section '{key}'")

    return result


def parse_config(
    storage: PosixStorage,
    args: Sequence[str],
    *,
    strict: bool = True,
    environ: Mapping[str, str] | None = None,
) -> OptionSet:
    """Parse ``args`` (plus environment and config file) into an `OptionSet`.

    Args:
        storage (PosixStorage): Storage used to read the config file.
        args (Sequence[str]): Process arguments without the program name.
        strict (bool): Treat unknown config file keys as errors.
        environ (Mapping[str, str] | None): Environment; defaults to ``os.environ``.

    Returns:
        OptionSet: The resolved options.

    Raises:
        CommandRequiredError: If ``args`` is not empty but names no command.
        CommandInvalidError: If the command is unknown.
        OptionInvalidError: If an option is unknown, repeated, or not valid for the command.
        OptionInvalidValueError: If a value cannot be coerced.
        OptionRequiredError: If a value option has no value.
        ParamInvalidError: If a command that takes no parameters is given some.
        ConfigFileError: If the config file is malformed.
    """
    if environ is None:
        environ = os.environ
    logger.debug("parse args %s", list(args))

    cmdline: CommandLine = lex_args(args)
    command, command_help = _resolve_command(cmdline, args)

    if cmdline.params and not command_help and command not in PARAM_COMMANDS:
        raise ParamInvalidError(f"command '{command}' does not allow parameters")

    if not command_help:
        for option_id in sorted(cmdline.given()):
            if not OPTIONS[option_id].valid_for(command):
                raise OptionInvalidError(
                    f"option '{option_id}' not valid for command '{command}'"
                )

    _warn_unknown_env(environ)

    config_values: dict[OptionId, Any] = {}
    if OptionId.CONFIG not in cmdline.negated:
        config_option: OptionDef = OPTIONS[OptionId.CONFIG]
        explicit: str | None = None
        if OptionId.CONFIG not in cmdline.reset:
            raw = cmdline.values.get(OptionId.CONFIG)
            explicit = str(raw) if raw is not None else _read_env(config_option, environ)
        config_values = load_config_file(
            storage,
            explicit if explicit is not None else str(config_option.default),
            command,
            required=explicit is not None,
            strict=strict,
        )

    options = OptionSet(command, command_help=command_help, params=tuple(cmdline.params))

    for option in OPTION_DEFS:
        if not option.valid_for(command):
            continue
        option_id = option.id
        env_value: str | None = (
            None if option_id in cmdline.given() else _read_env(option, environ)
        )
        if option_id in cmdline.values:
            raw_value = cmdline.values[option_id]
            options.set(option_id, OptionSource.PARAM, option.convert(raw_value, origin="param"))
        elif option_id in cmdline.negated:
            options.set(option_id, OptionSource.PARAM, False if option.is_boolean else None)
        elif option_id in cmdline.reset:
            options.set(option_id, OptionSource.DEFAULT, option.default)
        elif env_value is not None:
            options.set(option_id, OptionSource.ENV, option.convert(env_value, origin="env"))
        elif option_id in config_values:
            value = option.convert(config_values[option_id], origin="config")
            options.set(option_id, OptionSource.CONFIG, value)
        else:
            options.set(option_id, OptionSource.DEFAULT, option.default)

    logger.debug("parsed command '%s' (help=%s)", command, command_help)
    return options

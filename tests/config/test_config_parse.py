# topmark:header:start
#
#   project      : testrig
#   file         : test_config_parse.py
#   file_relpath : tests/config/test_config_parse.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Tests for argument parsing and option resolution (`testrig.config.parse`)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from testrig.config.commands import Command
from testrig.config.options import OptionId, OptionSource
from testrig.config.parse import lex_args, load_config_file, parse_config
from testrig.core.errors import (
    CommandInvalidError,
    CommandRequiredError,
    ConfigFileError,
    FileMissingError,
    OptionInvalidError,
    OptionInvalidValueError,
    OptionRequiredError,
    ParamInvalidError,
)
from testrig.storage.posix import PosixStorage

if TYPE_CHECKING:
    from pathlib import Path

    from testrig.config.options import OptionSet


@pytest.fixture
def storage() -> PosixStorage:
    return PosixStorage("/")


def _parse(
    storage: PosixStorage, *args: str, environ: dict[str, str] | None = None, strict: bool = True
) -> OptionSet:
    return parse_config(storage, list(args), strict=strict, environ=environ or {})


def _write_config(tmp_path: Path, text: str) -> str:
    path = tmp_path / "testrig.toml"
    path.write_text(text, encoding="utf-8")
    return str(path)


# ---------------------------------------------------------------------------
# Lexing
# ---------------------------------------------------------------------------


def test_lex_value_forms() -> None:
    """It should accept ``--name=value`` and ``--name value``."""
    cmdline = lex_args(["--repo-path=a", "--test-path", "b", "test", "p1", "p2"])

    assert cmdline.values == {OptionId.REPO_PATH: "a", OptionId.TEST_PATH: "b"}
    assert cmdline.command is Command.TEST
    assert cmdline.params == ["p1", "p2"]


def test_lex_prefixes() -> None:
    """It should record negated and reset options separately."""
    cmdline = lex_args(["--no-neutral-umask", "--reset-log-level", "--log-timestamp"])

    assert cmdline.negated == {OptionId.NEUTRAL_UMASK}
    assert cmdline.reset == {OptionId.LOG_LEVEL}
    assert cmdline.values == {OptionId.LOG_TIMESTAMP: True}


@pytest.mark.parametrize(
    ("args", "message"),
    [
        (["--bogus"], "invalid option '--bogus'"),
        (["-x"], "invalid option '-x'"),
        (["--no-repo-path"], "option 'repo-path' cannot be negated"),
        (["--reset-scale=2"], "option '--reset-scale' does not allow a value"),
        (["--log-timestamp=y"], "boolean option '--log-timestamp' does not allow a value"),
        (["--scale=1", "--scale=2"], "option 'scale' cannot be set multiple times"),
        (["--scale=1", "--reset-scale"], "option 'scale' cannot be set multiple times"),
    ],
)
def test_lex_rejects_invalid_options(args: list[str], message: str) -> None:
    """It should reject unknown, misused, and repeated options."""
    with pytest.raises(OptionInvalidError, match=message):
        lex_args(args)


def test_lex_missing_value() -> None:
    """It should require a value for a value option at the end of the list."""
    with pytest.raises(OptionRequiredError, match="option '--scale' requires a value"):
        lex_args(["test", "--scale"])


def test_lex_unknown_command() -> None:
    """It should reject an unknown command name."""
    with pytest.raises(CommandInvalidError, match="invalid command 'frobnicate'"):
        lex_args(["frobnicate"])


def test_lex_help_command_names_target() -> None:
    """It should treat ``help <command>`` as a help request for that command."""
    cmdline = lex_args(["help", "test"])

    assert cmdline.help
    assert cmdline.command is Command.TEST


# ---------------------------------------------------------------------------
# Command resolution
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("args", "command", "command_help"),
    [
        ([], Command.NONE, False),
        (["--help"], Command.HELP, False),
        (["-h"], Command.HELP, False),
        (["help"], Command.HELP, False),
        (["--version"], Command.VERSION, False),
        (["version"], Command.VERSION, False),
        (["help", "test"], Command.TEST, True),
        (["test", "--help"], Command.TEST, True),
        (["noop"], Command.NOOP, False),
    ],
)
def test_command_resolution(
    storage: PosixStorage, args: list[str], command: Command, command_help: bool
) -> None:
    """It should select the command and help mode from the argument list."""
    options = _parse(storage, *args, "--no-config") if args else _parse(storage)

    assert options.command is command
    assert options.command_help is command_help


def test_options_without_command_require_one(storage: PosixStorage) -> None:
    """It should raise `CommandRequiredError` when options are given without a command."""
    with pytest.raises(CommandRequiredError):
        _parse(storage, "--log-level=debug", "--no-config")


def test_no_config_alone_requires_command(storage: PosixStorage) -> None:
    """It should not treat ``--no-config`` alone as an empty argument list."""
    with pytest.raises(CommandRequiredError):
        _parse(storage, "--no-config")


def test_params_rejected_for_commands_without_params(storage: PosixStorage) -> None:
    """It should reject positional parameters for commands that take none."""
    with pytest.raises(ParamInvalidError, match="command 'version' does not allow parameters"):
        _parse(storage, "version", "extra", "--no-config")


def test_params_kept_for_test_command(storage: PosixStorage) -> None:
    """It should pass positional parameters through for the test command."""
    options = _parse(storage, "test", "a", "b", "--no-config")

    assert options.params == ("a", "b")


def test_option_not_valid_for_command(storage: PosixStorage) -> None:
    """It should reject an option not declared for the selected command."""
    with pytest.raises(OptionInvalidError, match="option 'compress-level' not valid for command"):
        _parse(storage, "test", "--compress-level=1", "--no-config")


# ---------------------------------------------------------------------------
# Value resolution
# ---------------------------------------------------------------------------


def test_defaults(storage: PosixStorage) -> None:
    """It should fall back to declared defaults when nothing else sets a value."""
    options = _parse(storage, "test", "--no-config")

    assert options.get(OptionId.LOG_LEVEL) == "info"
    assert options.get_bool(OptionId.LOG_TIMESTAMP) is True
    assert options.get_bool(OptionId.NEUTRAL_UMASK) is True
    assert options.get_int(OptionId.BUFFER_SIZE) == 64 * 1024
    assert options.get(OptionId.REPO_PATH) == "."
    assert options.get(OptionId.TEST_PATH) == "test"
    assert options.get(OptionId.MODULE) is None
    assert options.source(OptionId.SCALE) is OptionSource.DEFAULT
    assert not options.valid(OptionId.COMPRESS_LEVEL)


def test_command_line_values_are_coerced(storage: PosixStorage) -> None:
    """It should coerce command-line values with the option's type."""
    options = _parse(storage, "test", "--buffer-size=1MiB", "--scale", "4", "--no-config")

    assert options.get_int(OptionId.BUFFER_SIZE) == 1024 * 1024
    assert options.get_int(OptionId.SCALE) == 4
    assert options.source(OptionId.SCALE) is OptionSource.PARAM


@pytest.mark.parametrize(
    "arg",
    ["--buffer-size=3000", "--buffer-size=1KiB", "--scale=0", "--log-level=loud"],
)
def test_invalid_values(storage: PosixStorage, arg: str) -> None:
    """It should report values the option type rejects."""
    with pytest.raises(OptionInvalidValueError, match=r"\(param\)"):
        _parse(storage, "test", arg, "--no-config")


def test_negation(storage: PosixStorage) -> None:
    """It should set negated boolean options to False from the command line."""
    options = _parse(storage, "test", "--no-neutral-umask", "--no-log-timestamp", "--no-config")

    assert options.get(OptionId.NEUTRAL_UMASK) is False
    assert options.source(OptionId.NEUTRAL_UMASK) is OptionSource.PARAM
    assert options.get_bool(OptionId.LOG_TIMESTAMP) is False


def test_environment(storage: PosixStorage) -> None:
    """It should read option values from ``TESTRIG_*`` variables."""
    options = _parse(
        storage,
        "test",
        "--no-config",
        environ={"TESTRIG_LOG_LEVEL": "debug", "TESTRIG_NEUTRAL_UMASK": "n"},
    )

    assert options.get(OptionId.LOG_LEVEL) == "debug"
    assert options.source(OptionId.LOG_LEVEL) is OptionSource.ENV
    assert options.get(OptionId.NEUTRAL_UMASK) is False


def test_command_line_beats_environment(storage: PosixStorage) -> None:
    """It should prefer the command line over the environment."""
    options = _parse(
        storage, "test", "--log-level=warn", "--no-config", environ={"TESTRIG_LOG_LEVEL": "debug"}
    )

    assert options.get(OptionId.LOG_LEVEL) == "warn"
    assert options.source(OptionId.LOG_LEVEL) is OptionSource.PARAM


def test_reset_skips_environment(storage: PosixStorage) -> None:
    """It should restore the default for ``--reset-<name>`` even if the env sets it."""
    options = _parse(
        storage, "test", "--reset-scale", "--no-config", environ={"TESTRIG_SCALE": "9"}
    )

    assert options.get(OptionId.SCALE) == 1
    assert options.source(OptionId.SCALE) is OptionSource.DEFAULT


def test_empty_environment_value(storage: PosixStorage) -> None:
    """It should reject an empty environment value."""
    with pytest.raises(OptionInvalidValueError, match="TESTRIG_SCALE"):
        _parse(storage, "test", "--no-config", environ={"TESTRIG_SCALE": ""})


def test_unknown_environment_variable_warns(
    storage: PosixStorage, caplog: pytest.LogCaptureFixture
) -> None:
    """It should warn about unknown ``TESTRIG_*`` variables."""
    with caplog.at_level(logging.WARNING):
        _parse(storage, "test", "--no-config", environ={"TESTRIG_BOGUS": "1"})

    assert "TESTRIG_BOGUS" in caplog.text


# ---------------------------------------------------------------------------
# Config file
# ---------------------------------------------------------------------------


def test_config_file_tables(storage: PosixStorage, tmp_path: Path) -> None:
    """It should apply ``[global]`` then override it with the command table."""
    path = _write_config(
        tmp_path,
        '[global]\nlog-level = "warn"\nscale = 2\n\n[test]\nscale = 3\nbuffer-size = "128KiB"\n',
    )
    options = _parse(storage, "test", f"--config={path}")

    assert options.get(OptionId.LOG_LEVEL) == "warn"
    assert options.get(OptionId.SCALE) == 3
    assert options.get(OptionId.BUFFER_SIZE) == 128 * 1024
    assert options.source(OptionId.SCALE) is OptionSource.CONFIG


def test_config_file_from_environment(storage: PosixStorage, tmp_path: Path) -> None:
    """It should load the config file named by ``TESTRIG_CONFIG``."""
    path = _write_config(tmp_path, "[test]\nscale = 5\n")
    options = _parse(storage, "test", environ={"TESTRIG_CONFIG": path})

    assert options.get(OptionId.SCALE) == 5


def test_environment_beats_config_file(storage: PosixStorage, tmp_path: Path) -> None:
    """It should prefer the environment over the config file."""
    path = _write_config(tmp_path, "[test]\nscale = 5\n")
    options = _parse(storage, "test", f"--config={path}", environ={"TESTRIG_SCALE": "7"})

    assert options.get(OptionId.SCALE) == 7
    assert options.source(OptionId.SCALE) is OptionSource.ENV


def test_no_config_ignores_file(storage: PosixStorage, tmp_path: Path) -> None:
    """It should not read any config file with ``--no-config``."""
    path = _write_config(tmp_path, "[test]\nscale = 5\n")
    options = _parse(storage, "test", "--no-config", environ={"TESTRIG_CONFIG": path})

    assert options.get(OptionId.SCALE) == 1


def test_missing_explicit_config_file(storage: PosixStorage, tmp_path: Path) -> None:
    """It should fail when an explicitly named config file does not exist."""
    with pytest.raises(FileMissingError):
        _parse(storage, "test", f"--config={tmp_path / 'absent.toml'}")


def test_missing_default_config_file_is_ignored(tmp_path: Path) -> None:
    """It should silently skip the default config file when it does not exist."""
    options = _parse(PosixStorage(tmp_path), "test")

    assert options.source(OptionId.SCALE) is OptionSource.DEFAULT


def test_malformed_config_file(storage: PosixStorage, tmp_path: Path) -> None:
    """It should report TOML syntax errors as config errors."""
    path = _write_config(tmp_path, "[test\nscale = \n")
    with pytest.raises(ConfigFileError, match="unable to parse config file"):
        _parse(storage, "test", f"--config={path}")


def test_config_value_is_coerced(storage: PosixStorage, tmp_path: Path) -> None:
    """It should report config values the option type rejects."""
    path = _write_config(tmp_path, "[test]\nscale = 0\n")
    with pytest.raises(OptionInvalidValueError, match=r"\(config\)"):
        _parse(storage, "test", f"--config={path}")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("[test]\nbogus = 1\n", "invalid option 'bogus'"),
        ('[global]\nconfig = "/x.toml"\n', "invalid option 'config'"),
        ("[weird]\nscale = 1\n", "invalid section 'weird'"),
        ("test = 1\n", "section 'test' must be a table"),
    ],
)
def test_config_file_strict(tmp_path: Path, text: str, message: str) -> None:
    """It should reject unknown keys and sections in strict mode."""
    path = _write_config(tmp_path, text)
    with pytest.raises(ConfigFileError, match=message):
        load_config_file(PosixStorage("/"), path, Command.TEST, required=True, strict=True)


def test_config_file_lenient(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """It should only warn about unknown keys when not strict."""
    path = _write_config(tmp_path, "[test]\nbogus = 1\nscale = 2\n")
    with caplog.at_level(logging.WARNING):
        values = load_config_file(
            PosixStorage("/"), path, Command.TEST, required=True, strict=False
        )

    assert values == {OptionId.SCALE: 2}
    assert "invalid option 'bogus'" in caplog.text


def test_config_file_skips_options_of_other_commands(tmp_path: Path) -> None:
    """It should ignore ``[global]`` options the command does not declare."""
    path = _write_config(tmp_path, "[global]\ncompress-level = 1\nscale = 2\n")
    values = load_config_file(PosixStorage("/"), path, Command.TEST, required=True, strict=True)

    assert values == {OptionId.SCALE: 2}

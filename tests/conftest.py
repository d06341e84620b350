# topmark:header:start
#
#   project      : testrig
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Pytest configuration for the testrig test suite.

Bootstrap deliberately mutates process-wide state (umask, root logger, IO
buffer size). The autouse fixtures here keep tests independent of the
developer's shell and of each other:

- ``TESTRIG_*`` environment variables are removed before every test;
- umask, IO buffer size and root logger configuration are restored after
  every test.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest

from testrig.constants import ENV_PREFIX
from testrig.io import buffer

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def clear_testrig_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure option values exported in the developer's shell never leak into tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


def current_umask() -> int:
    """Return the process umask without changing it."""
    mask: int = os.umask(0o022)
    os.umask(mask)
    return mask


@pytest.fixture(autouse=True)
def restore_process_state() -> Iterator[None]:
    """Restore umask, IO buffer size and root logger after each test."""
    umask: int = current_umask()
    buffer_size: int = buffer.get_buffer_size()
    root: logging.Logger = logging.getLogger()
    level: int = root.level
    propagate: bool = root.propagate
    handlers_before: list[logging.Handler] = root.handlers[:]

    yield

    os.umask(umask)
    buffer.set_buffer_size(buffer_size)
    # Drop only the plain stream/file handlers installed by testrig itself;
    # pytest's capture handlers are subclasses and manage themselves.
    for handler in root.handlers[:]:
        if handler not in handlers_before and type(handler) in (
            logging.StreamHandler,
            logging.FileHandler,
        ):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    root.propagate = propagate

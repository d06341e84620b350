# topmark:header:start
#
#   project      : testrig
#   file         : paths.py
#   file_relpath : src/testrig/config/paths.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Absolute path derivation for path-typed options.

Relative values of ``repo-path`` and ``test-path`` are joined to the current
working directory so that commands never depend on where relative paths get
resolved later. Two platform conventions are supported and selected by an
explicit `PlatformKind`:

- POSIX: a path is absolute iff it starts with ``/``;
- Windows: a path is absolute iff it starts with ``\\\\`` (UNC) or contains a
  drive separator ``:`` anywhere.

Joins always use ``/``. On Windows the working directory's backslashes are
translated to ``/`` before joining; backslashes inside the option value are
kept as given.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import TYPE_CHECKING

from testrig.config.logging import get_logger
from testrig.config.options import PATH_OPTIONS

if TYPE_CHECKING:
    from testrig.config.logging import TestrigLogger
    from testrig.config.options import OptionSet

logger: TestrigLogger = get_logger(__name__)

UNC_PREFIX = "\\\\"
DRIVE_SEPARATOR = ":"


class PlatformKind(Enum):
    """Path convention of the host platform."""

    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def current(cls) -> PlatformKind:
        """Return the convention of the running interpreter."""
        return cls.WINDOWS if os.name == "nt" else cls.POSIX

    @property
    def storage_root(self) -> str:
        """Filesystem root handed to the storage driver."""
        return "C:\\" if self is PlatformKind.WINDOWS else "/"


def is_absolute(path: str, platform: PlatformKind) -> bool:
    """Return True if ``path`` is absolute under ``platform``'s convention."""
    if platform is PlatformKind.WINDOWS:
        return path.startswith(UNC_PREFIX) or DRIVE_SEPARATOR in path
    return path.startswith("/")


def normalize_paths(options: OptionSet, cwd: str, platform: PlatformKind) -> None:
    """Rewrite relative path options as ``<cwd>/<value>``, in place.

    The source tag of a rewritten option is preserved. Options that are not
    valid for the command or have no value are skipped. Running this twice is
    the same as running it once.

    Args:
        options (OptionSet): Options to update.
        cwd (str): Working directory captured once by the caller.
        platform (PlatformKind): Path convention to apply.
    """
    if platform is PlatformKind.WINDOWS:
        cwd = cwd.replace("\\", "/")

    for option_id in PATH_OPTIONS:
        if not options.test(option_id):
            continue
        value: str = options.get_str(option_id)
        if is_absolute(value, platform):
            continue
        absolute: str = f"{cwd}/{value}"
        logger.trace("option '%s' made absolute: '%s' -> '%s'", option_id, value, absolute)
        options.set(option_id, options.source(option_id), absolute)

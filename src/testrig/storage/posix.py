# topmark:header:start
#
#   project      : testrig
#   file         : posix.py
#   file_relpath : src/testrig/storage/posix.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Local filesystem storage rooted at a fixed path.

Relative paths are resolved against the storage root; absolute paths are used
as given. Reads are done in chunks of the process IO buffer size (see
`testrig.io.buffer`).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from testrig.config.logging import get_logger
from testrig.core.errors import FileMissingError, FileReadError
from testrig.io.buffer import get_buffer_size

if TYPE_CHECKING:
    from os import PathLike

    from testrig.config.logging import TestrigLogger

logger: TestrigLogger = get_logger(__name__)


class PosixStorage:
    """Read-only access to files below ``root``.

    Args:
        root (str | PathLike[str]): Filesystem root, e.g. ``/`` or ``C:\\``.
    """

    def __init__(self, root: str | PathLike[str]) -> None:
        self.root = Path(root)

    def __repr__(self) -> str:
        return f"PosixStorage(root={str(self.root)!r})"

    def path(self, path: str | PathLike[str]) -> Path:
        """Resolve ``path`` against the storage root."""
        return self.root / path

    def exists(self, path: str | PathLike[str]) -> bool:
        """Return True if ``path`` exists and is a regular file."""
        return self.path(path).is_file()

    def get(self, path: str | PathLike[str], *, ignore_missing: bool = False) -> str | None:
        """Read a UTF-8 text file.

        Args:
            path (str | PathLike[str]): File to read, relative to the root or absolute.
            ignore_missing (bool): Return None instead of raising when the file is missing.

        Returns:
            str | None: The file content, or None if missing and ``ignore_missing`` is set.

        Raises:
            FileMissingError: If the file does not exist and ``ignore_missing`` is False.
            FileReadError: If the file exists but cannot be read or decoded.
        """
        target: Path = self.path(path)
        chunks: list[str] = []
        try:
            with target.open("r", encoding="utf-8") as stream:
                while True:
                    chunk: str = stream.read(get_buffer_size())
                    if not chunk:
                        break
                    chunks.append(chunk)
        except FileNotFoundError as exc:
            if ignore_missing:
                logger.debug("file '%s' is missing, ignored", target)
                return None
            raise FileMissingError(f"unable to open missing file '{target}' for read") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadError(f"unable to read file '{target}': {exc}") from exc
        return "".join(chunks)

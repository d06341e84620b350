# topmark:header:start
#
#   project      : testrig
#   file         : buffer.py
#   file_relpath : src/testrig/io/buffer.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Process-wide default IO buffer size.

Storage drivers read and write in chunks of this size. The bootstrap
sequencer sets it from the ``buffer-size`` option before the command starts.
"""

from __future__ import annotations

from typing import Final

from testrig.config.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BUFFER_SIZE: Final[int] = 64 * 1024

_buffer_size: int = DEFAULT_BUFFER_SIZE


def get_buffer_size() -> int:
    """Return the current default IO buffer size in bytes."""
    return _buffer_size


def set_buffer_size(size: int) -> None:
    """Set the default IO buffer size.

    Args:
        size (int): Buffer size in bytes; must be a positive integer.

    Raises:
        ValueError: If ``size`` is not a positive integer.
    """
    global _buffer_size

    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError(f"buffer size must be a positive integer, got {size!r}")
    logger.trace("io buffer size %d -> %d", _buffer_size, size)
    _buffer_size = size

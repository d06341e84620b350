# topmark:header:start
#
#   project      : testrig
#   file         : __init__.py
#   file_relpath : src/testrig/storage/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Storage drivers.

Only the local POSIX-style driver is provided; it is rooted at a filesystem
root handed in by the bootstrap sequencer.
"""

from __future__ import annotations

from testrig.storage.posix import PosixStorage

__all__: list[str] = ["PosixStorage"]

# topmark:header:start
#
#   project      : testrig
#   file         : __init__.py
#   file_relpath : src/testrig/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across testrig.

The ``testrig.core`` package provides small building blocks that are safe to
import from anywhere in the codebase (CLI, config, storage, tests):

- ``exit_codes``
  Process exit codes, aligned with BSD-style ``sysexits`` where practical.

- ``errors``
  The exception hierarchy. Every error carries the exit code the CLI
  boundary terminates with.

- ``enums``
  A str-valued Enum base with tolerant parsing by key, name or alias.
"""

from __future__ import annotations

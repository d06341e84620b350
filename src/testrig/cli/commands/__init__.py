# topmark:header:start
#
#   project      : testrig
#   file         : __init__.py
#   file_relpath : src/testrig/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Command bodies run after bootstrap."""

from __future__ import annotations

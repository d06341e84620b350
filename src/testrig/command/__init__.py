# topmark:header:start
#
#   project      : testrig
#   file         : __init__.py
#   file_relpath : src/testrig/command/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Command lifecycle hooks run around command bodies."""

from __future__ import annotations

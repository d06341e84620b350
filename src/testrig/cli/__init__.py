# topmark:header:start
#
#   project      : testrig
#   file         : __init__.py
#   file_relpath : src/testrig/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""CLI layer: the click entry point, program-output console and command bodies.

This package is the outermost layer. It may import from ``config``, ``core``,
``command``, ``io`` and ``storage``; no other layer imports from ``cli``.
"""

from __future__ import annotations

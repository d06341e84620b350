# topmark:header:start
#
#   project      : testrig
#   file         : __main__.py
#   file_relpath : src/testrig/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Allow ``python -m testrig`` invocation."""

from __future__ import annotations

from testrig.cli.main import cli

if __name__ == "__main__":
    cli()

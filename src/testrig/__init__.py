# topmark:header:start
#
#   project      : testrig
#   file         : __init__.py
#   file_relpath : src/testrig/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""testrig package.

testrig is the launcher of a test harness. It turns a raw argument list into a
validated, normalized option set, primes logging, the process umask and the IO
buffer size, and then hands control to the selected command.
"""

from __future__ import annotations

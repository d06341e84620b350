# topmark:header:start
#
#   project      : testrig
#   file         : __init__.py
#   file_relpath : src/testrig/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Configuration handling for testrig.

Submodules:

- ``commands``: command identifiers and the command sets bootstrap reasons about.
- ``options``: the option table and the resolved `OptionSet`.
- ``parse``: turns an argument list, the environment and a TOML config file
  into an `OptionSet`.
- ``log_settings``: derives console logging parameters from an `OptionSet`.
- ``paths``: platform-aware absolute path derivation for path options.
- ``load``: the bootstrap sequencer tying the above together.
- ``logging``: testrig's logging setup.
"""

from __future__ import annotations

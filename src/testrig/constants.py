# topmark:header:start
#
#   project      : testrig
#   file         : constants.py
#   file_relpath : src/testrig/constants.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""testrig Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

TESTRIG_VERSION: str = get_version("testrig")

PROJECT_NAME: str = "testrig"

# Prefix of environment variables that carry option values (e.g. TESTRIG_LOG_LEVEL)
ENV_PREFIX: str = "TESTRIG_"

# Location of the config file when --config is not given:
DEFAULT_CONFIG_PATH: str = "/etc/testrig/testrig.toml"

# TOML table holding options shared by every command:
CONFIG_SECTION_GLOBAL: str = "global"

VALUE_NOT_SET: str = "<not set>"

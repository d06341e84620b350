# topmark:header:start
#
#   project      : testrig
#   file         : version.py
#   file_relpath : src/testrig/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""testrig `version` command.

Prints the current testrig version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from testrig.constants import PROJECT_NAME, TESTRIG_VERSION

if TYPE_CHECKING:
    from testrig.cli.console import ClickConsole


def render_version(console: ClickConsole) -> None:
    """Print ``testrig <version>``."""
    console.print(f"{PROJECT_NAME} {console.styled(TESTRIG_VERSION, bold=True)}")

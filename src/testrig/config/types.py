# topmark:header:start
#
#   project      : testrig
#   file         : types.py
#   file_relpath : src/testrig/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""Click parameter types used to coerce option values.

Option values arrive as strings (command line, environment) or as native TOML
scalars (config file). Coercion reuses Click's parameter types so that the
error wording matches the rest of the CLI.
"""

from __future__ import annotations

import re
from typing import Any, Final

import click

_SIZE_RE: Final[re.Pattern[str]] = re.compile(r"^\s*(\d+)\s*([a-z]*)\s*$", re.IGNORECASE)

SIZE_UNITS: Final[dict[str, int]] = {
    "": 1,
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "kib": 1024,
    "m": 1024**2,
    "mb": 1024**2,
    "mib": 1024**2,
    "g": 1024**3,
    "gb": 1024**3,
    "gib": 1024**3,
}


def format_size(size: int) -> str:
    """Render ``size`` with the largest binary unit that divides it exactly.

    Args:
        size (int): Size in bytes.

    Returns:
        str: e.g. ``"64KiB"``, ``"1MiB"`` or ``"1000"``.
    """
    for unit, factor in (("GiB", 1024**3), ("MiB", 1024**2), ("KiB", 1024)):
        if size >= factor and size % factor == 0:
            return f"{size // factor}{unit}"
    return str(size)


class SizeParamType(click.ParamType):
    """Byte size with an optional binary unit suffix (``64KiB``, ``1m``, ``4096``).

    Args:
        min_size (int | None): Smallest accepted size in bytes.
        max_size (int | None): Largest accepted size in bytes.
        power_of_two (bool): Reject sizes that are not a power of two.
    """

    name = "size"

    def __init__(
        self,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
        power_of_two: bool = False,
    ) -> None:
        self.min_size = min_size
        self.max_size = max_size
        self.power_of_two = power_of_two

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> int:
        """Convert ``value`` to a number of bytes.

        Args:
            value (Any): A string such as ``"64KiB"`` or an int.
            param (click.Parameter | None): The Click parameter, if any.
            ctx (click.Context | None): The Click context, if any.

        Returns:
            int: The size in bytes.
        """
        if isinstance(value, bool):
            self.fail(f"{value!r} is not a valid size", param, ctx)
        if isinstance(value, int):
            size = value
        else:
            match = _SIZE_RE.match(str(value))
            if match is None or match.group(2).lower() not in SIZE_UNITS:
                self.fail(f"{value!r} is not a valid size", param, ctx)
            size = int(match.group(1)) * SIZE_UNITS[match.group(2).lower()]

        if self.min_size is not None and size < self.min_size:
            self.fail(f"{value!r} is smaller than {format_size(self.min_size)}", param, ctx)
        if self.max_size is not None and size > self.max_size:
            self.fail(f"{value!r} is larger than {format_size(self.max_size)}", param, ctx)
        if self.power_of_two and (size <= 0 or size & (size - 1)):
            self.fail(f"{value!r} is not a power of two", param, ctx)
        return size

    def __repr__(self) -> str:
        return "SIZE"

# topmark:header:start
#
#   project      : testrig
#   file         : enums.py
#   file_relpath : src/testrig/core/enums.py
#   license      : MIT
#   copyright    : (c) 2025 The testrig authors
#
# topmark:header:end

"""String-keyed Enum base for option values and command names.

Command names, log levels and option sources all travel as plain strings
(command line, environment, TOML) and are compared as enum members inside the
code base. ``LabeledStrEnum`` keeps the string form as ``.value`` and adds a
human label and parse aliases.

Example:
    ```python
    class Color(LabeledStrEnum):
        RED = ("red", "Red", ("r",))

    assert Color.parse("R") is Color.RED
    assert Color.RED == "red"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

_LE = TypeVar("_LE", bound="LabeledStrEnum")


def _norm_token(s: str) -> str:
    """Normalize an identifier-like string for case/separator-insensitive matching."""
    return s.strip().lower().replace("_", "-").replace(" ", "-")


class LabeledStrEnum(str, Enum):
    """Enum where `.value` is the external string form; metadata lives on attributes.

    Attributes:
        label (str): Human-readable label for the member.
        aliases (tuple[str, ...]): Alternative tokens accepted by `parse()`.
    """

    label: str
    aliases: tuple[str, ...]

    def __new__(
        cls: type[_LE],
        key: str,
        label: str = "",
        aliases: Iterable[str] = (),
    ) -> _LE:
        """Create a new member with key, label, and optional aliases.

        Args:
            key (str): The external string form (stored as `.value`).
            label (str): The human-readable label. Defaults to the key.
            aliases (Iterable[str]): Optional aliases for parsing. Defaults to empty.

        Returns:
            _LE: The newly created enum member.
        """
        obj: _LE = str.__new__(cls, key)
        obj._value_ = key
        obj.label = label or key
        obj.aliases = tuple(aliases)
        return obj

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def parse(cls: type[_LE], raw: str | None) -> _LE | None:
        """Parse a token into an enum member.

        Matches against the value, the member name and any configured alias.
        Matching ignores case and treats '_', '-' and ' ' alike.

        Args:
            raw (str | None): The token to look up.

        Returns:
            _LE | None: The matching member, or ``None`` if nothing matches.
        """
        if raw is None:
            return None
        token: str = _norm_token(raw)
        for member in cls:
            if token in (_norm_token(member.value), _norm_token(member.name)):
                return member
            if any(token == _norm_token(alias) for alias in member.aliases):
                return member
        return None

    @classmethod
    def values(cls) -> list[str]:
        """Return the string forms of all members in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def tokens(cls) -> list[str]:
        """Return every accepted spelling: each value followed by its aliases."""
        return [token for member in cls for token in (member.value, *member.aliases)]

"""Per-byte decode results shared by the decoder, rows and renderers."""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum, auto
from typing import Final


class CharRole(Enum):
    """Role a single byte plays in the decoded character stream."""

    EMPTY = auto()
    UNDECODABLE = auto()
    SINGLE_BYTE_CHAR = auto()
    MULTI_BYTE_LEAD = auto()
    CONTINUATION_FIRST = auto()
    CONTINUATION_FIRST_AND_LAST = auto()
    CONTINUATION_LAST = auto()
    CONTINUATION_MIDDLE = auto()

    @property
    def is_char(self) -> bool:
        """Return ``True`` when the byte starts a renderable character."""

        return self in _CHAR_ROLES

    @property
    def is_continuation(self) -> bool:
        return self in _CONTINUATION_ROLES


_CHAR_ROLES: Final[frozenset[CharRole]] = frozenset(
    {CharRole.SINGLE_BYTE_CHAR, CharRole.MULTI_BYTE_LEAD}
)

_CONTINUATION_ROLES: Final[frozenset[CharRole]] = frozenset(
    {
        CharRole.CONTINUATION_FIRST,
        CharRole.CONTINUATION_FIRST_AND_LAST,
        CharRole.CONTINUATION_LAST,
        CharRole.CONTINUATION_MIDDLE,
    }
)


def continuation_roles(count: int) -> tuple[CharRole, ...]:
    """Return the roles for the ``count`` trailing bytes of a character."""

    if count <= 0:
        return ()
    if count == 1:
        return (CharRole.CONTINUATION_FIRST_AND_LAST,)
    middle = (CharRole.CONTINUATION_MIDDLE,) * (count - 2)
    return (CharRole.CONTINUATION_FIRST, *middle, CharRole.CONTINUATION_LAST)


@dataclass(frozen=True)
class DecodedUnit:
    """Classification of one input byte.

    ``code_point`` is the Unicode scalar of the character the byte belongs
    to.  Continuation bytes carry the scalar of their lead so colour schemes
    can group a whole character, but only char-bearing roles render it.
    Undecodable and empty units carry ``None``.
    """

    byte: int
    role: CharRole
    code_point: int | None = None

    @property
    def is_char(self) -> bool:
        return self.role.is_char

    @property
    def text(self) -> str:
        """Return the decoded character for char-bearing units."""

        if not self.role.is_char or self.code_point is None:
            return ""
        return chr(self.code_point)

    @property
    def category(self) -> str | None:
        """Return the Unicode general category of the owning character."""

        if self.code_point is None or self.role is CharRole.UNDECODABLE:
            return None
        return unicodedata.category(chr(self.code_point))

    @classmethod
    def undecodable(cls, byte: int) -> "DecodedUnit":
        return cls(byte=int(byte) & 0xFF, role=CharRole.UNDECODABLE)

    def __str__(self) -> str:
        point = "-" if self.code_point is None else f"U+{self.code_point:04X}"
        return f"{self.byte:02X}:{self.role.name}:{point}"


EMPTY_UNIT: Final[DecodedUnit] = DecodedUnit(byte=0, role=CharRole.EMPTY)

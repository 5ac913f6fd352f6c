"""Fixed width terminal cells for the hex and character panes."""
from __future__ import annotations

from bisect import bisect_right
from typing import Final

from .config import (
    DELETE_LETTER_INDEX,
    SPACE_LETTER_INDEX,
    RenderConfig,
    require_cell_width,
)
from .units import CharRole, DecodedUnit

# East Asian wide ranges after Markus Kuhn's wcwidth.c; inclusive bounds.
_WIDE_RANGES: Final[tuple[tuple[int, int], ...]] = (
    (0x1100, 0x115F),  # Hangul Jamo initial consonants
    (0x2329, 0x232A),  # angle brackets
    (0x2E80, 0x303E),  # CJK radicals .. CJK symbols
    (0x3040, 0xA4CF),  # Hiragana .. Yi
    (0xAC00, 0xD7A3),  # Hangul syllables
    (0xF900, 0xFAFF),  # CJK compatibility ideographs
    (0xFE10, 0xFE19),  # vertical forms
    (0xFE30, 0xFE6F),  # CJK compatibility forms
    (0xFF00, 0xFF60),  # fullwidth forms
    (0xFFE0, 0xFFE6),  # fullwidth signs
    (0x20000, 0x2FFFD),  # CJK extension B and later
    (0x30000, 0x3FFFD),
)

_WIDE_STARTS: Final[tuple[int, ...]] = tuple(start for start, _ in _WIDE_RANGES)

_LINE_BREAKING: Final[frozenset[int]] = frozenset({0x2028, 0x2029})


def is_wide(code_point: int) -> bool:
    """Return ``True`` when ``code_point`` occupies two terminal cells."""

    index = bisect_right(_WIDE_STARTS, code_point) - 1
    return index >= 0 and code_point <= _WIDE_RANGES[index][1]


def char_width(char: str) -> int:
    return 2 if is_wide(ord(char)) else 1


def cell_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies."""

    return sum(char_width(char) for char in text)


def _repeat(glyph: str, width: int) -> str:
    """Repeat ``glyph`` as often as it fits in ``width``; pad the rest with spaces."""

    if width <= 0:
        return ""
    count = width // char_width(glyph)
    return glyph * count + " " * (width - count * char_width(glyph))


def _pad(text: str, width: int, filler: str = " ") -> str:
    used = cell_width(text)
    if used > width:
        return " " * width
    return text + _repeat(filler, width - used)


def display_text(unit: DecodedUnit, config: RenderConfig) -> str | None:
    """Return the natural glyph of a char-bearing ``unit``.

    ``None`` means the character is hidden and renders like an undecodable
    byte: C1 controls unless ``show_latin1`` is set, and line separators.
    """

    point = unit.code_point
    if point is None:
        return None
    if point < 0x20:
        return config.control_letters[point]
    if point == 0x20 and config.show_space:
        return config.control_letters[SPACE_LETTER_INDEX]
    if point == 0x7F:
        return config.control_letters[DELETE_LETTER_INDEX]
    if 0x80 <= point <= 0x9F:
        if config.show_latin1:
            return config.control_letters[point - 0x80]
        return None
    if point in _LINE_BREAKING:
        return None
    return chr(point)


def _render_continuation(role: CharRole, config: RenderConfig, width: int) -> str:
    leader, filler, trailer = config.leader, config.filler, config.trailer
    if role is CharRole.CONTINUATION_FIRST:
        return _pad(leader, width, filler)
    if role is CharRole.CONTINUATION_MIDDLE:
        return _repeat(filler, width)
    tail = char_width(trailer)
    if role is CharRole.CONTINUATION_LAST:
        return _repeat(filler, width - tail) + trailer
    head = char_width(leader)
    if head + tail > width:
        return _pad(trailer, width)
    return leader + _repeat(filler, width - head - tail) + trailer


def render_cell(unit: DecodedUnit, config: RenderConfig, width: int = 2) -> str:
    """Return ``unit`` rendered in exactly ``width`` terminal cells."""

    require_cell_width(width)
    role = unit.role
    if role is CharRole.EMPTY:
        return _repeat(config.null_letter, width)
    if role is CharRole.UNDECODABLE:
        return _repeat(config.non_letter, width)
    if role.is_char:
        text = display_text(unit, config)
        if text is None:
            return _repeat(config.non_letter, width)
        filler = " " if role is CharRole.SINGLE_BYTE_CHAR else config.filler
        return _pad(text, width, filler)
    return _render_continuation(role, config, width)


def render_hex_cell(unit: DecodedUnit, width: int = 2) -> str:
    """Return the upper-case hex value of ``unit`` padded to ``width`` cells."""

    require_cell_width(width)
    if unit.role is CharRole.EMPTY:
        return " " * width
    return f"{unit.byte:02X}".ljust(width)

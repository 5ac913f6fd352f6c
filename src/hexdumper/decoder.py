"""Classify bytes into decoded units one character window at a time."""
from __future__ import annotations

import codecs
import logging
from typing import Final, Iterator

from .config import resolve_encoding
from .fallback import TopBytesFallback
from .units import CharRole, DecodedUnit, continuation_roles

LOGGER = logging.getLogger(__name__)

MAX_CHAR_BYTES: Final[int] = 4

_NUL_UNIT: Final[DecodedUnit] = DecodedUnit(
    byte=0, role=CharRole.SINGLE_BYTE_CHAR, code_point=0
)


class CodePointDecoder:
    """Turn byte windows into :class:`DecodedUnit` sequences for one codec."""

    def __init__(self, encoding: str | codecs.CodecInfo = "utf-8") -> None:
        self._fallback = TopBytesFallback(resolve_encoding(encoding))

    @property
    def encoding(self) -> str:
        return self._fallback.codec.name

    def classify(self, window: bytes) -> tuple[tuple[DecodedUnit, ...], int]:
        """Return the units of the first character in ``window`` and its length.

        ``window`` holds at most :data:`MAX_CHAR_BYTES` bytes.  The consumed
        count is always between 1 and ``len(window)``.
        """

        if not window:
            raise ValueError("cannot classify an empty window")
        window = bytes(window[:MAX_CHAR_BYTES])
        if window[0] == 0x00:
            return (_NUL_UNIT,), 1

        text, consumed = self._fallback.attempt(window)
        if self._fallback.has_fallback_bytes:
            units = self._fallback.drain_fallback_units()
            return units, len(units)
        if not text:
            return (DecodedUnit.undecodable(window[0]),), 1

        code_point = ord(text[0])
        if consumed == 1:
            return (DecodedUnit(window[0], CharRole.SINGLE_BYTE_CHAR, code_point),), 1

        units = [DecodedUnit(window[0], CharRole.MULTI_BYTE_LEAD, code_point)]
        for value, role in zip(window[1:consumed], continuation_roles(consumed - 1)):
            units.append(DecodedUnit(value, role, code_point))
        return tuple(units), consumed

    def iter_characters(
        self, data: bytes | bytearray | memoryview
    ) -> Iterator[tuple[int, tuple[DecodedUnit, ...]]]:
        """Yield ``(position, units)`` for each character window of ``data``."""

        view = memoryview(data)
        position = 0
        while position < len(view):
            units, consumed = self.classify(view[position : position + MAX_CHAR_BYTES].tobytes())
            if LOGGER.isEnabledFor(logging.DEBUG):
                LOGGER.debug("p=%08X: %s", position, " ".join(str(unit) for unit in units))
            yield position, units
            position += consumed

    def iter_units(self, data: bytes | bytearray | memoryview) -> Iterator[DecodedUnit]:
        """Yield one unit per byte of ``data``, in order."""

        for _, units in self.iter_characters(data):
            yield from units


def iter_units(
    data: bytes | bytearray | memoryview, encoding: str | codecs.CodecInfo = "utf-8"
) -> Iterator[DecodedUnit]:
    """Decode ``data`` with ``encoding`` into per-byte units."""

    return CodePointDecoder(encoding).iter_units(data)

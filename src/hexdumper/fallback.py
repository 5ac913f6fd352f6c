"""Decode fallback that reports leading undecodable bytes instead of replacing them.

Bytes handed to a hex dump are rarely valid text, and a valid sequence may be
cut short by the end of a window.  Rather than substituting ``U+FFFD`` or
raising, :class:`TopBytesFallback` keeps only the first rejected byte of an
attempt so the caller can classify it and move on by a single byte.
"""
from __future__ import annotations

import codecs
import logging

from .units import DecodedUnit

LOGGER = logging.getLogger(__name__)


def _hex(data: bytes) -> str:
    return " ".join(f"{value:02X}" for value in data)


class TopBytesFallback:
    """Two-phase decode helper: :meth:`attempt`, then drain the side channel."""

    def __init__(self, codec: codecs.CodecInfo) -> None:
        self._codec = codec
        self._bytes_unknown = b""

    @property
    def codec(self) -> codecs.CodecInfo:
        return self._codec

    @property
    def has_fallback_bytes(self) -> bool:
        """Return ``True`` when the last attempt captured an unknown byte."""

        return bool(self._bytes_unknown)

    def reset(self) -> None:
        self._bytes_unknown = b""

    def fallback(self, bytes_unknown: bytes, index: int) -> bool:
        """Record ``bytes_unknown`` when it starts the window.

        Only the first byte at ``index == 0`` is kept; later positions are
        rejected so a single attempt never accounts for more than one byte.
        """

        if index != 0 or not bytes_unknown:
            LOGGER.debug("Ignore fallback: index=%d bytes=[%s]", index, _hex(bytes_unknown))
            return False
        self._bytes_unknown = bytes(bytes_unknown[:1])
        LOGGER.debug("Store fallback: [%s]", _hex(self._bytes_unknown))
        return True

    def attempt(self, window: bytes) -> tuple[str, int]:
        """Decode the first character of ``window``.

        Returns the decoded text and the number of bytes it consumed.  When
        the codec rejects the window before producing a character the result
        is ``("", 0)`` and the rejected byte is left in the side channel.
        """

        self.reset()
        decoder = self._codec.incrementaldecoder("strict")
        last = len(window) - 1
        for index in range(len(window)):
            try:
                text = decoder.decode(window[index : index + 1], final=index == last)
            except UnicodeError as exc:
                start = getattr(exc, "start", 0)
                rejected = window[start : getattr(exc, "end", start + 1)]
                self.fallback(rejected, start)
                return "", 0
            if text:
                return text, index + 1
        self.fallback(window[:1], 0)
        return "", 0

    def drain_fallback_units(self) -> tuple[DecodedUnit, ...]:
        """Return captured bytes as undecodable units and clear the channel."""

        captured, self._bytes_unknown = self._bytes_unknown, b""
        return tuple(DecodedUnit.undecodable(value) for value in captured)

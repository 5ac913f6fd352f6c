"""Chunked decoding of binary streams with a lookback queue across chunk edges."""
from __future__ import annotations

import codecs
import io
import logging
import sys
from typing import BinaryIO, Final, Iterator

from .config import HexDumpConfigError
from .decoder import MAX_CHAR_BYTES, CodePointDecoder
from .units import EMPTY_UNIT, DecodedUnit

LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE: Final[int] = 1024
LOOKBACK_CAPACITY: Final[int] = MAX_CHAR_BYTES - 1
MIN_CHUNK_SIZE: Final[int] = LOOKBACK_CAPACITY + 1


class OffsetRangeError(ValueError):
    """Raised when an offset or length falls outside the addressable data."""


class StreamSeekError(RuntimeError):
    """Raised when a non-seekable stream is already past the requested offset."""


def validate_range(offset: int, length: int, *, available: int | None = None) -> None:
    """Raise :class:`OffsetRangeError` for unusable ``offset``/``length`` values."""

    for name, value in (("offset", offset), ("length", length)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise OffsetRangeError(f"{name} must be an integer, received {value!r}")
        if value < 0:
            raise OffsetRangeError(f"{name} must not be negative, received {value}")
    if offset > sys.maxsize:
        raise OffsetRangeError(f"offset must be smaller than {sys.maxsize}, received {offset}")
    if available is not None and offset > available:
        raise OffsetRangeError(
            f"offset {offset} is too large for data length {available}"
        )


class LookbackQueue:
    """Fixed capacity ring of units decoded from a truncated chunk tail.

    The held units are re-decoded once the next chunk shows whether they
    stand alone or begin a character that continues past the chunk edge.
    """

    def __init__(self, capacity: int = LOOKBACK_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("lookback capacity must be positive")
        self._slots: list[DecodedUnit] = [EMPTY_UNIT] * capacity
        self._head = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def push(self, unit: DecodedUnit) -> tuple[DecodedUnit, ...]:
        """Hold ``unit`` and return the oldest unit if the ring overflowed."""

        evicted: tuple[DecodedUnit, ...] = ()
        if self._size == self.capacity:
            evicted = (self._pop(),)
        self._slots[(self._head + self._size) % self.capacity] = unit
        self._size += 1
        return evicted

    def drain(self) -> tuple[DecodedUnit, ...]:
        """Return every held unit, oldest first, and empty the ring."""

        return tuple(self._pop() for _ in range(self._size))

    def take_bytes(self) -> bytes:
        """Return the held raw bytes for re-decoding and empty the ring."""

        return bytes(unit.byte for unit in self.drain())

    def _pop(self) -> DecodedUnit:
        unit = self._slots[self._head]
        self._slots[self._head] = EMPTY_UNIT
        self._head = (self._head + 1) % self.capacity
        self._size -= 1
        return unit


def _stream_position(stream: BinaryIO) -> int:
    try:
        return stream.tell()
    except OSError:
        # Pipes and sockets have no position; treat them as unread.
        return 0


def _position_stream(stream: BinaryIO, offset: int) -> int:
    """Seek ``stream`` to ``offset`` when possible; return bytes left to skip."""

    seekable = getattr(stream, "seekable", None)
    if callable(seekable) and seekable():
        stream.seek(offset, io.SEEK_SET)
        return 0
    position = _stream_position(stream)
    if position > offset:
        raise StreamSeekError(
            f"cannot seek backward to {offset} (current position: {position})"
        )
    return offset - position


def _discard(stream: BinaryIO, count: int, chunk: int) -> None:
    LOGGER.debug("Skipping %d bytes of a non-seekable stream", count)
    while count > 0:
        skipped = stream.read(min(chunk, count))
        if not skipped:
            return
        count -= len(skipped)


def decode_stream(
    stream: BinaryIO,
    encoding: str | codecs.CodecInfo = "utf-8",
    offset: int = 0,
    length: int = 0,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[DecodedUnit]:
    """Return a lazy sequence of units read from ``stream``.

    ``length == 0`` reads until the end of the stream.  Arguments are
    validated and the stream is positioned before this function returns;
    bytes are only read as the result is iterated.  The stream is never
    closed.
    """

    validate_range(offset, length)
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise HexDumpConfigError(f"chunk size must be an integer, received {chunk_size!r}")
    if chunk_size < MIN_CHUNK_SIZE:
        raise HexDumpConfigError(
            f"chunk size must be at least {MIN_CHUNK_SIZE}, received {chunk_size}"
        )
    decoder = CodePointDecoder(encoding)
    capacity = max(min(chunk_size, length) if length > 0 else chunk_size, MIN_CHUNK_SIZE)
    skip = _position_stream(stream, offset)
    return _iter_stream_units(stream, decoder, skip, length, capacity)


def _iter_stream_units(
    stream: BinaryIO,
    decoder: CodePointDecoder,
    skip: int,
    length: int,
    capacity: int,
) -> Iterator[DecodedUnit]:
    if skip:
        _discard(stream, skip, capacity)

    queue = LookbackQueue()
    remaining = length if length > 0 else None
    while True:
        want = capacity - len(queue)
        if remaining is not None:
            want = min(want, remaining)
        if want <= 0:
            break
        chunk = stream.read(want)
        if not chunk:
            break
        if remaining is not None:
            remaining -= len(chunk)
        data = queue.take_bytes() + chunk
        LOGGER.debug("Read %d bytes (%d carried over)", len(chunk), len(data) - len(chunk))

        # Characters starting in the tail saw a truncated window; hold them
        # back and decode them again once the next chunk is in place.
        settled = len(data) if remaining == 0 else len(data) - LOOKBACK_CAPACITY
        for position, units in decoder.iter_characters(data):
            if position < settled:
                yield from units
                continue
            for unit in units:
                yield from queue.push(unit)
    yield from queue.drain()

"""Public entry points that turn bytes or binary streams into dump rows."""
from __future__ import annotations

import codecs
from typing import BinaryIO, Iterator

from .config import DEFAULT_RENDER_CONFIG, RenderConfig, require_cell_width
from .decoder import CodePointDecoder
from .rows import Row, aggregate_rows
from .stream import DEFAULT_CHUNK_SIZE, decode_stream, validate_range

BytesLike = bytes | bytearray | memoryview


def hex_dump_bytes(
    data: BytesLike,
    encoding: str | codecs.CodecInfo = "utf-8",
    offset: int = 0,
    length: int = 0,
) -> Iterator[Row]:
    """Return the rows for ``data[offset:offset + length]``.

    ``length == 0`` dumps through the end of ``data``.  Offsets and the
    encoding are checked before the first row is requested.
    """

    view = memoryview(data)
    validate_range(offset, length, available=len(view))
    decoder = CodePointDecoder(encoding)
    target = view[offset : offset + length] if length > 0 else view[offset:]
    return aggregate_rows(decoder.iter_units(target), offset)


def hex_dump_stream(
    stream: BinaryIO,
    encoding: str | codecs.CodecInfo = "utf-8",
    offset: int = 0,
    length: int = 0,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[Row]:
    """Return the rows read from ``stream``; the stream is left open."""

    units = decode_stream(stream, encoding, offset, length, chunk_size=chunk_size)
    return aggregate_rows(units, offset)


def hex_dump(
    source: BytesLike | BinaryIO,
    encoding: str | codecs.CodecInfo = "utf-8",
    offset: int = 0,
    length: int = 0,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Iterator[Row]:
    """Dump an in-memory buffer or a readable binary stream."""

    if isinstance(source, (bytes, bytearray, memoryview)):
        return hex_dump_bytes(source, encoding, offset, length)
    if callable(getattr(source, "read", None)):
        return hex_dump_stream(source, encoding, offset, length, chunk_size=chunk_size)
    raise TypeError(f"expected a bytes-like object or binary stream, received {type(source)!r}")


def format_row(
    row: Row,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
    cell_width: int = 2,
    *,
    split: bool = False,
) -> str:
    """Return ``row`` as ``offset  hex  chars`` or, with ``split``, two lines."""

    if split:
        return f"{row.offset_label}\n{row.hex_and_char_pane(config, cell_width)}"
    return (
        f"{row.offset_label}  {row.hex_pane(config, cell_width)}"
        f"  {row.char_pane(config, cell_width)}"
    )


def render_dump(
    source: BytesLike | BinaryIO,
    config: RenderConfig = DEFAULT_RENDER_CONFIG,
    *,
    offset: int = 0,
    length: int = 0,
    cell_width: int = 2,
    split: bool = False,
) -> Iterator[str]:
    """Return formatted lines for ``source`` using ``config``."""

    require_cell_width(cell_width)
    rows = hex_dump(source, config.codec, offset, length)
    return (format_row(row, config, cell_width, split=split) for row in rows)

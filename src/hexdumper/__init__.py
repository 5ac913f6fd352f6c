"""Annotated hex dumps that show each byte beside the character it encodes."""
from __future__ import annotations

from .cells import cell_width, render_cell, render_hex_cell
from .colors import RESET, RGB, ColorMode, color_for, hsl_to_rgb
from .config import (
    DEFAULT_RENDER_CONFIG,
    HexDumpConfigError,
    RenderConfig,
    load_render_config,
)
from .decoder import CodePointDecoder, iter_units
from .dumper import format_row, hex_dump, hex_dump_bytes, hex_dump_stream, render_dump
from .fallback import TopBytesFallback
from .rows import ROW_SIZE, Row, aggregate_rows
from .stream import LookbackQueue, OffsetRangeError, StreamSeekError, decode_stream
from .units import CharRole, DecodedUnit

__all__ = [
    "CharRole",
    "CodePointDecoder",
    "ColorMode",
    "DEFAULT_RENDER_CONFIG",
    "DecodedUnit",
    "HexDumpConfigError",
    "LookbackQueue",
    "OffsetRangeError",
    "RESET",
    "RGB",
    "ROW_SIZE",
    "RenderConfig",
    "Row",
    "StreamSeekError",
    "TopBytesFallback",
    "aggregate_rows",
    "cell_width",
    "color_for",
    "decode_stream",
    "format_row",
    "hex_dump",
    "hex_dump_bytes",
    "hex_dump_stream",
    "hsl_to_rgb",
    "iter_units",
    "load_render_config",
    "render_cell",
    "render_dump",
    "render_hex_cell",
]

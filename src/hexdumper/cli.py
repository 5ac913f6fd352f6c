"""Command line front end that prints an annotated hex dump."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import BinaryIO, List

from .colors import ColorMode
from .config import DEFAULT_RENDER_CONFIG, HexDumpConfigError, RenderConfig, load_render_config
from .dumper import render_dump
from .stream import OffsetRangeError, StreamSeekError

LOGGER = logging.getLogger(__name__)


def _int_value(text: str) -> int:
    try:
        return int(text, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from exc


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    """Return parsed command-line arguments for the dump CLI."""

    parser = argparse.ArgumentParser(prog="hexdumper", description=__doc__)
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="File to dump; standard input when omitted",
    )
    parser.add_argument("-e", "--encoding", help="Text encoding used to decode characters")
    parser.add_argument("-o", "--offset", type=_int_value, default=0, help="First byte to dump")
    parser.add_argument(
        "-n",
        "--length",
        type=_int_value,
        default=0,
        help="Number of bytes to dump (0 reads to the end)",
    )
    parser.add_argument(
        "-c",
        "--color",
        choices=[mode.value for mode in ColorMode],
        help="Colour cells by byte value, decode role or Unicode category",
    )
    parser.add_argument(
        "-w",
        "--cell-width",
        type=_int_value,
        default=2,
        help="Terminal cells per byte (at least 2)",
    )
    parser.add_argument("--config", type=Path, help="TOML file with a [render] table")
    parser.add_argument(
        "--split",
        action="store_true",
        help="Print the hex and character panes on separate lines",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity written to standard error",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RenderConfig:
    """Merge the optional TOML overlay and command line flags."""

    config = DEFAULT_RENDER_CONFIG
    if args.config is not None:
        if not args.config.exists():
            raise SystemExit(f"configuration file not found: {args.config}")
        config = load_render_config(args.config)
    overrides: dict[str, object] = {}
    if args.encoding:
        overrides["encoding"] = args.encoding
    if args.color:
        overrides["color_mode"] = args.color
    return config.clone(**overrides) if overrides else config


def _dump(stream: BinaryIO, args: argparse.Namespace, config: RenderConfig) -> None:
    lines = render_dump(
        stream,
        config,
        offset=args.offset,
        length=args.length,
        cell_width=args.cell_width,
        split=args.split,
    )
    for line in lines:
        print(line)


def main(argv: List[str] | None = None) -> int:
    """Entry point for the ``hexdumper`` command."""

    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = build_config(args)
        if args.path is None:
            LOGGER.info("Dumping standard input with %s", config.encoding)
            _dump(sys.stdin.buffer, args, config)
        else:
            if not args.path.is_file():
                raise SystemExit(f"file not found: {args.path}")
            LOGGER.info("Dumping %s with %s", args.path, config.encoding)
            with args.path.open("rb") as stream:
                _dump(stream, args, config)
    except (HexDumpConfigError, OffsetRangeError, StreamSeekError) as exc:
        raise SystemExit(f"hexdumper: {exc}") from exc
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())

"""Render settings shared by a hex dump and TOML overlay loading."""
from __future__ import annotations

import codecs
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Final, Mapping

import tomllib

from .colors import ColorMode


class HexDumpConfigError(ValueError):
    """Raised when render settings or call arguments fail validation."""


DEFAULT_CONTINUATION_LETTERS: Final[tuple[str, str, str]] = ("←", "─", "─")

# 0x00-0x1F map to their control pictures, followed by SP and DEL.
DEFAULT_CONTROL_LETTERS: Final[tuple[str, ...]] = tuple(
    chr(0x2400 + index) for index in range(0x22)
)

CONTROL_LETTER_COUNT: Final[int] = len(DEFAULT_CONTROL_LETTERS)
SPACE_LETTER_INDEX: Final[int] = 0x20
DELETE_LETTER_INDEX: Final[int] = 0x21


def resolve_encoding(encoding: str | codecs.CodecInfo) -> codecs.CodecInfo:
    """Return the ``CodecInfo`` for ``encoding`` or raise a config error."""

    if isinstance(encoding, codecs.CodecInfo):
        codec = encoding
    else:
        try:
            codec = codecs.lookup(encoding)
        except (LookupError, TypeError) as exc:
            raise HexDumpConfigError(f"unknown encoding {encoding!r}") from exc
    # Same flag bytes.decode() checks; rules out hex, base64, zlib and rot13.
    if not getattr(codec, "_is_text_encoding", True):
        raise HexDumpConfigError(f"{codec.name!r} is not a text encoding")
    return codec


def require_cell_width(cell_width: int) -> int:
    """Return ``cell_width`` when it can hold a hex byte, else raise."""

    if isinstance(cell_width, bool) or not isinstance(cell_width, int):
        raise HexDumpConfigError(f"cell width must be an integer, received {cell_width!r}")
    if cell_width < 2:
        raise HexDumpConfigError(f"cell width must be at least 2, received {cell_width}")
    return cell_width


def _require_letter(name: str, value: Any) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise HexDumpConfigError(f"{name} must be a single character, received {value!r}")
    return value


def _require_letters(name: str, value: Any, count: int) -> tuple[str, ...]:
    if isinstance(value, str):
        value = tuple(value)
    try:
        letters = tuple(value)
    except TypeError as exc:
        raise HexDumpConfigError(f"{name} must be a sequence of characters") from exc
    if len(letters) != count:
        raise HexDumpConfigError(
            f"{name} must contain exactly {count} entries, received {len(letters)}"
        )
    for index, letter in enumerate(letters):
        _require_letter(f"{name}[{index}]", letter)
    return letters


def _require_range(name: str, value: Any, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise HexDumpConfigError(f"{name} must be an integer, received {value!r}")
    if not 0 <= value <= upper:
        raise HexDumpConfigError(f"{name} must be between 0 and {upper}, received {value}")
    return value


@dataclass(frozen=True)
class RenderConfig:
    """Immutable settings read while rendering a dump."""

    encoding: str = "utf-8"
    color_mode: ColorMode = ColorMode.NONE
    base_hue: int = 0
    lightness: int = 30
    saturation: int = 60
    hex_separator: str = " "
    char_separator: str = " "
    null_letter: str = " "
    non_letter: str = "."
    continuation_letters: tuple[str, ...] = DEFAULT_CONTINUATION_LETTERS
    control_letters: tuple[str, ...] = field(default=DEFAULT_CONTROL_LETTERS, repr=False)
    show_latin1: bool = False
    show_space: bool = False

    def __post_init__(self) -> None:
        codec = resolve_encoding(self.encoding)
        object.__setattr__(self, "encoding", codec.name)
        try:
            color_mode = ColorMode.parse(self.color_mode)
        except ValueError as exc:
            raise HexDumpConfigError(str(exc)) from exc
        object.__setattr__(self, "color_mode", color_mode)
        _require_range("base_hue", self.base_hue, 360)
        _require_range("lightness", self.lightness, 100)
        _require_range("saturation", self.saturation, 100)
        for name in ("hex_separator", "char_separator"):
            if not isinstance(getattr(self, name), str):
                raise HexDumpConfigError(f"{name} must be a string")
        _require_letter("null_letter", self.null_letter)
        _require_letter("non_letter", self.non_letter)
        object.__setattr__(
            self,
            "continuation_letters",
            _require_letters("continuation_letters", self.continuation_letters, 3),
        )
        object.__setattr__(
            self,
            "control_letters",
            _require_letters("control_letters", self.control_letters, CONTROL_LETTER_COUNT),
        )
        for name in ("show_latin1", "show_space"):
            if not isinstance(getattr(self, name), bool):
                raise HexDumpConfigError(f"{name} must be a boolean")

    @property
    def codec(self) -> codecs.CodecInfo:
        return codecs.lookup(self.encoding)

    @property
    def leader(self) -> str:
        return self.continuation_letters[0]

    @property
    def filler(self) -> str:
        return self.continuation_letters[1]

    @property
    def trailer(self) -> str:
        return self.continuation_letters[2]

    def clone(self, **overrides: Any) -> "RenderConfig":
        """Return a validated copy with ``overrides`` applied."""

        unknown = set(overrides) - _FIELD_NAMES
        if unknown:
            raise HexDumpConfigError(f"unknown render settings: {', '.join(sorted(unknown))}")
        return replace(self, **overrides)


_FIELD_NAMES: Final[frozenset[str]] = frozenset(item.name for item in fields(RenderConfig))

DEFAULT_RENDER_CONFIG: Final[RenderConfig] = RenderConfig()


def load_render_config(
    config_path: Path, *, base: RenderConfig | None = None
) -> RenderConfig:
    """Merge the ``[render]`` table of ``config_path`` over ``base``."""

    with config_path.open("rb") as stream:
        try:
            data = tomllib.load(stream)
        except tomllib.TOMLDecodeError as exc:
            raise HexDumpConfigError(f"{config_path}: {exc}") from exc

    overrides = _parse_render_section(data)
    return (base or DEFAULT_RENDER_CONFIG).clone(**overrides)


def _parse_render_section(data: Mapping[str, Any]) -> dict[str, Any]:
    render = data.get("render", {})
    if not isinstance(render, Mapping):
        raise HexDumpConfigError("[render] section must be a mapping")

    overrides = dict(render)
    for name in ("continuation_letters", "control_letters"):
        if name in overrides and isinstance(overrides[name], list):
            overrides[name] = tuple(overrides[name])
    return overrides

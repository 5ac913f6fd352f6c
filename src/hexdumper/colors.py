"""HSL derived terminal background colours for dump cells."""
from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final, Mapping

from .units import CharRole, DecodedUnit

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .config import RenderConfig

RESET: Final[str] = "\x1b[0m"


class ColorMode(Enum):
    """Colouring schemes available to a render; they are mutually exclusive."""

    NONE = "none"
    BY_BYTE = "byte"
    BY_ROLE = "role"
    BY_UNICODE_CATEGORY = "category"

    @classmethod
    def parse(cls, value: "ColorMode | str") -> "ColorMode":
        """Return the mode named by ``value`` (``"role"``, ``"BY_ROLE"``...)."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            for mode in cls:
                if key in (mode.value, mode.name.lower()):
                    return mode
        choices = ", ".join(mode.value for mode in cls)
        raise ValueError(f"unknown color mode {value!r} (expected one of {choices})")


@dataclass(frozen=True)
class RGB:
    """24-bit colour value."""

    r: int
    g: int
    b: int

    def to_term_bg(self) -> str:
        """Return the SGR sequence selecting this colour as background."""

        return f"\x1b[48;2;{self.r};{self.g};{self.b}m"


def hsl_to_rgb(hue: float, lightness: float, saturation: float) -> RGB:
    """Convert hue (0-360), lightness and saturation (0-100) to :class:`RGB`."""

    if not 0 <= hue <= 360:
        raise ValueError(f"hue must be between 0 and 360, received {hue}")
    if not 0 <= lightness <= 100:
        raise ValueError(f"lightness must be between 0 and 100, received {lightness}")
    if not 0 <= saturation <= 100:
        raise ValueError(f"saturation must be between 0 and 100, received {saturation}")

    red, green, blue = colorsys.hls_to_rgb(
        (hue % 360) / 360.0, lightness / 100.0, saturation / 100.0
    )
    return RGB(round(red * 0xFF), round(green * 0xFF), round(blue * 0xFF))


def escape_for_hue(
    hue: float, config: "RenderConfig", *, saturation: int | None = None
) -> str:
    """Return the background escape for ``hue`` rotated by the base hue."""

    rotated = (hue + config.base_hue) % 360
    chosen = config.saturation if saturation is None else saturation
    return hsl_to_rgb(rotated, config.lightness, chosen).to_term_bg()


def color_for_byte(value: int, config: "RenderConfig") -> str:
    return escape_for_hue((int(value) & 0xFF) * 360.0 / 0xFF, config)


_CONTROL_HUE: Final[int] = 120
_ASCII_HUE: Final[int] = 210
_C1_HUE: Final[int] = 90
_LATIN1_HUE: Final[int] = 270
_MULTI_BYTE_HUE: Final[int] = 240


def color_for_role(role: CharRole, code_point: int | None, config: "RenderConfig") -> str:
    """Return the escape for a decode role.

    Undecodable bytes are grey.  Single byte characters are split into
    controls, printable ASCII, C1 controls and everything above; all bytes of
    a multi-byte character share one hue.
    """

    if role is CharRole.UNDECODABLE:
        return escape_for_hue(0, config, saturation=0)
    if role is CharRole.SINGLE_BYTE_CHAR:
        point = code_point or 0
        if point < 0x20 or point == 0x7F:
            return escape_for_hue(_CONTROL_HUE, config)
        if point < 0x7F:
            return escape_for_hue(_ASCII_HUE, config)
        if point < 0xA0:
            return escape_for_hue(_C1_HUE, config)
        return escape_for_hue(_LATIN1_HUE, config)
    if role is CharRole.MULTI_BYTE_LEAD or role.is_continuation:
        return escape_for_hue(_MULTI_BYTE_HUE, config)
    return ""


UNICODE_CATEGORIES: Final[tuple[str, ...]] = (
    "Lu", "Ll", "Lt", "Lm", "Lo",
    "Mn", "Mc", "Me",
    "Nd", "Nl", "No",
    "Zs", "Zl", "Zp",
    "Cc", "Cf", "Cs", "Co",
    "Pc", "Pd", "Ps", "Pe", "Pi", "Pf", "Po",
    "Sm", "Sc", "Sk", "So",
    "Cn",
)

_CATEGORY_ORDINALS: Final[Mapping[str, int]] = {
    name: index for index, name in enumerate(UNICODE_CATEGORIES)
}


def color_for_category(category: str | None, config: "RenderConfig") -> str:
    """Return the escape for a Unicode general category such as ``"Lu"``."""

    if category is None:
        return ""
    ordinal = _CATEGORY_ORDINALS.get(category)
    if ordinal is None:
        raise ValueError(f"unknown Unicode category {category!r}")
    return escape_for_hue(math.ceil(ordinal * 360 / len(UNICODE_CATEGORIES)), config)


def color_for(unit: DecodedUnit, config: "RenderConfig") -> str:
    """Return the escape selected by ``config.color_mode`` for ``unit``."""

    mode = config.color_mode
    if mode is ColorMode.NONE or unit.role is CharRole.EMPTY:
        return ""
    if mode is ColorMode.BY_BYTE:
        return color_for_byte(unit.byte, config)
    if mode is ColorMode.BY_ROLE:
        return color_for_role(unit.role, unit.code_point, config)
    return color_for_category(unit.category, config)


def colorize(text: str, escape: str) -> str:
    """Wrap ``text`` in ``escape`` and a reset; plain text when uncoloured."""

    if not escape:
        return text
    return f"{escape}{text}{RESET}"

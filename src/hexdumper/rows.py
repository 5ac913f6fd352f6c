"""Sixteen byte dump rows and their pane renderings."""
from __future__ import annotations

from typing import Final, Iterable, Iterator

from .cells import render_cell, render_hex_cell
from .colors import color_for, colorize
from .config import DEFAULT_RENDER_CONFIG, RenderConfig, require_cell_width
from .units import CharRole, DecodedUnit, EMPTY_UNIT

ROW_SIZE: Final[int] = 16
_COLUMN_MASK: Final[int] = ROW_SIZE - 1


class Row:
    """Sixteen unit slots anchored at a 16-aligned absolute offset."""

    def __init__(self, offset: int) -> None:
        self._offset = offset & ~_COLUMN_MASK
        self._slots: list[DecodedUnit] = [EMPTY_UNIT] * ROW_SIZE
        self._count = 0

    def __repr__(self) -> str:
        return f"Row(offset={self.offset_label}, count={self._count})"

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def offset_label(self) -> str:
        """Return the aligned offset as ``0x`` followed by eight hex digits."""

        return f"0x{self._offset:08X}"

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_empty(self) -> bool:
        return self._count == 0

    @property
    def slots(self) -> tuple[DecodedUnit, ...]:
        """Return all sixteen slots, empty ones included."""

        return tuple(self._slots)

    def __getitem__(self, column: int) -> DecodedUnit:
        return self._slots[column]

    def __iter__(self) -> Iterator[DecodedUnit]:
        return (unit for unit in self._slots if unit.role is not CharRole.EMPTY)

    def __len__(self) -> int:
        return self._count

    def set(self, position: int, unit: DecodedUnit) -> None:
        """Store ``unit`` in the slot addressed by absolute ``position``."""

        if position & ~_COLUMN_MASK != self._offset:
            raise ValueError(
                f"position {position:#x} does not belong to row {self.offset_label}"
            )
        column = position & _COLUMN_MASK
        if self._slots[column].role is CharRole.EMPTY and unit.role is not CharRole.EMPTY:
            self._count += 1
        self._slots[column] = unit

    def hex_pane(self, config: RenderConfig = DEFAULT_RENDER_CONFIG, cell_width: int = 2) -> str:
        """Return the hexadecimal byte values of the row."""

        require_cell_width(cell_width)
        return config.hex_separator.join(
            colorize(render_hex_cell(unit, cell_width), color_for(unit, config))
            for unit in self._slots
        )

    def char_pane(self, config: RenderConfig = DEFAULT_RENDER_CONFIG, cell_width: int = 2) -> str:
        """Return the decoded characters of the row."""

        require_cell_width(cell_width)
        return config.char_separator.join(
            colorize(render_cell(unit, config, cell_width), color_for(unit, config))
            for unit in self._slots
        )

    def hex_and_char_pane(
        self, config: RenderConfig = DEFAULT_RENDER_CONFIG, cell_width: int = 2
    ) -> str:
        """Return the hex pane above the character pane."""

        return "\n".join(
            (self.hex_pane(config, cell_width), self.char_pane(config, cell_width))
        )


def aggregate_rows(units: Iterable[DecodedUnit], offset: int = 0) -> Iterator[Row]:
    """Group ``units`` starting at absolute ``offset`` into rows.

    A row is yielded as soon as its last slot is filled; a trailing partial
    row is yielded when the units run out.  Empty rows are never yielded.
    """

    position = offset
    row = Row(position)
    for unit in units:
        row.set(position, unit)
        if position & _COLUMN_MASK == _COLUMN_MASK:
            yield row
            row = Row(position + 1)
        position += 1
    if not row.is_empty:
        yield row

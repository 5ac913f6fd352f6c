from __future__ import annotations

import pytest

from hexdumper.colors import RESET, ColorMode
from hexdumper.config import HexDumpConfigError, RenderConfig
from hexdumper.rows import ROW_SIZE, Row, aggregate_rows
from hexdumper.units import CharRole, DecodedUnit


def nul_units(count: int) -> list[DecodedUnit]:
    return [DecodedUnit(0, CharRole.SINGLE_BYTE_CHAR, 0)] * count


def test_offset_label_is_aligned_and_zero_padded() -> None:
    row = Row(0x1234)

    assert row.offset == 0x1230
    assert row.offset_label == "0x00001230"
    assert row.is_empty
    assert row.count == 0


def test_set_places_units_by_low_nibble() -> None:
    row = Row(0x20)
    unit = DecodedUnit(0x41, CharRole.SINGLE_BYTE_CHAR, 0x41)

    row.set(0x25, unit)

    assert row[5] == unit
    assert row[4].role is CharRole.EMPTY
    assert list(row) == [unit]
    assert len(row) == 1


def test_set_rejects_positions_from_other_rows() -> None:
    with pytest.raises(ValueError):
        Row(0x20).set(0x30, DecodedUnit.undecodable(0))


def test_seventeen_units_make_two_rows() -> None:
    rows = list(aggregate_rows(nul_units(17)))

    assert [row.count for row in rows] == [16, 1]
    assert [row.offset_label for row in rows] == ["0x00000000", "0x00000010"]
    assert all(unit.code_point == 0 for unit in rows[0])
    assert [unit.role for unit in rows[1].slots[1:]] == [CharRole.EMPTY] * 15


@pytest.mark.parametrize("count", [0, 1, 15, 16, 17, 31, 32, 100])
def test_row_count_is_ceiling_of_length(count: int) -> None:
    rows = list(aggregate_rows(nul_units(count)))

    assert len(rows) == -(-count // ROW_SIZE)
    assert all(not row.is_empty for row in rows)
    assert sum(row.count for row in rows) == count


def test_unaligned_start_leaves_leading_slots_empty() -> None:
    rows = list(aggregate_rows(nul_units(12), offset=0x0C))

    assert [row.count for row in rows] == [4, 8]
    assert rows[0].slots[11].role is CharRole.EMPTY
    assert rows[0].slots[12].role is CharRole.SINGLE_BYTE_CHAR
    assert rows[1].offset_label == "0x00000010"


def test_rows_are_produced_lazily() -> None:
    consumed: list[int] = []

    def units():
        for index in range(64):
            consumed.append(index)
            yield DecodedUnit(0x41, CharRole.SINGLE_BYTE_CHAR, 0x41)

    first = next(aggregate_rows(units()))

    assert first.count == 16
    assert len(consumed) == 16


def utf8_row() -> Row:
    row = Row(0)
    for position, unit in enumerate(
        [
            DecodedUnit(0x41, CharRole.SINGLE_BYTE_CHAR, 0x41),
            DecodedUnit(0xE3, CharRole.MULTI_BYTE_LEAD, 0x3042),
            DecodedUnit(0x81, CharRole.CONTINUATION_FIRST, 0x3042),
            DecodedUnit(0x82, CharRole.CONTINUATION_LAST, 0x3042),
        ]
    ):
        row.set(position, unit)
    return row


def test_hex_pane_pads_empty_slots() -> None:
    pane = utf8_row().hex_pane()

    assert pane == "41 E3 81 82" + "   " * 12


def test_char_pane_connects_continuations_to_lead() -> None:
    pane = utf8_row().char_pane()

    assert pane == "A  あ ←─ ──" + "   " * 12


def test_panes_honour_separators_and_cell_width() -> None:
    config = RenderConfig(hex_separator="", char_separator="|")
    row = utf8_row()

    assert row.hex_pane(config, 3).startswith("41 E3 81 82    ")
    assert row.char_pane(config, 3).startswith("A  |あ─|←──|───|   ")


def test_hex_and_char_pane_joins_two_lines() -> None:
    row = utf8_row()

    assert row.hex_and_char_pane() == f"{row.hex_pane()}\n{row.char_pane()}"


def test_coloured_panes_wrap_filled_cells_only() -> None:
    config = RenderConfig(color_mode=ColorMode.BY_ROLE)
    row = utf8_row()

    for pane in (row.hex_pane(config), row.char_pane(config)):
        assert pane.count(RESET) == 4
        assert pane.count("\x1b[48;2;") == 4


def test_panes_reject_narrow_cells() -> None:
    with pytest.raises(HexDumpConfigError):
        utf8_row().hex_pane(cell_width=1)
    with pytest.raises(HexDumpConfigError):
        utf8_row().char_pane(cell_width=1)

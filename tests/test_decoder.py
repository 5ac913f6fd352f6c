from __future__ import annotations

import pytest

from hexdumper.config import HexDumpConfigError
from hexdumper.decoder import CodePointDecoder, iter_units
from hexdumper.units import CharRole, DecodedUnit

SINGLE = CharRole.SINGLE_BYTE_CHAR
LEAD = CharRole.MULTI_BYTE_LEAD
FIRST = CharRole.CONTINUATION_FIRST
MIDDLE = CharRole.CONTINUATION_MIDDLE
LAST = CharRole.CONTINUATION_LAST
FIRST_AND_LAST = CharRole.CONTINUATION_FIRST_AND_LAST


def test_ascii_and_three_byte_utf8_character() -> None:
    units = list(iter_units(b"A\xe3\x81\x82", "utf-8"))

    assert units == [
        DecodedUnit(0x41, SINGLE, 0x41),
        DecodedUnit(0xE3, LEAD, 0x3042),
        DecodedUnit(0x81, FIRST, 0x3042),
        DecodedUnit(0x82, LAST, 0x3042),
    ]


def test_four_byte_utf8_character_uses_middle_continuation() -> None:
    units = list(iter_units("😀".encode("utf-8")))

    assert [unit.role for unit in units] == [LEAD, FIRST, MIDDLE, LAST]
    assert units[0].code_point == 0x1F600


def test_two_byte_character_marks_first_and_last() -> None:
    units = list(iter_units("é".encode("utf-8")))

    assert units == [DecodedUnit(0xC3, LEAD, 0xE9), DecodedUnit(0xA9, FIRST_AND_LAST, 0xE9)]


def test_utf16_surrogate_pair_is_one_scalar() -> None:
    units = list(iter_units("😀".encode("utf-16-le"), "utf-16-le"))

    assert [unit.role for unit in units] == [LEAD, FIRST, MIDDLE, LAST]
    assert {unit.code_point for unit in units} == {0x1F600}


def test_shift_jis_double_byte_character() -> None:
    units = list(iter_units("aあ".encode("shift_jis"), "shift_jis"))

    assert units == [
        DecodedUnit(0x61, SINGLE, 0x61),
        DecodedUnit(0x82, LEAD, 0x3042),
        DecodedUnit(0xA0, FIRST_AND_LAST, 0x3042),
    ]


@pytest.mark.parametrize("encoding", ["utf-8", "ascii", "latin-1", "utf-16-le", "shift_jis"])
def test_nul_is_always_a_single_byte_character(encoding: str) -> None:
    units = list(iter_units(b"\x00\x00", encoding))

    assert units == [DecodedUnit(0, SINGLE, 0)] * 2


def test_byte_outside_ascii_is_undecodable() -> None:
    assert list(iter_units(b"\xff", "ascii")) == [DecodedUnit.undecodable(0xFF)]


def test_latin1_high_byte_is_single_byte_character() -> None:
    assert list(iter_units(b"\xe9", "latin-1")) == [DecodedUnit(0xE9, SINGLE, 0xE9)]


@pytest.mark.parametrize(
    "data, roles",
    [
        (b"\xe3\x41", [CharRole.UNDECODABLE, SINGLE]),
        (b"\xe3\x81", [CharRole.UNDECODABLE, CharRole.UNDECODABLE]),
        (b"\x81\x82", [CharRole.UNDECODABLE, CharRole.UNDECODABLE]),
        (b"\xf0\x9f\x98A", [CharRole.UNDECODABLE] * 3 + [SINGLE]),
    ],
)
def test_malformed_utf8_advances_one_byte_at_a_time(data: bytes, roles: list[CharRole]) -> None:
    assert [unit.role for unit in iter_units(data)] == roles


def test_decoding_is_lossless_over_every_byte_value() -> None:
    data = bytes(range(256)) + "漢字😀é".encode("utf-8") + bytes(range(255, -1, -1))

    for encoding in ("utf-8", "ascii", "shift_jis", "utf-16-le", "cp1252"):
        units = list(iter_units(data, encoding))
        assert bytes(unit.byte for unit in units) == data


def test_classify_reports_consumed_length() -> None:
    decoder = CodePointDecoder("utf-8")

    units, consumed = decoder.classify(b"\xe3\x81\x82\x41")
    assert consumed == 3
    assert [unit.role for unit in units] == [LEAD, FIRST, LAST]
    assert decoder.classify(b"\xff\xff")[1] == 1


def test_classify_rejects_empty_window() -> None:
    with pytest.raises(ValueError):
        CodePointDecoder().classify(b"")


def test_unknown_encoding_is_a_configuration_error() -> None:
    with pytest.raises(HexDumpConfigError):
        CodePointDecoder("no-such-codec")


def test_encoding_name_is_normalised() -> None:
    assert CodePointDecoder("UTF8").encoding == "utf-8"

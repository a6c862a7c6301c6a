import pytest

from aprsgate.font import FONT_CHAR_SPACING, TERMINAL_8, FontDesc, system_font


def _glyph(font, code):
    start = font.glyph_bit_offset(code) // 8
    return font.glyph_bits()[start : start + font.char_width(code)]


def test_system_font_is_terminal_8():
    font = system_font()
    assert font is TERMINAL_8
    assert (font.width, font.height) == (7, 8)
    assert (font.first_char, font.last_char) == (0x01, 0xFE)
    assert font.bits_per_pixel == 1


def test_system_font_is_stable():
    first = system_font()
    second = system_font()
    assert second is first
    assert second.char_width(ord("A")) == 5


def test_char_advance_includes_spacing():
    font = system_font()
    assert FONT_CHAR_SPACING == 2
    assert font.char_width(ord("A")) + FONT_CHAR_SPACING == 7


def test_width_table_covers_every_code():
    font = system_font()
    assert len(font.widths) == font.last_char - font.first_char + 1
    assert font.widths[0] == font.char_width(font.first_char)
    assert font.widths[-1] == font.char_width(font.last_char)


def test_char_widths_from_table():
    font = system_font()
    assert font.char_width(ord("A")) == 5
    assert font.char_width(ord("|")) == 1
    assert font.char_width(ord("i")) == 2


def test_first_glyph_starts_at_zero():
    font = system_font()
    assert font.glyph_bit_offset(font.first_char) == 0
    assert font.glyph_bits()[:5] == bytes([0x3E, 0x45, 0x51, 0x45, 0x3E])


def test_second_glyph_bytes():
    assert _glyph(system_font(), 0x02) == bytes([0x3E, 0x6B, 0x6F, 0x6B, 0x3E])


def test_letter_a_glyph():
    assert _glyph(system_font(), ord("A")) == bytes([0x7E, 0x11, 0x11, 0x11, 0x7E])


def test_bar_glyph():
    assert _glyph(system_font(), ord("|")) == bytes([0x77])


@pytest.mark.parametrize("code", [0x01, 0x20, 0x41, 0x7F, 0xA0, 0xFD])
def test_offsets_advance_by_width_times_height(code):
    font = system_font()
    step = font.glyph_bit_offset(code + 1) - font.glyph_bit_offset(code)
    assert step == font.char_width(code) * font.height


def test_glyph_data_exactly_fits_all_glyphs():
    font = system_font()
    end = font.glyph_bit_offset(font.last_char) + font.char_width(font.last_char) * font.height
    assert end == len(font.glyph_bits()) * 8


def test_data_is_widths_then_glyphs():
    font = system_font()
    assert font.data == font.widths + font.glyph_bits()
    assert font.size == len(font.data)


@pytest.mark.parametrize("code", [0x00, 0xFF, -1, 0x100])
def test_char_width_out_of_range(code):
    with pytest.raises(ValueError):
        system_font().char_width(code)


@pytest.mark.parametrize("code", [0x00, 0xFF])
def test_glyph_offset_out_of_range(code):
    with pytest.raises(ValueError):
        system_font().glyph_bit_offset(code)


def test_contains():
    font = system_font()
    assert ord("A") in font
    assert 0x00 not in font
    assert 0xFF not in font
    assert "A" not in font


def test_custom_font_layout():
    font = FontDesc("tiny", 2, 8, 1, 0x41, 0x42, bytes([1, 2, 0xAA, 0x0F, 0xF0]))
    assert font.char_width(0x42) == 2
    assert font.glyph_bit_offset(0x42) == 8
    assert font.glyph_bits() == bytes([0xAA, 0x0F, 0xF0])


def test_invalid_range_rejected():
    with pytest.raises(ValueError):
        FontDesc("bad", 1, 8, 1, 0x42, 0x41, b"")


def test_short_width_table_rejected():
    with pytest.raises(ValueError):
        FontDesc("bad", 1, 8, 1, 0x41, 0x43, bytes([1]))
"""Bitmap font descriptions and the system font used for on-screen text."""

from __future__ import annotations

from dataclasses import dataclass, field

FONT_CHAR_SPACING = 2


@dataclass(frozen=True)
class FontDesc:
    """A proportional 1-bit font.

    ``data`` starts with one width byte per character from ``first_char`` to
    ``last_char``. The glyph bit field follows, with glyphs stored one after
    another, column by column, ``height`` bits per column, LSB first.
    """

    name: str
    width: int
    height: int
    bits_per_pixel: int
    first_char: int
    last_char: int
    data: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.last_char < self.first_char:
            raise ValueError("last_char must not be below first_char")
        if len(self.data) < self.char_count:
            raise ValueError("font data is shorter than its width table")

    @property
    def char_count(self) -> int:
        return self.last_char - self.first_char + 1

    @property
    def size(self) -> int:
        """Total size of the font data in bytes."""
        return len(self.data)

    @property
    def widths(self) -> bytes:
        """Width table, one entry per character code."""
        return self.data[: self.char_count]

    def __contains__(self, code: object) -> bool:
        return isinstance(code, int) and self.first_char <= code <= self.last_char

    def _index(self, code: int) -> int:
        if code not in self:
            raise ValueError(
                f"character code {code:#04x} outside font range "
                f"{self.first_char:#04x}..{self.last_char:#04x}"
            )
        return code - self.first_char

    def char_width(self, code: int) -> int:
        """Width in pixels of the glyph for ``code``."""
        return self.data[self._index(code)]

    def glyph_bit_offset(self, code: int) -> int:
        """Bit position in :meth:`glyph_bits` where the glyph for ``code`` starts."""
        return sum(self.widths[: self._index(code)]) * self.height

    def glyph_bits(self) -> bytes:
        """The glyph bit field that follows the width table."""
        return self.data[self.char_count :]


_TERMINAL_8_WIDTHS = bytes.fromhex(
    """
    05 05 05 05 05 05 02 06 04 06 05 05 05 05 05 04
    04 05 03 05 05 04 05 05 05 05 05 05 05 05 00 00
    03 05 05 04 05 05 02 02 02 05 05 02 05 02 05 05
    03 05 05 05 05 05 05 05 05 02 02 04 05 04 05 05
    05 05 05 05 05 05 05 05 03 05 05 05 05 05 05 05
    05 05 05 05 05 05 05 05 05 04 03 05 03 05 06 02
    05 05 05 05 05 04 05 04 02 04 04 02 05 04 05 05
    05 05 05 04 04 05 05 04 04 04 04 01 04 04 05 06
    05 06 06 06 06 06 06 06 06 06 05 05 05 06 06 06
    06 06 05 05 05 05 05 05 05 05 06 06 06 06 06 06
    05 05 05 05 05 06 05 06 06 06 06 06 05 06 06 06
    06 06 04 04 06 06 06 06 04 04 04 04 05 06 04 06
    06 06 06 06 06 06 06 06 06 06 06 06 06 06 06 05
    06 06 06 06 04 05 05 05 04 06 06 06 04 05 06 05
    05 05 05 05 05 05 05 05 05 05 05 05 06 05 04 05
    05 06 06 06 06 06 05 05 05 03 03 04 04 05
    """
)

_TERMINAL_8_GLYPHS = bytes.fromhex(
    """
    3E 45 51 45 3E 3E 6B 6F 6B 3E 1C 3E 7C 3E 1C 18
    3C 7E 3C 18 30 36 7F 36 30 18 5C 7E 5C 18 18 18
    FF FF E7 E7 FF FF 3C 24 24 3C FF C3 DB DB C3 FF
    30 48 4A 36 0E 06 29 79 29 06 60 70 3F 02 04 60
    7E 0A 35 3F 2A 1C 36 1C 2A 7F 3E 1C 08 08 1C 3E
    7F 14 36 7F 36 14 5F 00 5F 06 09 7F 01 7F 22 4D
    55 59 22 60 60 60 60 14 B6 FF B6 14 04 06 7F 06
    04 10 30 7F 30 10 08 08 3E 1C 08 08 1C 3E 08 08
    78 40 40 40 40 08 3E 08 3E 08 30 3C 3F 3C 30 06
    5F 06 07 03 00 07 03 24 7E 24 7E 24 24 2B 6A 12
    63 13 08 64 63 36 49 56 20 50 07 03 3E 41 41 3E
    08 3E 1C 3E 08 08 08 3E 08 08 E0 60 08 08 08 08
    08 60 60 20 10 08 04 02 3E 51 49 45 3E 42 7F 40
    62 51 49 49 46 22 49 49 49 36 18 14 12 7F 10 2F
    49 49 49 31 3C 4A 49 49 30 01 71 09 05 03 36 49
    49 49 36 06 49 49 29 1E 6C 6C EC 6C 08 14 22 41
    24 24 24 24 24 41 22 14 08 02 01 59 09 06 3E 41
    5D 55 1E 7E 11 11 11 7E 7F 49 49 49 36 3E 41 41
    41 22 7F 41 41 41 3E 7F 49 49 49 41 7F 09 09 09
    01 3E 41 49 49 7A 7F 08 08 08 7F 41 7F 41 30 40
    40 40 3F 7F 08 14 22 41 7F 40 40 40 40 7F 02 04
    02 7F 7F 02 04 08 7F 3E 41 41 41 3E 7F 09 09 09
    06 3E 41 51 21 5E 7F 09 09 19 66 26 49 49 49 32
    01 01 7F 01 01 3F 40 40 40 3F 1F 20 40 20 1F 3F
    40 3C 40 3F 63 14 08 14 63 07 08 70 08 07 71 49
    45 43 7F 41 41 02 04 08 10 20 41 41 7F 04 02 01
    02 04 80 80 80 80 80 80 03 07 20 54 54 54 78 7F
    44 44 44 38 38 44 44 44 28 38 44 44 44 7F 38 54
    54 54 08 08 7E 09 09 18 A4 A4 A4 7C 7F 04 04 78
    7D 40 40 80 84 7D 7F 10 28 44 7F 40 7C 04 18 04
    78 7C 04 04 78 38 44 44 44 38 FC 44 44 44 38 38
    44 44 44 FC 44 78 44 04 08 08 54 54 54 20 04 3E
    44 24 3C 40 20 7C 1C 20 40 20 1C 3C 60 30 60 3C
    6C 10 10 6C 9C A0 60 3C 64 54 54 4C 08 3E 41 41
    77 41 41 3E 08 02 01 02 01 3C 26 23 26 3C 00 1E
    A1 E1 21 12 00 3D 40 20 7D 00 38 54 54 55 09 00
    20 55 55 55 78 00 20 55 54 55 78 00 20 55 55 54
    78 00 20 57 55 57 78 00 1C A2 E2 22 14 00 38 55
    55 55 08 00 38 55 54 55 08 00 38 55 55 54 08 00
    00 01 7C 41 00 00 01 7D 41 00 00 01 7C 40 00 70
    29 24 29 70 00 78 2F 25 2F 78 00 7C 54 54 55 45
    00 34 54 7C 54 58 00 7E 09 7F 49 49 00 38 45 45
    39 00 38 45 44 39 00 39 45 44 38 00 3C 41 21 7D
    00 3D 41 20 7C 00 9C A1 60 3D 00 3D 42 42 3D 00
    3C 41 40 3D 80 70 68 58 38 04 00 48 3E 49 49 62
    00 7E 61 5D 43 3F 00 22 14 08 14 22 00 40 88 7E
    09 02 00 20 54 55 55 78 00 00 00 7D 41 00 38 44
    45 39 00 3C 40 21 7D 00 7A 09 0A 71 00 7A 11 22
    79 00 08 55 55 55 5E 00 4E 51 51 4E 00 30 48 4D
    40 20 3E 41 5D 4B 55 3E 04 04 04 04 04 1C 00 17
    08 4C 6A 50 00 17 08 34 2A 78 00 00 30 7D 30 00
    08 14 00 08 14 00 14 08 00 14 08 44 11 44 11 44
    11 AA 55 AA 55 AA 55 BB EE BB EE BB EE 00 00 00
    FF 08 08 08 FF 00 70 28 25 29 70 00 70 29 25 29
    70 00 70 29 25 28 70 3E 41 5D 55 41 3E 0A FB 00
    FF 00 FF 00 FF 0A FA 02 FE 0A 0B 08 0F 00 18 24
    66 24 00 29 2A 7C 2A 29 08 08 08 F8 00 00 00 0F
    08 08 08 08 08 0F 08 08 08 08 08 F8 08 08 00 00
    00 FF 08 08 08 08 08 08 08 08 08 08 08 FF 08 08
    00 20 56 55 56 79 00 70 2A 25 2A 71 00 0F 08 0B
    0A 0A 00 FE 02 FA 0A 0A 0A 0B 08 0B 0A 0A 0A FA
    02 FA 0A 0A 00 FF 00 FB 0A 0A 0A 0A 0A 0A 0A 0A
    0A FB 00 FB 0A 0A 00 5D 22 22 22 5D 00 22 55 59
    30 00 08 7F 49 41 3E 00 7C 55 55 55 44 00 7C 55
    54 55 44 00 7C 55 55 54 44 00 00 00 07 00 00 44
    7D 45 00 00 45 7D 45 00 00 45 7C 45 08 08 08 0F
    00 00 00 F8 08 08 FF FF FF FF FF FF F0 F0 F0 F0
    F0 F0 00 00 00 77 00 00 45 7D 44 0F 0F 0F 0F 0F
    0F 00 3C 42 43 3D 00 FE 4A 4A 34 00 3C 43 43 3D
    00 3D 43 42 3C 00 32 49 4A 31 00 3A 45 46 39 00
    FC 20 20 1C 00 FE AA 28 10 00 FF A5 24 18 00 3C
    40 41 3D 00 3C 41 41 3D 00 3D 41 40 3C 00 9C A0
    61 3D 00 04 08 71 09 04 00 00 02 02 02 00 00 07
    03 00 00 08 08 08 00 00 24 2E 24 00 24 24 24 24
    24 05 17 0A 34 2A 78 00 06 09 7F 01 7F 00 22 4D
    55 59 22 00 08 08 2A 08 08 00 00 08 18 18 00 06
    09 09 06 00 00 08 00 08 00 00 08 00 02 0F 00 09
    0F 05 00 09 0D 0A 00 3C 3C 3C 3C
    """
)

TERMINAL_8 = FontDesc(
    name="Terminal_8",
    width=7,
    height=8,
    bits_per_pixel=1,
    first_char=0x01,
    last_char=0xFE,
    data=_TERMINAL_8_WIDTHS + _TERMINAL_8_GLYPHS,
)


def system_font() -> FontDesc:
    """The font used for all text drawn on the display."""
    return TERMINAL_8
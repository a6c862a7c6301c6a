"""Monochrome frame buffer laid out in the page order of SSD1306 displays."""

from __future__ import annotations

from .font import FONT_CHAR_SPACING, system_font

_PROGRESS_LEFT_QUADS = 0b0110
_PROGRESS_RIGHT_QUADS = 0b1001


def _cdiv(a: int, b: int) -> int:
    """Integer division that truncates toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


class Bitmap:
    """A 1-bit image.

    Pixels are stored in pages of 8 rows: the byte at ``x + (y // 8) * width``
    holds column ``x`` of that page, with row ``y % 8`` in bit ``y % 8``.
    Drawing outside the image is silently clipped.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("bitmap dimensions must not be negative")
        self.width = width
        self.height = height
        pages = (height + 7) // 8
        self._buffer = bytearray(width * pages)

    @classmethod
    def from_display(cls, display) -> "Bitmap":
        """A bitmap sized to fit ``display``."""
        return cls(display.width(), display.height())

    @property
    def buffer(self) -> bytes:
        """The raw page-ordered pixel data."""
        return bytes(self._buffer)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_pixel(self, x: int, y: int) -> None:
        if self._inside(x, y):
            self._buffer[x + (y // 8) * self.width] |= 1 << (y % 8)

    def clear_pixel(self, x: int, y: int) -> None:
        if self._inside(x, y):
            self._buffer[x + (y // 8) * self.width] &= ~(1 << (y % 8)) & 0xFF

    def get_pixel(self, x: int, y: int) -> bool:
        if self._inside(x, y):
            return bool(self._buffer[x + (y // 8) * self.width] & (1 << (y % 8)))
        return False

    def clear(self) -> None:
        self._buffer[:] = bytes(len(self._buffer))

    def draw_line(self, x0: int, y0: int, x1: int, y1: int) -> None:
        """Draw a straight line with Bresenham's algorithm."""
        dx = abs(x1 - x0)
        dy = abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = _cdiv(dx if dx > dy else -dy, 2)

        while True:
            self.set_pixel(x0, y0)
            if x0 == x1 and y0 == y1:
                break
            e2 = err
            if e2 > -dx:
                err -= dy
                x0 += sx
            if e2 < dy:
                err += dx
                y0 += sy

    def draw_horizontal_line(self, x: int, y: int, length: int) -> None:
        if not 0 <= y < self.height:
            return
        for i in range(length):
            self.set_pixel(x + i, y)

    def draw_vertical_line(self, x: int, y: int, length: int) -> None:
        if not 0 <= x < self.width:
            return
        for i in range(length):
            self.set_pixel(x, y + i)

    def draw_rect(self, x: int, y: int, width: int, height: int) -> None:
        self.draw_horizontal_line(x, y, width)
        self.draw_vertical_line(x, y, height)
        self.draw_vertical_line(x + width - 1, y, height)
        self.draw_horizontal_line(x, y + height - 1, width)

    def fill_rect(self, x: int, y: int, width: int, height: int) -> None:
        for i in range(width):
            self.draw_vertical_line(x + i, y, height)

    def draw_circle(self, x0: int, y0: int, radius: int) -> None:
        x, y = 0, radius
        dp = 1 - radius
        while True:
            if dp < 0:
                dp += x * 2 + 3
            else:
                dp += x * 2 - y * 2 + 5
                y -= 1
            x += 1

            for px, py in (
                (x0 + x, y0 + y), (x0 - x, y0 + y), (x0 + x, y0 - y), (x0 - x, y0 - y),
                (x0 + y, y0 + x), (x0 - y, y0 + x), (x0 + y, y0 - x), (x0 - y, y0 - x),
            ):
                self.set_pixel(px, py)
            if not x < y:
                break

        self.set_pixel(x0 + radius, y0)
        self.set_pixel(x0, y0 + radius)
        self.set_pixel(x0 - radius, y0)
        self.set_pixel(x0, y0 - radius)

    def fill_circle(self, x0: int, y0: int, radius: int) -> None:
        x, y = 0, radius
        dp = 1 - radius
        while True:
            if dp < 0:
                dp += x * 2 + 3
            else:
                dp += x * 2 - y * 2 + 5
                y -= 1
            x += 1

            self.draw_horizontal_line(x0 - x, y0 - y, 2 * x)
            self.draw_horizontal_line(x0 - x, y0 + y, 2 * x)
            self.draw_horizontal_line(x0 - y, y0 - x, 2 * y)
            self.draw_horizontal_line(x0 - y, y0 + x, 2 * y)
            if not x < y:
                break

        self.draw_horizontal_line(x0 - radius, y0, 2 * radius)

    def draw_circle_quads(self, x0: int, y0: int, radius: int, quads: int) -> None:
        """Draw the quarter circles selected by the bits of ``quads``.

        Bit 0 is upper right, bit 1 upper left, bit 2 lower left and
        bit 3 lower right.
        """
        x, y = 0, radius
        dp = 1 - radius
        while x < y:
            if dp < 0:
                dp += x * 2 + 3
            else:
                dp += x * 2 - y * 2 + 5
                y -= 1
            x += 1

            if quads & 0x1:
                self.set_pixel(x0 + x, y0 - y)
                self.set_pixel(x0 + y, y0 - x)
            if quads & 0x2:
                self.set_pixel(x0 - y, y0 - x)
                self.set_pixel(x0 - x, y0 - y)
            if quads & 0x4:
                self.set_pixel(x0 - y, y0 + x)
                self.set_pixel(x0 - x, y0 + y)
            if quads & 0x8:
                self.set_pixel(x0 + x, y0 + y)
                self.set_pixel(x0 + y, y0 + x)

        if quads & 0x1 and quads & 0x8:
            self.set_pixel(x0 + radius, y0)
        if quads & 0x4 and quads & 0x8:
            self.set_pixel(x0, y0 + radius)
        if quads & 0x2 and quads & 0x4:
            self.set_pixel(x0 - radius, y0)
        if quads & 0x1 and quads & 0x2:
            self.set_pixel(x0, y0 - radius)

    def draw_progress_bar(self, x: int, y: int, width: int, height: int, progress: int) -> None:
        """Draw a rounded bar filled to ``progress`` percent."""
        radius = height // 2
        x_radius = x + radius
        y_radius = y + radius
        double_radius = 2 * radius
        inner_radius = radius - 2

        self.draw_circle_quads(x_radius, y_radius, radius, _PROGRESS_LEFT_QUADS)
        self.draw_horizontal_line(x_radius, y, width - double_radius + 1)
        self.draw_horizontal_line(x_radius, y + height, width - double_radius + 1)
        self.draw_circle_quads(x + width - radius, y_radius, radius, _PROGRESS_RIGHT_QUADS)

        max_progress_width = _cdiv((width - double_radius + 1) * progress, 100) & 0xFFFF

        self.fill_circle(x_radius, y_radius, inner_radius)
        self.fill_rect(x_radius + 1, y + 2, max_progress_width, height - 3)
        self.fill_circle(x_radius + max_progress_width, y_radius, inner_radius)

    def draw_char(self, x: int, y: int, c: str) -> int:
        """Draw one character with the system font; return the next x position.

        Characters the font does not hold are drawn as ``?``.
        """
        font = system_font()
        if c == " ":
            return x + font.width * 4 // 10

        code = ord(c)
        if code not in font:
            code = ord("?")

        bits = font.glyph_bits()
        bit_pos = font.glyph_bit_offset(code)
        glyph_width = font.char_width(code)

        for column in range(glyph_width):
            for row in range(font.height):
                byte = bits[bit_pos // 8]
                if byte & (1 << (bit_pos % 8)):
                    self.set_pixel(x + column, y + row)
                else:
                    self.clear_pixel(x + column, y + row)
                bit_pos += 1

        return x + glyph_width + FONT_CHAR_SPACING

    def draw_string(self, x: int, y: int, text: str) -> int:
        """Draw ``text`` on one line; return the x position after it."""
        next_x = x
        for c in text:
            next_x = self.draw_char(next_x, y, c)
        return next_x

    def draw_string_lf(self, x: int, y: int, text: str) -> int:
        """Draw ``text``, wrapping to the left edge when a line is full."""
        font = system_font()
        next_x = x
        for c in text:
            if next_x + font.width > self.width:
                next_x = 0
                y += font.height
            next_x = self.draw_char(next_x, y, c)
        return next_x
"""Command set and driver for SSD1306-style monochrome OLED displays."""

from __future__ import annotations

import abc
import enum
from typing import Protocol

from .bitmap import Bitmap

CHARGEPUMP = 0x8D
COLUMNADDR = 0x21
COMSCANDEC = 0xC8
COMSCANINC = 0xC0
DISPLAYALLON = 0xA5
DISPLAYALLON_RESUME = 0xA4
DISPLAYOFF = 0xAE
DISPLAYON = 0xAF
EXTERNALVCC = 0x01
INVERTDISPLAY = 0xA7
MEMORYMODE = 0x20
NORMALDISPLAY = 0xA6
PAGEADDR = 0x22
SEGREMAP = 0xA0
SETCOMPINS = 0xDA
SETCONTRAST = 0x81
SETDISPLAYCLOCKDIV = 0xD5
SETDISPLAYOFFSET = 0xD3
SETHIGHCOLUMN = 0x10
SETLOWCOLUMN = 0x00
SETMULTIPLEX = 0xA8
SETPRECHARGE = 0xD9
SETSEGMENTREMAP = 0xA1
SETSTARTLINE = 0x40
SETVCOMDETECT = 0xDB
SWITCHCAPVCC = 0x02
STOPSCROLL = 0x2E

_COMMAND_PREFIX = 0x80
_DATA_PREFIX = 0x40
_DATA_CHUNK = 16


class Geometry(enum.IntEnum):
    """Supported panel sizes."""

    GEOMETRY_128_64 = 0
    GEOMETRY_128_32 = 1
    GEOMETRY_64_48 = 2
    GEOMETRY_64_32 = 3

    @property
    def width(self) -> int:
        return 128 if self in (Geometry.GEOMETRY_128_64, Geometry.GEOMETRY_128_32) else 64

    @property
    def height(self) -> int:
        return {
            Geometry.GEOMETRY_128_64: 64,
            Geometry.GEOMETRY_64_48: 48,
            Geometry.GEOMETRY_128_32: 32,
            Geometry.GEOMETRY_64_32: 32,
        }[self]


class I2CBus(Protocol):
    """A bus that sends one complete transmission to a device address."""

    def write(self, address: int, data: bytes) -> None: ...


class OLEDDisplay(abc.ABC):
    """Controller-independent display logic; subclasses do the transport."""

    def __init__(self, geometry: Geometry = Geometry.GEOMETRY_128_64) -> None:
        self.geometry = Geometry(geometry)
        self._display_is_on = False

    @abc.abstractmethod
    def send_command(self, command: int) -> None:
        """Send one command byte to the controller."""

    @abc.abstractmethod
    def write_bitmap(self, bitmap: Bitmap) -> None:
        """Transfer the whole frame buffer to display memory."""

    def display_on(self) -> None:
        self.send_command(DISPLAYON)
        self._display_is_on = True

    def display_off(self) -> None:
        self.send_command(DISPLAYOFF)
        self._display_is_on = False

    def is_on(self) -> bool:
        return self._display_is_on

    def invert_display(self) -> None:
        self.send_command(INVERTDISPLAY)

    def normal_display(self) -> None:
        self.send_command(NORMALDISPLAY)

    def set_contrast(self, contrast: int, precharge: int = 241, comdetect: int = 64) -> None:
        """Set contrast; lower precharge and comdetect dim the panel further."""
        for command in (
            SETPRECHARGE, precharge,
            SETCONTRAST, contrast,
            SETVCOMDETECT, comdetect,
            DISPLAYALLON_RESUME, NORMALDISPLAY, DISPLAYON,
        ):
            self.send_command(command)

    def set_brightness(self, brightness: int) -> None:
        """Map a 0..255 brightness onto contrast, precharge and comdetect."""
        if not 0 <= brightness <= 255:
            raise ValueError("brightness must be between 0 and 255")
        if brightness < 128:
            contrast = int(brightness * 1.171) & 0xFF
        else:
            contrast = int(brightness * 1.171 - 43) & 0xFF
        precharge = 0 if brightness == 0 else 241
        self.set_contrast(contrast, precharge, brightness // 8)

    def reset_orientation(self) -> None:
        self.send_command(SEGREMAP)
        self.send_command(COMSCANINC)

    def flip_screen_vertically(self) -> None:
        self.send_command(SEGREMAP | 0x01)
        self.send_command(COMSCANDEC)

    def mirror_screen(self) -> None:
        self.send_command(SEGREMAP)
        self.send_command(COMSCANDEC)

    def display(self, bitmap: Bitmap) -> None:
        """Show ``bitmap``, switching the display on first if needed."""
        if not self.is_on():
            self.display_on()
        self.write_bitmap(bitmap)

    def width(self) -> int:
        return self.geometry.width

    def height(self) -> int:
        return self.geometry.height

    def send_init_commands(self) -> None:
        """Send the power-up configuration sequence."""
        geometry = self.geometry
        tall = geometry in (
            Geometry.GEOMETRY_128_64, Geometry.GEOMETRY_64_48, Geometry.GEOMETRY_64_32
        )
        commands = [
            DISPLAYOFF,
            SETDISPLAYCLOCKDIV, 0xF0,
            SETMULTIPLEX, self.height() - 1,
            SETDISPLAYOFFSET, 0x00,
            0x00 if geometry is Geometry.GEOMETRY_64_32 else SETSTARTLINE,
            CHARGEPUMP, 0x14,
            MEMORYMODE, 0x00,
            SEGREMAP,
            COMSCANINC,
            SETCOMPINS, 0x12 if tall else 0x02,
            SETCONTRAST, 0xCF if tall else 0x8F,
            SETPRECHARGE, 0xF1,
            SETVCOMDETECT, 0x40,
            DISPLAYALLON_RESUME,
            NORMALDISPLAY,
            STOPSCROLL,
            DISPLAYON,
        ]
        for command in commands:
            self.send_command(command)


class SSD1306(OLEDDisplay):
    """SSD1306 controller attached over I2C."""

    def __init__(self, bus: I2CBus, address: int, geometry: Geometry = Geometry.GEOMETRY_128_64) -> None:
        super().__init__(geometry)
        self.bus = bus
        self.address = address
        self.send_init_commands()

    def send_command(self, command: int) -> None:
        self.bus.write(self.address, bytes((_COMMAND_PREFIX, command)))

    def write_bitmap(self, bitmap: Bitmap) -> None:
        size = self.width() * self.height() // 8
        data = bitmap.buffer
        if len(data) < size:
            raise ValueError("bitmap is smaller than the display")

        for command in (PAGEADDR, 0x00, 0xFF, COLUMNADDR, 0x00, self.width() - 1):
            self.send_command(command)

        for start in range(0, size, _DATA_CHUNK):
            chunk = data[start : start + _DATA_CHUNK]
            self.bus.write(self.address, bytes((_DATA_PREFIX,)) + chunk)
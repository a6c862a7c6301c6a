"""Known board pin layouts and detection of the board the program runs on."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from .power import AXP192_ADDRESS, PowerChip, PowerManagement

_log = logging.getLogger(__name__)

_POWER_CHIP_REGISTER = 0x03
_POWER_CHIP_EXPECTED = 0x03
_LORA_VERSION_REGISTER = 0x42
_LORA_EXPECTED_VERSION = 0x12


class BoardType(enum.Enum):
    HELTEC_WIFI_LORA_32_V1 = enum.auto()
    HELTEC_WIFI_LORA_32_V2 = enum.auto()
    TTGO_LORA32_V1 = enum.auto()
    TTGO_LORA32_V2 = enum.auto()
    TTGO_T_BEAM_V0_7 = enum.auto()
    TTGO_T_BEAM_V1_0 = enum.auto()
    ETH_BOARD = enum.auto()
    TRACKERD = enum.auto()
    GUALTHERIUS_LORAHAM_V100 = enum.auto()
    GUALTHERIUS_LORAHAM_V106 = enum.auto()


@dataclass(frozen=True)
class BoardConfig:
    """Pin assignment of one board."""

    name: str
    type: BoardType
    oled_sda: int
    oled_scl: int
    oled_addr: int
    oled_reset: int
    lora_sck: int
    lora_miso: int
    lora_mosi: int
    lora_cs: int
    lora_reset: int
    lora_irq: int
    gps_rx: int
    gps_tx: int
    button: int
    need_check_power_chip: bool = False
    power_check_status: bool = False


class BoardHardware(Protocol):
    """Pin, I2C and SPI access needed to probe for a board."""

    def pin_output(self, pin: int) -> None: ...

    def digital_write(self, pin: int, high: bool) -> None: ...

    def delay_ms(self, ms: int) -> None: ...

    def i2c_begin(self, sda: int, scl: int) -> bool: ...

    def i2c_end(self) -> None: ...

    def i2c_probe(self, address: int) -> bool:
        """True if a device acknowledges ``address``."""

    def i2c_write(self, address: int, data: bytes) -> None: ...

    def i2c_read(self, address: int, count: int) -> bytes: ...

    def spi_begin(self, sck: int, miso: int, mosi: int, cs: int) -> None: ...

    def spi_transfer(self, value: int) -> int: ...

    def spi_end(self) -> None: ...

    def power_chip(self) -> PowerChip: ...


class BoardFinder:
    """Finds which of the known boards is attached by probing its peripherals."""

    def __init__(self, configs: Iterable[BoardConfig], hardware: BoardHardware) -> None:
        self.configs = list(configs)
        self.hardware = hardware

    def _power_up(self, config: BoardConfig, activate: str) -> None:
        hw = self.hardware
        power = PowerManagement(hw.power_chip())
        hw.i2c_begin(config.oled_sda, config.oled_scl)
        power.begin(hw)
        getattr(power, activate)()
        hw.i2c_end()

    def search_board_config(self) -> BoardConfig | None:
        """Return the first board whose display, or failing that modem, answers."""
        _log.info("looking for a board config.")
        _log.info("searching for OLED...")

        for config in self.configs:
            if config.need_check_power_chip:
                if self.check_power_config(config) != config.power_check_status:
                    continue
                self._power_up(config, "activate_oled")
            if self.check_oled_config(config):
                _log.info("found a board config: %s", config.name)
                return config

        _log.info("could not find OLED, will search for the modem now...")

        for config in self.configs:
            if (
                config.need_check_power_chip
                and self.check_power_config(config) == config.power_check_status
            ):
                self._power_up(config, "activate_lora")
            if self.check_modem_config(config):
                _log.info("found a board config: %s", config.name)
                return config

        _log.error("could not find a board config!")
        return None

    def get_board_config(self, name: str) -> BoardConfig | None:
        """The configuration called ``name``, or None."""
        return next((config for config in self.configs if config.name == name), None)

    def check_oled_config(self, config: BoardConfig) -> bool:
        """True if a display answers at the board's OLED address."""
        hw = self.hardware
        if config.oled_reset > 0:
            hw.pin_output(config.oled_reset)
            hw.digital_write(config.oled_reset, True)
            hw.delay_ms(1)
            hw.digital_write(config.oled_reset, False)
            hw.delay_ms(10)
            hw.digital_write(config.oled_reset, True)
        if not hw.i2c_begin(config.oled_sda, config.oled_scl):
            _log.warning("issue with wire")
            return False
        found = hw.i2c_probe(config.oled_addr)
        hw.i2c_end()
        return bool(found)

    def check_modem_config(self, config: BoardConfig) -> bool:
        """True if a LoRa modem reports the expected version over SPI."""
        hw = self.hardware
        hw.pin_output(config.lora_reset)
        hw.digital_write(config.lora_reset, False)
        hw.delay_ms(10)
        hw.digital_write(config.lora_reset, True)
        hw.delay_ms(10)

        hw.pin_output(config.lora_cs)
        hw.digital_write(config.lora_cs, True)

        hw.spi_begin(config.lora_sck, config.lora_miso, config.lora_mosi, config.lora_cs)
        hw.digital_write(config.lora_cs, False)
        hw.spi_transfer(_LORA_VERSION_REGISTER)
        response = hw.spi_transfer(0x00)
        hw.digital_write(config.lora_cs, True)
        hw.spi_end()
        return response == _LORA_EXPECTED_VERSION

    def check_power_config(self, config: BoardConfig) -> bool:
        """True if an AXP192 power chip answers on the board's I2C pins."""
        hw = self.hardware
        if not hw.i2c_begin(config.oled_sda, config.oled_scl):
            _log.warning("issue with wire")
            return False
        hw.i2c_write(AXP192_ADDRESS, bytes((_POWER_CHIP_REGISTER,)))
        data = hw.i2c_read(AXP192_ADDRESS, 1)
        hw.i2c_end()
        response = data[0] if data else -1
        _log.debug("wire response: %d", response)
        if response == _POWER_CHIP_EXPECTED:
            _log.debug("power chip found!")
            return True
        _log.debug("power chip NOT found")
        return False


TTGO_LORA32_V1 = BoardConfig("TTGO_LORA32_V1", BoardType.TTGO_LORA32_V1, 4, 15, 0x3C, 0, 5, 19, 27, 18, 14, 26, 0, 0, 0)
TTGO_LORA32_V2 = BoardConfig("TTGO_LORA32_V2", BoardType.TTGO_LORA32_V2, 21, 22, 0x3C, 0, 5, 19, 27, 18, 14, 26, 0, 0, 0)
TTGO_T_BEAM_V0_7 = BoardConfig("TTGO_T_Beam_V0_7", BoardType.TTGO_T_BEAM_V0_7, 21, 22, 0x3C, 0, 5, 19, 27, 18, 14, 26, 15, 12, 38, True)
TTGO_T_BEAM_V1_0 = BoardConfig("TTGO_T_Beam_V1_0", BoardType.TTGO_T_BEAM_V1_0, 21, 22, 0x3C, 0, 5, 19, 27, 18, 14, 26, 12, 34, 38, True, True)
ETH_BOARD = BoardConfig("ETH_BOARD", BoardType.ETH_BOARD, 33, 32, 0x3C, 0, 14, 2, 15, 12, 4, 36, 0, 0, 0)
TRACKERD = BoardConfig("TRACKERD", BoardType.TRACKERD, 5, 4, 0x3C, 0, 18, 19, 23, 16, 14, 26, 0, 0, 0)
HELTEC_WIFI_LORA_32_V1 = BoardConfig("HELTEC_WIFI_LORA_32_V1", BoardType.HELTEC_WIFI_LORA_32_V1, 4, 15, 0x3C, 16, 5, 19, 27, 18, 14, 26, 0, 0, 0)
HELTEC_WIFI_LORA_32_V2 = BoardConfig("HELTEC_WIFI_LORA_32_V2", BoardType.HELTEC_WIFI_LORA_32_V2, 4, 15, 0x3C, 16, 5, 19, 27, 18, 14, 26, 0, 0, 0)
GUALTHERIUS_LORAHAM_V100 = BoardConfig("GUALTHERIUS_LORAHAM_v100", BoardType.GUALTHERIUS_LORAHAM_V100, 17, 16, 0x3C, 0, 18, 19, 23, 5, 13, 35, 0, 0, 0)
GUALTHERIUS_LORAHAM_V106 = BoardConfig("GUALTHERIUS_LORAHAM_v106", BoardType.GUALTHERIUS_LORAHAM_V106, 17, 16, 0x3C, 0, 18, 19, 23, 2, 13, 35, 0, 0, 0)

BOARD_CONFIGS = (
    TTGO_LORA32_V1,
    TTGO_LORA32_V2,
    TTGO_T_BEAM_V0_7,
    TTGO_T_BEAM_V1_0,
    ETH_BOARD,
    TRACKERD,
    HELTEC_WIFI_LORA_32_V1,
    HELTEC_WIFI_LORA_32_V2,
    GUALTHERIUS_LORAHAM_V100,
    GUALTHERIUS_LORAHAM_V106,
)
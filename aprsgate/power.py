"""Switching the supply rails of an AXP192 power management chip."""

from __future__ import annotations

import enum
from typing import Any, Protocol

AXP192_ADDRESS = 0x34
DCDC1_MILLIVOLTS = 3300


class PowerChannel(enum.Enum):
    """Supply rails of the AXP192 and what they feed on the boards."""

    DCDC1 = "dcdc1"  # OLED display
    LDO2 = "ldo2"  # LoRa modem
    LDO3 = "ldo3"  # GPS receiver


class PowerChip(Protocol):
    """Driver for the power chip itself."""

    def begin(self, bus: Any, address: int) -> bool:
        """Attach to the chip on ``bus``; True if it answered."""

    def set_dcdc1_voltage(self, millivolts: int) -> None: ...

    def set_power_output(self, channel: PowerChannel, on: bool) -> None: ...


class PowerManagement:
    """Turns the peripherals of a board on and off through its power chip."""

    def __init__(self, chip: PowerChip) -> None:
        self.chip = chip

    def begin(self, bus: Any) -> bool:
        """Attach to the chip; on success set the DCDC1 rail to 3.3 V."""
        found = bool(self.chip.begin(bus, AXP192_ADDRESS))
        if found:
            self.chip.set_dcdc1_voltage(DCDC1_MILLIVOLTS)
        return found

    def activate_lora(self) -> None:
        self.chip.set_power_output(PowerChannel.LDO2, True)

    def deactivate_lora(self) -> None:
        self.chip.set_power_output(PowerChannel.LDO2, False)

    def activate_gps(self) -> None:
        self.chip.set_power_output(PowerChannel.LDO3, True)

    def deactivate_gps(self) -> None:
        self.chip.set_power_output(PowerChannel.LDO3, False)

    def activate_oled(self) -> None:
        self.chip.set_power_output(PowerChannel.DCDC1, True)

    def deactivate_oled(self) -> None:
        self.chip.set_power_output(PowerChannel.DCDC1, False)
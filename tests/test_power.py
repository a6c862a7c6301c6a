import pytest

from aprsgate.power import AXP192_ADDRESS, PowerChannel, PowerManagement


class FakeChip:
    def __init__(self, present=True):
        self.present = present
        self.begun = []
        self.voltages = []
        self.outputs = []

    def begin(self, bus, address):
        self.begun.append((bus, address))
        return self.present

    def set_dcdc1_voltage(self, millivolts):
        self.voltages.append(millivolts)

    def set_power_output(self, channel, on):
        self.outputs.append((channel, on))


def test_begin_success_sets_dcdc1_voltage():
    chip = FakeChip(present=True)
    power = PowerManagement(chip)
    assert power.begin("bus") is True
    assert chip.begun == [("bus", AXP192_ADDRESS)]
    assert chip.voltages == [3300]


def test_begin_failure_leaves_voltage_alone():
    chip = FakeChip(present=False)
    power = PowerManagement(chip)
    assert power.begin("bus") is False
    assert chip.voltages == []


def test_begin_talks_to_axp192_address():
    chip = FakeChip()
    PowerManagement(chip).begin("bus")
    assert chip.begun == [("bus", 0x34)]


@pytest.mark.parametrize(
    "method, expected",
    [
        ("activate_lora", (PowerChannel.LDO2, True)),
        ("deactivate_lora", (PowerChannel.LDO2, False)),
        ("activate_gps", (PowerChannel.LDO3, True)),
        ("deactivate_gps", (PowerChannel.LDO3, False)),
        ("activate_oled", (PowerChannel.DCDC1, True)),
        ("deactivate_oled", (PowerChannel.DCDC1, False)),
    ],
)
def test_rail_switching(method, expected):
    chip = FakeChip()
    power = PowerManagement(chip)
    getattr(power, method)()
    assert chip.outputs == [expected]
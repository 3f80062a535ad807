"""Battery level and charging state estimation from ADC readings."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum

_MASK = 0xFFFFFFFF

CHARGING_THRESHOLD = 200
ADC_MIN = 734
ADC_MAX = 917
UNIFORM_MAX = 1000
BATTERY_INTERVAL_MS = 5000


class ChargingState(IntEnum):
    BATTERY = 0
    CHARGING = 1
    FULLY_CHARGED = 2


def arduino_map(value: int, in_min: int, in_max: int, out_min: int, out_max: int) -> int:
    """Linear integer re-mapping, truncating toward zero."""
    if in_max == in_min:
        raise ValueError("input range must not be empty")
    numerator = (value - in_min) * (out_max - out_min)
    denominator = in_max - in_min
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        quotient = -quotient
    return quotient + out_min


class BatteryMonitor:
    """Samples the battery at a fixed interval.

    ``read_level`` and ``read_charge`` return raw ADC values, ``usb_ready``
    tells whether USB power is present and ``clock`` returns milliseconds.
    """

    def __init__(self, read_level: Callable[[], int], read_charge: Callable[[], int],
                 usb_ready: Callable[[], bool], clock: Callable[[], int]) -> None:
        self.read_level = read_level
        self.read_charge = read_charge
        self.usb_ready = usb_ready
        self.clock = clock
        self.interval = BATTERY_INTERVAL_MS
        self._last = _MASK
        self.battery_level = 0
        self.charging_state = ChargingState.BATTERY

    def check_battery(self) -> bool:
        """Refresh the readings if the interval has passed; return whether it did."""
        now = self.clock()
        if ((now - self._last) & _MASK) > self.interval:
            self._update_battery()
            self._last = now & _MASK
            return True
        return False

    def _update_battery(self) -> None:
        uniform = self.map_to_uniform(self.read_level())
        self.battery_level = self.map_to_percentage(uniform)
        self.charging_state = self._read_charging_state()

    def _read_charging_state(self) -> ChargingState:
        if self.read_charge() > CHARGING_THRESHOLD:
            return ChargingState.FULLY_CHARGED
        if self.usb_ready():
            return ChargingState.CHARGING
        return ChargingState.BATTERY

    def map_to_uniform(self, value: int) -> int:
        """Map an ADC value onto ``0..UNIFORM_MAX``."""
        if value < ADC_MIN:
            return 0
        if value > ADC_MAX:
            return UNIFORM_MAX
        return arduino_map(value, ADC_MIN, ADC_MAX, 0, UNIFORM_MAX)

    def map_to_percentage(self, value: int) -> int:
        """Convert a uniform value to a charge percentage along the discharge curve."""
        a1, p1 = int(0.82 * UNIFORM_MAX), 96
        a2, p2 = int(0.30 * UNIFORM_MAX), 46
        a3, p3 = int(0.14 * UNIFORM_MAX), 15
        if value > UNIFORM_MAX:
            return 100
        if value > a1:
            return arduino_map(value, a1, UNIFORM_MAX, p1, 100)
        if value > a2:
            return arduino_map(value, a2, a1, p2, p1)
        if value > a3:
            return arduino_map(value, a3, a2, p3, p2)
        if value > 0:
            return arduino_map(value, 0, a3, 0, p3)
        return 0
"""Sensor identifiers, their descriptions and their sample payloads."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, IntEnum

WAV_PLAY_SERVICE_UUID = "5669146e-476d-11ee-be56-0242ac120002"
WAV_PLAY_UUID = "566916a8-476d-11ee-be56-0242ac120002"
BATTERY_SERVICE_UUID = "180F"
BATTERY_UUID = "2A19"
CHARGING_UUID = "2A1A"
BUTTON_SERVICE_UUID = "29c10bdc-4773-11ee-be56-0242ac120002"
BUTTON_STATE_UUID = "29c10f38-4773-11ee-be56-0242ac120002"
LED_SERVICE_UUID = "81040a2e-4819-11ee-be56-0242ac120002"
LED_SET_STATUS_UUID = "81040e7a-4819-11ee-be56-0242ac120002"

BARO_PAYLOAD_SIZE = 8
IMU_PAYLOAD_SIZE = 36


class SensorID(IntEnum):
    ACC_GYRO_MAG = 0
    BARO_TEMP = 1
    PDM_MIC = 2
    PLAYER = 3
    CONFIGURATION = 4


class ModuleID(IntEnum):
    MODULE_IMU = 0
    MODULE_BARO = 1
    MODULE_DUMMY = 2


class ParseType(Enum):
    FLOAT = "float"


@dataclass(frozen=True)
class SensorComponent:
    group: str
    parse_type: ParseType
    name: str
    unit: str


@dataclass(frozen=True)
class SensorConfig:
    name: str
    sensor_id: SensorID
    module_id: ModuleID
    components: tuple[SensorComponent, ...] = ()

    @property
    def component_count(self) -> int:
        return len(self.components)


_F = ParseType.FLOAT

ACC_COMPONENTS = (
    SensorComponent("ACC", _F, "X", "g"),
    SensorComponent("ACC", _F, "Y", "g"),
    SensorComponent("ACC", _F, "Z", "g"),
    SensorComponent("GYRO", _F, "X", "dps"),
    SensorComponent("GYRO", _F, "Y", "dps"),
    SensorComponent("GYRO", _F, "Z", "dps"),
    SensorComponent("MAG", _F, "X", "uT"),
    SensorComponent("MAG", _F, "Y", "uT"),
    SensorComponent("MAG", _F, "Z", "uT"),
)

PRESSURE_TEMP_COMPONENTS = (
    SensorComponent("TEMP", _F, "Temperature", "°C"),
    SensorComponent("BARO", _F, "Pressure", "kPa"),
)

SENSOR_CONFIGS = (
    SensorConfig("ACC_GYRO_MAG", SensorID.ACC_GYRO_MAG, ModuleID.MODULE_IMU, ACC_COMPONENTS),
    SensorConfig("PRESSURE_TEMP", SensorID.BARO_TEMP, ModuleID.MODULE_BARO,
                 PRESSURE_TEMP_COMPONENTS),
    SensorConfig("PDM MIC", SensorID.PDM_MIC, ModuleID.MODULE_DUMMY),
    SensorConfig("PLAYER", SensorID.PLAYER, ModuleID.MODULE_DUMMY),
    SensorConfig("Configuration", SensorID.CONFIGURATION, ModuleID.MODULE_DUMMY),
)

SPECIAL_SENSORS = (SensorID.PDM_MIC, SensorID.PLAYER, SensorID.CONFIGURATION)

SENSOR_COUNT = len(SENSOR_CONFIGS)
MODULE_COUNT_PHYSICAL = len(ModuleID)


def sensor_config(sensor_id: int) -> SensorConfig:
    """The description of a sensor."""
    for config in SENSOR_CONFIGS:
        if config.sensor_id == sensor_id:
            return config
    raise ValueError(f"unknown sensor id: {sensor_id}")


def parse_to_string(sensor_id: int, data: bytes) -> str:
    """Render a sample payload as comma-separated values."""
    components = sensor_config(sensor_id).components
    size = 4 * len(components)
    if len(data) < size:
        raise ValueError(f"need {size} bytes, got {len(data)}")
    values = struct.unpack_from(f"<{len(components)}f", data)
    return ", ".join(f"{value:.2f}" for value in values)


def pack_baro(sensor_id: int, pressure: float, temperature: float) -> bytes:
    """Payload of the barometer: temperature then pressure, zeros for other ids."""
    if sensor_id != SensorID.BARO_TEMP:
        return bytes(BARO_PAYLOAD_SIZE)
    return struct.pack("<2f", temperature, pressure)


def _axes(name: str, values: Sequence[float]) -> tuple[float, float, float]:
    if len(values) != 3:
        raise ValueError(f"{name} needs three axes, got {len(values)}")
    return tuple(float(v) for v in values)


def pack_imu(sensor_id: int, acc: Sequence[float], gyro: Sequence[float],
             mag: Sequence[float]) -> bytes:
    """Payload of the motion sensor: three axes each of acc, gyro and mag."""
    if sensor_id != SensorID.ACC_GYRO_MAG:
        return bytes(IMU_PAYLOAD_SIZE)
    values = (*_axes("acc", acc), *_axes("gyro", gyro), *_axes("mag", mag))
    return struct.pack("<9f", *values)
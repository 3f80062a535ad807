import struct

import pytest

from earable.sensors import (
    SENSOR_COUNT,
    SPECIAL_SENSORS,
    ModuleID,
    SensorID,
    pack_baro,
    pack_imu,
    parse_to_string,
    sensor_config,
)


def test_sensor_ids_in_order():
    assert list(SensorID) == [SensorID(i) for i in range(SENSOR_COUNT)]
    assert SensorID(0) is SensorID.ACC_GYRO_MAG
    assert SensorID(SENSOR_COUNT - 1) is SensorID.CONFIGURATION


def test_special_sensors():
    assert SPECIAL_SENSORS == (SensorID.PDM_MIC, SensorID.PLAYER, SensorID.CONFIGURATION)
    configs = [sensor_config(s) for s in SPECIAL_SENSORS]
    assert [c.name for c in configs] == ["PDM MIC", "PLAYER", "Configuration"]
    assert [c.component_count for c in configs] == [0, 0, 0]
    assert all(c.module_id is ModuleID.MODULE_DUMMY for c in configs)


def test_sensor_config_lookup():
    imu = sensor_config(SensorID.ACC_GYRO_MAG)
    assert imu.name == "ACC_GYRO_MAG"
    assert imu.module_id is ModuleID.MODULE_IMU
    assert imu.component_count == 9
    baro = sensor_config(SensorID.BARO_TEMP)
    assert [c.group for c in baro.components] == ["TEMP", "BARO"]
    assert sensor_config(SensorID.PLAYER).component_count == 0


def test_sensor_config_unknown():
    with pytest.raises(ValueError):
        sensor_config(42)


def test_pack_baro_order_and_parse():
    data = pack_baro(SensorID.BARO_TEMP, 101.5, 25.0)
    assert struct.unpack("<2f", data) == (25.0, 101.5)
    assert parse_to_string(SensorID.BARO_TEMP, data) == "25.00, 101.50"


def test_pack_baro_wrong_id_is_zero():
    assert pack_baro(SensorID.ACC_GYRO_MAG, 1.0, 2.0) == bytes(8)


def test_pack_imu_round_trip():
    data = pack_imu(SensorID.ACC_GYRO_MAG, (1, 2, 3), (4, 5, 6), (7, 8, 9))
    assert struct.unpack("<9f", data) == tuple(float(v) for v in range(1, 10))
    text = parse_to_string(SensorID.ACC_GYRO_MAG, data)
    assert text.split(", ")[0] == "1.00"
    assert len(text.split(", ")) == 9


def test_pack_imu_wrong_id_is_zero():
    assert pack_imu(SensorID.BARO_TEMP, (1, 2, 3), (4, 5, 6), (7, 8, 9)) == bytes(36)


def test_pack_imu_bad_axes():
    with pytest.raises(ValueError):
        pack_imu(SensorID.ACC_GYRO_MAG, (1, 2), (4, 5, 6), (7, 8, 9))


def test_parse_short_payload():
    with pytest.raises(ValueError):
        parse_to_string(SensorID.BARO_TEMP, b"\x00\x00")


def test_parse_sensor_without_components():
    assert parse_to_string(SensorID.PLAYER, b"") == ""
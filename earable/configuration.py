"""Preset sensor configurations selected by number."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .sensors import SensorID

log = logging.getLogger(__name__)

MAX_CONFIG = 16
RATE_FACTOR = 1.25
_STOPPED_SENSORS = 4


@dataclass
class SensorConfigurationPacket:
    sensor_id: int
    sample_rate: float = 0.0
    latency: int = 0


@dataclass(frozen=True)
class ConfigurationBundle:
    imu_rate: float
    baro_rate: float
    pdm_rate: int


CONFIGURATIONS = (
    ConfigurationBundle(30, 30, 62500),
    ConfigurationBundle(30, 30, 41667),
    ConfigurationBundle(30, 30, 16000),
    ConfigurationBundle(30, 30, 0),
    ConfigurationBundle(20, 20, 62500),
    ConfigurationBundle(20, 20, 41667),
    ConfigurationBundle(20, 20, 16000),
    ConfigurationBundle(20, 20, 0),
    ConfigurationBundle(10, 10, 62500),
    ConfigurationBundle(10, 10, 41667),
    ConfigurationBundle(10, 10, 16000),
    ConfigurationBundle(10, 10, 0),
    ConfigurationBundle(0, 0, 62500),
    ConfigurationBundle(0, 0, 41667),
    ConfigurationBundle(0, 0, 16000),
)


class ConfigurationHandler:
    """Applies a numbered preset: 0 stops everything, 1-15 select a bundle.

    ``configure_sensor`` configures one sensor, ``configure_recorder`` the
    microphone, ``begin_tasks`` restarts the scheduler at a rate and
    ``update`` runs one sensor update.
    """

    def __init__(self, configure_sensor: Callable[[SensorConfigurationPacket], object],
                 configure_recorder: Callable[[SensorConfigurationPacket], object],
                 begin_tasks: Callable[[float], object],
                 update: Callable[[], object]) -> None:
        self.configure_sensor = configure_sensor
        self.configure_recorder = configure_recorder
        self.begin_tasks = begin_tasks
        self.update = update
        self.rate_factor = RATE_FACTOR
        self.active = False
        self.current_config = 0

    def stop_all(self) -> None:
        for sensor_id in range(_STOPPED_SENSORS):
            self.configure_sensor(SensorConfigurationPacket(sensor_id, 0.0, 0))

    def configure(self, config_num: int) -> None:
        """Apply preset ``config_num``; numbers out of range are ignored."""
        if config_num < 0 or config_num >= MAX_CONFIG:
            return
        self.stop_all()
        self.current_config = config_num
        if config_num == 0:
            self.active = False
            return
        self.active = True
        bundle = CONFIGURATIONS[config_num - 1]

        self.configure_sensor(SensorConfigurationPacket(
            SensorID.ACC_GYRO_MAG, bundle.imu_rate * self.rate_factor))
        self.update()
        self.configure_sensor(SensorConfigurationPacket(
            SensorID.BARO_TEMP, bundle.baro_rate * self.rate_factor))
        self.update()
        self.configure_recorder(SensorConfigurationPacket(
            SensorID.PDM_MIC, float(bundle.pdm_rate)))
        self.begin_tasks(max(bundle.baro_rate, bundle.imu_rate))

    def config_callback(self, config: SensorConfigurationPacket) -> None:
        """Handle a packet addressed to the configuration pseudo-sensor."""
        if config.sensor_id != SensorID.CONFIGURATION:
            return
        config_num = int(config.sample_rate)
        log.info("CONFIGURATION: %d", config_num)
        self.configure(config_num)
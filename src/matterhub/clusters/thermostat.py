from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field

from matterhub.const import DEFAULT_OCCUPIED_COOLING_SETPOINT, DEFAULT_OCCUPIED_HEATING_SETPOINT

from .base import ClusterAttributes

CLUSTER_NAME = "thermostat"

# int16 centi-Celsius, absolute zero is the lower bound
MIN_TEMPERATURE = -27315
MAX_TEMPERATURE = 32767


class SystemMode(IntEnum):
    OFF = 0
    AUTO = 1
    COOL = 3
    HEAT = 4
    EMERGENCY_HEAT = 5
    PRECOOLING = 6
    FAN_ONLY = 7
    DRY = 8
    SLEEP = 9


class ControlSequenceOfOperation(IntEnum):
    COOLING_ONLY = 0
    COOLING_WITH_REHEAT = 1
    HEATING_ONLY = 2
    HEATING_WITH_REHEAT = 3
    COOLING_AND_HEATING = 4
    COOLING_AND_HEATING_WITH_REHEAT = 5


class ThermostatRunningMode(IntEnum):
    OFF = 0
    COOL = 3
    HEAT = 4


class SetpointRaiseLowerMode(IntEnum):
    HEAT = 0
    COOL = 1
    BOTH = 2


class ThermostatRunningState(BaseModel):
    """The ``thermostatRunningState`` bitmap."""

    model_config = ConfigDict(frozen=True)

    heat: bool = False
    cool: bool = False
    fan: bool = False
    heat_stage2: bool = False
    cool_stage2: bool = False
    fan_stage2: bool = False
    fan_stage3: bool = False

    def to_bitmap(self) -> int:
        bits = (
            self.heat,
            self.cool,
            self.fan,
            self.heat_stage2,
            self.cool_stage2,
            self.fan_stage2,
            self.fan_stage3,
        )
        return sum(1 << i for i, bit in enumerate(bits) if bit)


def _temperature(default: int | None = None):
    return Field(default=default, ge=MIN_TEMPERATURE, le=MAX_TEMPERATURE)


class ThermostatAttributes(ClusterAttributes):
    local_temperature: int | None = _temperature()
    system_mode: SystemMode = SystemMode.OFF
    thermostat_running_state: ThermostatRunningState = Field(default_factory=ThermostatRunningState)
    thermostat_running_mode: ThermostatRunningMode = ThermostatRunningMode.OFF
    control_sequence_of_operation: ControlSequenceOfOperation = ControlSequenceOfOperation.COOLING_AND_HEATING

    occupied_heating_setpoint: int = _temperature(DEFAULT_OCCUPIED_HEATING_SETPOINT)
    min_heat_setpoint_limit: int | None = _temperature()
    max_heat_setpoint_limit: int | None = _temperature()
    abs_min_heat_setpoint_limit: int | None = _temperature()
    abs_max_heat_setpoint_limit: int | None = _temperature()

    occupied_cooling_setpoint: int = _temperature(DEFAULT_OCCUPIED_COOLING_SETPOINT)
    min_cool_setpoint_limit: int | None = _temperature()
    max_cool_setpoint_limit: int | None = _temperature()
    abs_min_cool_setpoint_limit: int | None = _temperature()
    abs_max_cool_setpoint_limit: int | None = _temperature()

    # tenths of a degree
    min_setpoint_dead_band: int = Field(default=25, ge=0, le=127)

from .base import ClusterBehavior
from .color_control import ColorControlBehavior, ColorControlConfig
from .temperature_measurement import TemperatureMeasurementBehavior, TemperatureMeasurementConfig
from .thermostat import ThermostatBehavior

__all__ = [
    "ClusterBehavior",
    "ColorControlBehavior",
    "ColorControlConfig",
    "TemperatureMeasurementBehavior",
    "TemperatureMeasurementConfig",
    "ThermostatBehavior",
]

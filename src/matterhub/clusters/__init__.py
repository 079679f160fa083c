from . import color_control, temperature_measurement, thermostat
from .base import AttributeChange, AttributeListener, AttributeOrigin, ClusterAttributes, ClusterState
from .features import ColorControlFeature, TemperatureMeasurementFeature, ThermostatFeature

__all__ = [
    "AttributeChange",
    "AttributeListener",
    "AttributeOrigin",
    "ClusterAttributes",
    "ClusterState",
    "ColorControlFeature",
    "TemperatureMeasurementFeature",
    "ThermostatFeature",
    "color_control",
    "temperature_measurement",
    "thermostat",
]

import logging

from .behaviors import (
    ColorControlBehavior,
    ColorControlConfig,
    TemperatureMeasurementBehavior,
    TemperatureMeasurementConfig,
    ThermostatBehavior,
)
from .clusters import ClusterState
from .config import MatterHubConfig
from .device import Device
from .factory import create_device
from .features import FeatureSet, resolve_features
from .hub import HomeAssistantEntity, HubClient
from .models import states
from .runtime import DeviceRuntime
from .storage import BridgeData, BridgeStorage

logging.getLogger("matterhub").addHandler(logging.NullHandler())

__all__ = [
    "BridgeData",
    "BridgeStorage",
    "ClusterState",
    "ColorControlBehavior",
    "ColorControlConfig",
    "Device",
    "DeviceRuntime",
    "FeatureSet",
    "HomeAssistantEntity",
    "HubClient",
    "MatterHubConfig",
    "TemperatureMeasurementBehavior",
    "TemperatureMeasurementConfig",
    "ThermostatBehavior",
    "create_device",
    "resolve_features",
    "states",
]

"""Mappings between Home Assistant hvac modes / actions and Matter thermostat enums.

Every function here is total: an unknown or missing hub value lands on the safest protocol value
(``Off``, or a running state with everything off).
"""

from matterhub.clusters.thermostat import (
    ControlSequenceOfOperation,
    SystemMode,
    ThermostatRunningMode,
    ThermostatRunningState,
)
from matterhub.features import FeatureSet

ALL_OFF = ThermostatRunningState()

_HEAT = ThermostatRunningState(heat=True)
_COOL = ThermostatRunningState(cool=True)
_DRY = ThermostatRunningState(heat=True, fan=True)
_FAN = ThermostatRunningState(fan=True)

_RUNNING_STATES: dict[str, ThermostatRunningState] = {
    "preheating": _HEAT,
    "defrosting": _HEAT,
    "heating": _HEAT,
    "heat": _HEAT,
    "cooling": _COOL,
    "cool": _COOL,
    "drying": _DRY,
    "dry": _DRY,
    "fan": _FAN,
    "fan_only": _FAN,
}

_RUNNING_MODES: dict[str, ThermostatRunningMode] = {
    "preheating": ThermostatRunningMode.HEAT,
    "defrosting": ThermostatRunningMode.HEAT,
    "heating": ThermostatRunningMode.HEAT,
    "drying": ThermostatRunningMode.HEAT,
    "cooling": ThermostatRunningMode.COOL,
}

_SYSTEM_MODES: dict[str, SystemMode] = {
    "heat": SystemMode.HEAT,
    "cool": SystemMode.COOL,
    "dry": SystemMode.DRY,
    "fan_only": SystemMode.FAN_ONLY,
    "off": SystemMode.OFF,
    "unavailable": SystemMode.OFF,
}

_HVAC_MODES: dict[SystemMode, str] = {
    SystemMode.AUTO: "heat_cool",
    SystemMode.PRECOOLING: "cool",
    SystemMode.COOL: "cool",
    SystemMode.HEAT: "heat",
    SystemMode.EMERGENCY_HEAT: "heat",
    SystemMode.FAN_ONLY: "fan_only",
    SystemMode.DRY: "dry",
    # the hub has no sleep mode
    SystemMode.SLEEP: "off",
    SystemMode.OFF: "off",
}


def get_running_state(hvac_action: str | None, hvac_mode: str | None) -> ThermostatRunningState:
    """Derive the running state from the hvac action, falling back to the hvac mode.

    idle, off, auto, heat_cool, unavailable and anything unknown are all off.
    """
    key = hvac_action if hvac_action is not None else hvac_mode
    if key is None:
        return ALL_OFF
    return _RUNNING_STATES.get(key, ALL_OFF)


def get_running_mode(hvac_action: str | None) -> ThermostatRunningMode:
    """Derive the running mode from the hvac action alone. Only used with the auto mode feature."""
    if hvac_action is None:
        return ThermostatRunningMode.OFF
    return _RUNNING_MODES.get(hvac_action, ThermostatRunningMode.OFF)


def get_system_mode(hvac_mode: str | None, features: FeatureSet) -> SystemMode:
    """Map the entity's hvac mode (its state) to a Matter system mode.

    ``auto`` and ``heat_cool`` become Auto if the auto mode feature is enabled, else Heat if
    heating is, else Cool if cooling is, else Sleep.
    """
    if hvac_mode in ("auto", "heat_cool"):
        if features.auto_mode:
            return SystemMode.AUTO
        if features.heating:
            return SystemMode.HEAT
        if features.cooling:
            return SystemMode.COOL
        return SystemMode.SLEEP

    if hvac_mode is None:
        return SystemMode.OFF
    return _SYSTEM_MODES.get(hvac_mode, SystemMode.OFF)


def get_hvac_mode(system_mode: SystemMode | int) -> str:
    """Map a Matter system mode back to the hub's hvac mode."""
    return _HVAC_MODES[SystemMode(system_mode)]


def get_control_sequence(features: FeatureSet) -> ControlSequenceOfOperation:
    if features.cooling and features.heating:
        return ControlSequenceOfOperation.COOLING_AND_HEATING
    if features.cooling:
        return ControlSequenceOfOperation.COOLING_ONLY
    return ControlSequenceOfOperation.HEATING_ONLY

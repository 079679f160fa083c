"""Feature bitmaps declared by Matter clusters.

These are only read by :func:`matterhub.features.resolve_features`; behaviors branch on the
resolved :class:`matterhub.features.FeatureSet` instead of the raw bits.
"""

from enum import IntFlag


class ColorControlFeature(IntFlag):
    HUE_SATURATION = 1
    ENHANCED_HUE = 2
    COLOR_LOOP = 4
    XY = 8
    COLOR_TEMPERATURE = 16


class ThermostatFeature(IntFlag):
    HEATING = 1
    COOLING = 2
    OCCUPANCY = 4
    SCHEDULE_CONFIGURATION = 8
    SETBACK = 16
    AUTO_MODE = 32


class TemperatureMeasurementFeature(IntFlag):
    """The temperature measurement cluster has no optional features."""

    NONE = 0

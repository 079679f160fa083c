"""Resolve declared cluster features into named capability flags.

Behaviors never look at raw feature bits. They get a :class:`FeatureSet` once, at bind time, and
branch on its named flags; a group that is not enabled is left out of every patch instead of
being filled with defaults.
"""

from collections.abc import Iterable
from dataclasses import dataclass, fields

from matterhub.clusters.features import ColorControlFeature, ThermostatFeature
from matterhub.exceptions import FeatureResolutionError
from matterhub.models.states import CHROMATIC_COLOR_MODES, ClimateState, ColorMode, LightState


@dataclass(frozen=True, slots=True)
class FeatureSet:
    """Capability flags of one bound cluster instance. Never changes once resolved."""

    heating: bool = False
    cooling: bool = False
    auto_mode: bool = False
    hue_saturation: bool = False
    color_temperature: bool = False

    @classmethod
    def names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))

    @property
    def enabled(self) -> frozenset[str]:
        """Names of the flags that are set."""
        return frozenset(name for name in self.names() if getattr(self, name))


def resolve_features(declared: ColorControlFeature | ThermostatFeature | Iterable[str]) -> FeatureSet:
    """Resolve a cluster's declared features into a :class:`FeatureSet`.

    Args:
        declared: The feature bitmap of a color control or thermostat cluster, or the names of the
            enabled flags (e.g. ``{"heating", "cooling"}``).

    Returns:
        The resolved feature set.

    Raises:
        FeatureResolutionError: If ``declared`` is a plain ``int``; bit positions overlap between
            clusters so an untyped bitmap cannot be resolved.
        ValueError: If a flag name is not known.
    """
    if isinstance(declared, ColorControlFeature):
        return FeatureSet(
            hue_saturation=ColorControlFeature.HUE_SATURATION in declared,
            color_temperature=ColorControlFeature.COLOR_TEMPERATURE in declared,
        )

    if isinstance(declared, ThermostatFeature):
        return FeatureSet(
            heating=ThermostatFeature.HEATING in declared,
            cooling=ThermostatFeature.COOLING in declared,
            auto_mode=ThermostatFeature.AUTO_MODE in declared,
        )

    if isinstance(declared, int):
        raise FeatureResolutionError(
            f"Cannot resolve untyped feature bitmap {declared!r}, pass a ColorControlFeature or ThermostatFeature"
        )

    names = set(declared)
    unknown = names - FeatureSet.names()
    if unknown:
        raise ValueError(f"Unknown feature name(s): {', '.join(sorted(unknown))}")

    return FeatureSet(**dict.fromkeys(names, True))


def color_features_for(state: LightState) -> ColorControlFeature:
    """Declare the color control features a light needs, based on its supported color modes."""
    modes = state.attributes.supported_color_modes or set()
    features = ColorControlFeature(0)
    if any(mode in CHROMATIC_COLOR_MODES for mode in modes):
        features |= ColorControlFeature.HUE_SATURATION
    if ColorMode.COLOR_TEMP in modes:
        features |= ColorControlFeature.COLOR_TEMPERATURE
    return features


def thermostat_features_for(state: ClimateState) -> ThermostatFeature:
    """Declare the thermostat features a climate entity needs, based on its hvac modes.

    ``heat_cool`` implies both heating and cooling, and together they enable the auto mode.
    """
    modes = set(state.attributes.hvac_modes or [])
    features = ThermostatFeature(0)

    if "heat" in modes or "heat_cool" in modes:
        features |= ThermostatFeature.HEATING
    if "cool" in modes or "heat_cool" in modes:
        features |= ThermostatFeature.COOLING

    both = ThermostatFeature.HEATING | ThermostatFeature.COOLING
    if (features & both) == both and ({"heat_cool", "auto"} & modes):
        features |= ThermostatFeature.AUTO_MODE

    return features

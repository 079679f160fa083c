"""Temperature unit conversion.

Home Assistant reports temperatures as floats in whatever unit system the instance (or the sensor)
uses. Matter stores every temperature as an integer in centi-Celsius. The only lossy step is the
rounding in :func:`entity_to_protocol_temperature`; everything else converts exactly.
"""

from enum import StrEnum

from matterhub.utils.number_utils import round_half_up, to_finite_float


class TemperatureUnit(StrEnum):
    CELSIUS = "°C"
    FAHRENHEIT = "°F"
    KELVIN = "K"


_UNIT_ALIASES: dict[str, TemperatureUnit] = {
    "°C": TemperatureUnit.CELSIUS,
    "C": TemperatureUnit.CELSIUS,
    # an empty unit is what the hub reports when it does not know, treat it as Celsius
    "": TemperatureUnit.CELSIUS,
    "°F": TemperatureUnit.FAHRENHEIT,
    "F": TemperatureUnit.FAHRENHEIT,
    "°K": TemperatureUnit.KELVIN,
    "K": TemperatureUnit.KELVIN,
}


def parse_unit(unit: str | None) -> TemperatureUnit | None:
    """Map a unit token to a :class:`TemperatureUnit`.

    ``None`` and the empty string are treated as Celsius. Any other unrecognized token returns None.
    """
    if unit is None:
        return TemperatureUnit.CELSIUS
    return _UNIT_ALIASES.get(unit.strip())


def to_celsius(value: float | None, source_unit: str | None) -> float | None:
    """Convert ``value`` expressed in ``source_unit`` to Celsius.

    Args:
        value: The temperature to convert.
        source_unit: The unit token, e.g. "°F", "F", "K", "°C".

    Returns:
        The temperature in Celsius, or None if the unit is unknown or the value is not finite.
    """
    current = to_finite_float(value)
    unit = parse_unit(source_unit)
    if current is None or unit is None:
        return None

    match unit:
        case TemperatureUnit.FAHRENHEIT:
            return (current - 32) * (5 / 9)
        case TemperatureUnit.KELVIN:
            return current - 273.15
        case TemperatureUnit.CELSIUS:
            return current


def from_celsius(celsius: float | None, target_unit: str | None) -> float | None:
    """Convert ``celsius`` to ``target_unit``.

    Returns:
        The converted temperature, or None if the unit is unknown or the value is not finite.
    """
    current = to_finite_float(celsius)
    unit = parse_unit(target_unit)
    if current is None or unit is None:
        return None

    match unit:
        case TemperatureUnit.FAHRENHEIT:
            return current * (9 / 5) + 32
        case TemperatureUnit.KELVIN:
            return current + 273.15
        case TemperatureUnit.CELSIUS:
            return current


def convert_temperature(value: float | None, source_unit: str | None, target_unit: str | None) -> float | None:
    """Convert any temperature (C, F, K) to any other, going through Celsius."""
    return from_celsius(to_celsius(value, source_unit), target_unit)


def entity_to_protocol_temperature(value: float | str | None, unit: str | None) -> int | None:
    """Convert a hub temperature to Matter's integer centi-Celsius.

    This is the only place fractional information is discarded.
    """
    celsius = to_celsius(to_finite_float(value), unit)
    if celsius is None:
        return None
    return round_half_up(celsius * 100)


def protocol_to_entity_temperature(centi_celsius: int | None, unit: str | None) -> float | None:
    """Convert Matter centi-Celsius back to a hub temperature in ``unit``."""
    current = to_finite_float(centi_celsius)
    if current is None:
        return None
    return from_celsius(current / 100, unit)

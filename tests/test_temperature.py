import math

import pytest

from matterhub.conversion.temperature import (
    TemperatureUnit,
    convert_temperature,
    entity_to_protocol_temperature,
    from_celsius,
    parse_unit,
    protocol_to_entity_temperature,
    to_celsius,
)
from matterhub.utils.number_utils import round_half_up, to_finite_float


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(12.5, 13), (-12.5, -12), (0.5, 1), (1.5, 2), (2.4999, 2), (-0.6, -1)],
    )
    def test_halves_round_towards_positive_infinity(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestToFiniteFloat:
    @pytest.mark.parametrize("value", [None, "", "  ", "abc", math.nan, math.inf, -math.inf, True, [1]])
    def test_rejects_non_numeric_values(self, value: object) -> None:
        assert to_finite_float(value) is None

    def test_accepts_numeric_strings(self) -> None:
        assert to_finite_float(" 21.5 ") == 21.5


class TestParseUnit:
    def test_missing_unit_is_celsius(self) -> None:
        assert parse_unit(None) is TemperatureUnit.CELSIUS
        assert parse_unit("") is TemperatureUnit.CELSIUS

    @pytest.mark.parametrize(
        ("token", "expected"),
        [("°F", TemperatureUnit.FAHRENHEIT), ("F", TemperatureUnit.FAHRENHEIT), ("K", TemperatureUnit.KELVIN)],
    )
    def test_known_tokens(self, token: str, expected: TemperatureUnit) -> None:
        assert parse_unit(token) is expected

    def test_unknown_token_is_none(self) -> None:
        assert parse_unit("Rankine") is None


class TestConversions:
    def test_fahrenheit_to_celsius(self) -> None:
        assert to_celsius(212, "°F") == pytest.approx(100)

    def test_celsius_to_fahrenheit(self) -> None:
        assert convert_temperature(100, "°C", "°F") == pytest.approx(212)

    def test_kelvin_to_celsius(self) -> None:
        assert convert_temperature(273.15, "K", "°C") == pytest.approx(0)

    def test_unknown_unit_yields_none(self) -> None:
        assert convert_temperature(20, "bogus", "°C") is None
        assert convert_temperature(20, "°C", "bogus") is None


class TestEntityToProtocolTemperature:
    def test_celsius(self) -> None:
        assert entity_to_protocol_temperature(21.5, "°C") == 2150

    def test_fahrenheit(self) -> None:
        assert entity_to_protocol_temperature(70, "°F") == 2111

    def test_kelvin(self) -> None:
        assert entity_to_protocol_temperature(294.15, "K") == 2100

    def test_numeric_string(self) -> None:
        assert entity_to_protocol_temperature("19", "°C") == 1900

    def test_rounds_halves_up(self) -> None:
        assert entity_to_protocol_temperature(0.125, "°C") == 13
        assert entity_to_protocol_temperature(-0.125, "°C") == -12

    @pytest.mark.parametrize("value", [None, "abc", "", math.nan])
    def test_unusable_value_is_none(self, value: object) -> None:
        assert entity_to_protocol_temperature(value, "°C") is None  # pyright: ignore[reportArgumentType]

    def test_missing_unit_is_celsius(self) -> None:
        assert entity_to_protocol_temperature(20, None) == 2000

    def test_unknown_unit_is_none(self) -> None:
        assert entity_to_protocol_temperature(20, "bogus") is None


class TestProtocolToEntityTemperature:
    def test_celsius(self) -> None:
        assert protocol_to_entity_temperature(2150, "°C") == 21.5

    def test_fahrenheit(self) -> None:
        assert protocol_to_entity_temperature(2000, "°F") == pytest.approx(68)

    def test_none(self) -> None:
        assert protocol_to_entity_temperature(None, "°C") is None


class TestPrecision:
    @pytest.mark.parametrize("unit", ["°C", "°F", "K"])
    @pytest.mark.parametrize("celsius", [-40.0, 0.0, 21.37, 100.0])
    def test_celsius_survives_a_unit_round_trip(self, celsius: float, unit: str) -> None:
        assert to_celsius(from_celsius(celsius, unit), unit) == pytest.approx(celsius, abs=1e-6)

    @pytest.mark.parametrize("value", [-12.345, 0.004, 19.995, 21.37])
    def test_protocol_quantization_is_at_most_half_a_step(self, value: float) -> None:
        centi = entity_to_protocol_temperature(value, "°C")
        assert abs(protocol_to_entity_temperature(centi, "°C") - value) <= 0.005 + 1e-9  # pyright: ignore[reportOperatorIssue]

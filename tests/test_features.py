import pytest

from matterhub.clusters import ColorControlFeature, ThermostatFeature
from matterhub.exceptions import FeatureResolutionError
from matterhub.features import FeatureSet, color_features_for, resolve_features, thermostat_features_for
from matterhub.test_utils import create_climate_state, create_light_state


class TestResolveFeatures:
    def test_color_control_bitmap(self) -> None:
        features = resolve_features(ColorControlFeature.HUE_SATURATION | ColorControlFeature.XY)
        assert features == FeatureSet(hue_saturation=True)

    def test_thermostat_bitmap(self) -> None:
        features = resolve_features(ThermostatFeature.HEATING | ThermostatFeature.COOLING | ThermostatFeature.AUTO_MODE)
        assert features.enabled == {"heating", "cooling", "auto_mode"}

    def test_names(self) -> None:
        assert resolve_features({"cooling"}) == FeatureSet(cooling=True)

    def test_empty_bitmap_enables_nothing(self) -> None:
        assert resolve_features(ThermostatFeature(0)).enabled == frozenset()

    def test_plain_int_is_rejected(self) -> None:
        with pytest.raises(FeatureResolutionError):
            resolve_features(3)  # pyright: ignore[reportArgumentType]

    def test_plain_int_error_is_a_type_error(self) -> None:
        with pytest.raises(TypeError):
            resolve_features(1)  # pyright: ignore[reportArgumentType]

    def test_unknown_name_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="bogus"):
            resolve_features({"heating", "bogus"})

    def test_feature_set_is_frozen(self) -> None:
        features = FeatureSet(heating=True)
        with pytest.raises(AttributeError):
            features.heating = False  # pyright: ignore[reportAttributeAccessIssue]


class TestColorFeaturesFor:
    def test_hs_and_color_temp(self) -> None:
        state = create_light_state(supported_color_modes=["hs", "color_temp"])
        assert color_features_for(state) == ColorControlFeature.HUE_SATURATION | ColorControlFeature.COLOR_TEMPERATURE

    @pytest.mark.parametrize("mode", ["rgb", "rgbw", "rgbww", "xy"])
    def test_chromatic_modes_declare_hue_saturation(self, mode: str) -> None:
        state = create_light_state(supported_color_modes=[mode])
        assert color_features_for(state) == ColorControlFeature.HUE_SATURATION

    def test_brightness_only_light_declares_nothing(self) -> None:
        state = create_light_state(supported_color_modes=["brightness"])
        assert not color_features_for(state)


class TestThermostatFeaturesFor:
    def test_heat_only(self) -> None:
        state = create_climate_state(hvac_modes=["off", "heat"])
        assert thermostat_features_for(state) == ThermostatFeature.HEATING

    def test_heat_and_cool_without_auto(self) -> None:
        state = create_climate_state(hvac_modes=["off", "heat", "cool"])
        assert thermostat_features_for(state) == ThermostatFeature.HEATING | ThermostatFeature.COOLING

    def test_heat_cool_enables_everything(self) -> None:
        state = create_climate_state(hvac_modes=["off", "heat_cool"])
        assert thermostat_features_for(state) == (
            ThermostatFeature.HEATING | ThermostatFeature.COOLING | ThermostatFeature.AUTO_MODE
        )

    def test_auto_needs_both_sides(self) -> None:
        state = create_climate_state(hvac_modes=["off", "heat", "auto"])
        assert thermostat_features_for(state) == ThermostatFeature.HEATING

from dataclasses import dataclass
from logging import getLogger
from typing import Any

from matterhub.clusters.base import ClusterState
from matterhub.clusters.color_control import CLUSTER_NAME, ColorControlAttributes, ColorMode
from matterhub.const import DEFAULT_MAX_KELVIN, DEFAULT_MIN_KELVIN
from matterhub.conversion import color
from matterhub.features import FeatureSet
from matterhub.hub import HomeAssistantEntity
from matterhub.models.states import LightState
from matterhub.models.states import ColorMode as HassColorMode
from matterhub.runtime import DeviceRuntime
from matterhub.utils.number_utils import round_half_up

from .base import ClusterBehavior

LOGGER = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ColorControlConfig:
    expand_min_max_temperature: bool = False
    """Widen the reported Kelvin bounds so they always include the current color temperature."""


def get_color_mode(color_mode: str | None, features: FeatureSet) -> ColorMode:
    """Map the light's ``color_mode`` to the Matter color mode, honoring the enabled features.

    Chromatic modes (hs, rgb, rgbw, rgbww, xy) and anything unknown fall back to hue and saturation
    when that is enabled, otherwise to color temperature.
    """
    if color_mode == HassColorMode.COLOR_TEMP and features.color_temperature:
        return ColorMode.COLOR_TEMPERATURE_MIREDS
    if features.hue_saturation:
        return ColorMode.CURRENT_HUE_AND_CURRENT_SATURATION
    return ColorMode.COLOR_TEMPERATURE_MIREDS


def get_entity_color(state: LightState) -> color.ColorValue | None:
    """Normalize whatever color representation the light reports.

    Precedence: hs_color, rgbww_color, rgbw_color, rgb_color, xy_color.
    """
    attributes = state.attributes
    if attributes.hs_color is not None:
        return color.from_hs(*attributes.hs_color)
    if attributes.rgbww_color is not None:
        return color.from_rgbww(*attributes.rgbww_color)
    if attributes.rgbw_color is not None:
        return color.from_rgbw(*attributes.rgbw_color)
    if attributes.rgb_color is not None:
        return color.from_rgb(*attributes.rgb_color)
    if attributes.xy_color is not None:
        return color.from_xy(*attributes.xy_color)
    return None


def get_protocol_hs(state: LightState) -> tuple[int, int] | None:
    """Matter hue and saturation of the light, or None if it reports no color."""
    value = get_entity_color(state)
    return color.to_protocol_hs(value) if value is not None else None


class ColorControlBehavior(ClusterBehavior[LightState, ColorControlAttributes]):
    """Projects a light's color onto the ColorControl cluster and turns color commands into
    ``light.turn_on`` actions.
    """

    cluster_name = CLUSTER_NAME

    config: ColorControlConfig

    def __init__(
        self,
        entity: HomeAssistantEntity[LightState],
        cluster: ClusterState[ColorControlAttributes],
        runtime: DeviceRuntime,
        config: ColorControlConfig | None = None,
    ) -> None:
        super().__init__(entity, cluster, runtime)
        self.config = config or ColorControlConfig()

    def register_handlers(self) -> None:
        if self.features.hue_saturation:
            self.on_command("move_to_hue", self.move_to_hue)
            self.on_command("move_to_saturation", self.move_to_saturation)
            self.on_command("move_to_hue_and_saturation", self.move_to_hue_and_saturation)
        if self.features.color_temperature:
            self.on_command("move_to_color_temperature", self.move_to_color_temperature)

    def update(self, state: LightState) -> None:
        attributes = state.attributes
        current_kelvin = attributes.color_temp_kelvin
        min_kelvin = attributes.min_color_temp_kelvin
        if min_kelvin is None:
            min_kelvin = DEFAULT_MIN_KELVIN
        max_kelvin = attributes.max_color_temp_kelvin
        if max_kelvin is None:
            max_kelvin = DEFAULT_MAX_KELVIN

        if self.config.expand_min_max_temperature:
            if current_kelvin is not None:
                min_kelvin = min(min_kelvin, current_kelvin)
                max_kelvin = max(max_kelvin, current_kelvin)
            if min_kelvin > max_kelvin:
                min_kelvin, max_kelvin = max_kelvin, min_kelvin

        patch: dict[str, Any] = {"color_mode": get_color_mode(attributes.color_mode, self.features)}

        if self.features.hue_saturation:
            hue_saturation = get_protocol_hs(state)
            if hue_saturation is not None:
                patch["current_hue"], patch["current_saturation"] = hue_saturation

        if self.features.color_temperature:
            # the coldest color is the lowest mireds value
            min_mireds = int(color.kelvin_to_mireds(max_kelvin, "floor"))
            patch["couple_color_temp_to_level_min_mireds"] = min_mireds
            patch["color_temp_physical_min_mireds"] = min_mireds
            patch["color_temp_physical_max_mireds"] = int(color.kelvin_to_mireds(min_kelvin, "ceil"))
            patch["start_up_color_temperature_mireds"] = round_half_up(
                color.kelvin_to_mireds(current_kelvin if current_kelvin else max_kelvin)
            )
            if current_kelvin:
                patch["color_temperature_mireds"] = round_half_up(color.kelvin_to_mireds(current_kelvin))

        self.cluster.patch(patch)

    async def move_to_hue(self, hue: int) -> None:
        await self.move_to_hue_and_saturation(hue, self.cluster.attributes.current_saturation)

    async def move_to_saturation(self, saturation: int) -> None:
        await self.move_to_hue_and_saturation(self.cluster.attributes.current_hue, saturation)

    async def move_to_hue_and_saturation(self, hue: int, saturation: int) -> None:
        # compare against the live snapshot, not what we last wrote to the cluster
        if get_protocol_hs(self.entity.state) == (hue, saturation):
            LOGGER.debug("%s already at hue=%s saturation=%s, not sending", self.entity.entity_id, hue, saturation)
            return

        target = color.from_protocol_hs(hue, saturation)
        entity_hue, entity_saturation = color.to_entity_hs(target)
        await self.entity.call_action("light.turn_on", {"hs_color": [entity_hue, entity_saturation]})

    async def move_to_color_temperature(self, color_temperature_mireds: int) -> None:
        target = color.mireds_to_kelvin(color_temperature_mireds)
        if target is None:
            LOGGER.warning("Ignoring color temperature of %s mireds for %s", color_temperature_mireds, self.entity)
            return

        target_kelvin = round_half_up(target)
        if self.entity.state.attributes.color_temp_kelvin == target_kelvin:
            LOGGER.debug("%s already at %sK, not sending", self.entity.entity_id, target_kelvin)
            return

        await self.entity.call_action("light.turn_on", {"color_temp_kelvin": target_kelvin})

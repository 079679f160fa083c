from pydantic import BaseModel, ConfigDict, Field


class HomeAssistantMatcher(BaseModel):
    """Selects hub entities, e.g. ``{"type": "domain", "value": "light"}``."""

    type: str
    value: str


class BridgeFilter(BaseModel):
    include: list[HomeAssistantMatcher] = Field(default_factory=list)
    exclude: list[HomeAssistantMatcher] = Field(default_factory=list)


class BridgeFeatureFlags(BaseModel):
    expand_min_max_color_temperature: bool = Field(default=False)
    """Widen a light's Kelvin bounds so they always include its current color temperature."""


class BridgeData(BaseModel):
    """A persisted bridge record, at the current schema version."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    port: int = Field(ge=1, le=65535)
    filter: BridgeFilter = Field(default_factory=BridgeFilter)
    feature_flags: BridgeFeatureFlags = Field(default_factory=BridgeFeatureFlags)

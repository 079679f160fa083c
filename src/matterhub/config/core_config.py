import os
from pathlib import Path
from typing import Annotated

import platformdirs
from pydantic import BeforeValidator, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from matterhub.const import LOG_LEVELS, PACKAGE_KEY


def default_data_dir() -> Path:
    """Return the first found data directory based on environment variables or defaults.

    Will return the first of:
    - MATTERHUB__DATA_DIR environment variable
    - MATTERHUB_DATA_DIR environment variable
    - /data (for docker)
    - platformdirs user data path

    """

    if env := os.getenv("MATTERHUB__DATA_DIR", os.getenv("MATTERHUB_DATA_DIR")):
        return Path(env)
    docker = Path("/data")
    if docker.exists():
        return docker
    return platformdirs.user_data_path(PACKAGE_KEY)


class MatterHubConfig(BaseSettings):
    """Configuration for matterhub."""

    model_config = SettingsConfigDict(
        env_prefix="matterhub__",
        env_file=["/config/.env", ".env", "./config/.env"],
        toml_file=["/config/matterhub.toml", "matterhub.toml", "./config/matterhub.toml"],
        env_ignore_empty=True,
        extra="ignore",
        env_nested_delimiter="__",
        validate_by_name=True,
        use_attribute_docstrings=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type["BaseSettings"],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    log_level: Annotated[LOG_LEVELS, BeforeValidator(str.upper)] = Field(default="INFO")
    """Logging level for matterhub."""

    data_dir: Path = Field(default_factory=default_data_dir)
    """Directory to store bridge configuration in."""

    storage_file_name: str = Field(default="matterhub.db")
    """File name of the SQLite database inside ``data_dir``."""

    default_temperature_unit: str = Field(default="°C")
    """Temperature unit assumed when the hub does not report its unit system."""

    expand_min_max_color_temperature: bool = Field(default=False)
    """Widen a light's reported Kelvin bounds so they always include its current color temperature.

    Applies to bridges that do not set the flag themselves.
    """

    runtime_queue_size: int = Field(default=100, gt=0)
    """Number of events a device can have queued before senders wait."""

    runtime_log_level: Annotated[LOG_LEVELS, BeforeValidator(str.upper)] = Field(
        default_factory=lambda data: data.get("log_level", "INFO")
    )
    """Logging level for the device runtimes. Defaults to INFO or the value of log_level."""

    storage_log_level: Annotated[LOG_LEVELS, BeforeValidator(str.upper)] = Field(
        default_factory=lambda data: data.get("log_level", "INFO")
    )
    """Logging level for bridge storage and migrations. Defaults to INFO or the value of log_level."""

    @property
    def storage_path(self) -> Path:
        """Full path of the SQLite database."""
        return self.data_dir / self.storage_file_name

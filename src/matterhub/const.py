from typing import Literal

LOG_LEVELS = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

PACKAGE_KEY = "matterhub"

# Kelvin bounds used when a light does not report its own
DEFAULT_MIN_KELVIN = 1500
DEFAULT_MAX_KELVIN = 8000

# Mireds range of the ColorControl cluster
MIN_MIREDS = 0
MAX_MIREDS = 65279

# Hue and saturation range of the ColorControl cluster
MAX_PROTOCOL_HUE = 254
MAX_PROTOCOL_SATURATION = 254

# Matter defaults for thermostat setpoints, in centi-Celsius
DEFAULT_OCCUPIED_HEATING_SETPOINT = 2000
DEFAULT_OCCUPIED_COOLING_SETPOINT = 2600

UNAVAILABLE = "unavailable"
UNKNOWN = "unknown"

"""Pure conversion helpers shared by every cluster behavior.

Nothing in here raises for bad input: an unknown unit, a non-finite number or missing color
information all come back as ``None`` and callers leave the related attribute alone.
"""

from . import color, temperature
from .color import ColorValue
from .temperature import TemperatureUnit

__all__ = ["ColorValue", "TemperatureUnit", "color", "temperature"]

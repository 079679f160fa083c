"""Helpers and fixtures for testing matterhub devices without a hub or a Matter fabric."""

from .helpers import MockHub, create_climate_state, create_light_state, create_sensor_state, make_state_dict

__all__ = [
    "MockHub",
    "create_climate_state",
    "create_light_state",
    "create_sensor_state",
    "make_state_dict",
]

import pytest

from matterhub.clusters import ClusterState, ColorControlFeature, ThermostatFeature
from matterhub.clusters.color_control import ColorControlAttributes
from matterhub.clusters.thermostat import ThermostatAttributes
from matterhub.runtime import DeviceRuntime

# this wants package.nested_directories.final_file_name
# do not include the name of the fixture
pytest_plugins = ["matterhub.test_utils.fixtures"]


@pytest.fixture
def runtime() -> DeviceRuntime:
    return DeviceRuntime("test_device")


@pytest.fixture
def color_cluster() -> ClusterState[ColorControlAttributes]:
    return ClusterState(
        "color_control",
        ColorControlAttributes(),
        ColorControlFeature.HUE_SATURATION | ColorControlFeature.COLOR_TEMPERATURE,
    )


@pytest.fixture
def heating_cluster() -> ClusterState[ThermostatAttributes]:
    return ClusterState("thermostat", ThermostatAttributes(), ThermostatFeature.HEATING)


@pytest.fixture
def heat_cool_cluster() -> ClusterState[ThermostatAttributes]:
    return ClusterState(
        "thermostat",
        ThermostatAttributes(),
        ThermostatFeature.HEATING | ThermostatFeature.COOLING | ThermostatFeature.AUTO_MODE,
    )

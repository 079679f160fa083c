import typing

import pytest

from matterhub.config import MatterHubConfig
from matterhub.storage import MemoryStorage

from .helpers import MockHub

if typing.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def hub() -> MockHub:
    return MockHub()


@pytest.fixture
def config(tmp_path: "Path") -> MatterHubConfig:
    return MatterHubConfig(data_dir=tmp_path, log_level="DEBUG")  # pyright: ignore[reportCallIssue]


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()

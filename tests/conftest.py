from enum import Enum
from pathlib import Path

import pytest
from pydantic import BaseModel

from optionstore import Config, PathResolver
from optionstore.options import (
    BooleanOption,
    EnumOption,
    FloatOption,
    IntegerOption,
    ModelOption,
    StringListOption,
    StringOption,
)


class Theme(Enum):
    """Theme choices used by the sample config."""

    LIGHT = "light"
    DARK = "dark"


class WindowGeometry(BaseModel):
    """Nested model used by the sample config."""

    width: int = 800
    height: int = 600
    maximized: bool = False


@pytest.fixture
def path_resolver(tmp_path: Path) -> PathResolver:
    """Provide a PathResolver rooted in a temporary config directory."""
    return PathResolver(tmp_path / "config")


@pytest.fixture
def sample_config(path_resolver: PathResolver) -> Config:
    """Provide a version 1 config with one option of every type."""
    config = Config("testmod/settings.json", version=1, path_resolver=path_resolver)
    config.add(BooleanOption("testmod:enabled", "general", True))
    config.add(IntegerOption("testmod:retries", "general", 3, min_value=0, max_value=10))
    config.add(FloatOption("testmod:volume", "audio", 0.5, min_value=0.0, max_value=1.0))
    config.add(StringOption("testmod:greeting", "general", "hello"))
    config.add(EnumOption("testmod:theme", "display", Theme.LIGHT))
    config.add(StringListOption("testmod:recent_files", "general", ["a.txt"]))
    config.add(ModelOption("testmod:window", "display", WindowGeometry()))
    return config

from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from roverpy.core.rover import Rover  # noqa: E402
from roverpy.core.world_model import WorldModel  # noqa: E402
from roverpy.runtime.config_loader import RoverConfig  # noqa: E402


@pytest.fixture
def default_config() -> RoverConfig:
    return RoverConfig()


@pytest.fixture
def rover(default_config: RoverConfig) -> Rover:
    return Rover(default_config)


@pytest.fixture
def wall_world() -> WorldModel:
    """A wide wall 8 m ahead of the origin, across the +z axis."""

    world = WorldModel([{"name": "wall", "x": 0.0, "z": 8.0, "length": 0.5, "width": 40.0}])
    world.set_runtime(0, 1.0 / 60.0)
    return world


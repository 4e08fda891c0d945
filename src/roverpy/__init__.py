# RoverPy author, 2026.

"""Reactive obstacle-avoidance steering for a ground rover."""

__version__ = "1.0.0"

from roverpy.core import Rover, Sensor, SensorArray, SensorId, SensorReading, SensorReadings, Vec3, WorldModel
from roverpy.modules.classifier import ObstacleState, classify
from roverpy.modules.controller import (
    AvoidanceController,
    AvoidanceDecision,
    BlendedCommand,
    InputBlender,
    ManualIntent,
)
from roverpy.runtime import ConfigError, RoverConfig, load_rover_config, load_world_config, setup_logging
from roverpy.simulation_apis import AvoidancePipeline, TickResult, generate_random_world, simulate_one_step

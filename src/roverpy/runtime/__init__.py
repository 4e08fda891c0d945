# RoverPy author, 2026.

from roverpy.runtime.config_loader import ConfigError, RoverConfig, load_rover_config, load_world_config
from roverpy.runtime.log import setup_logging

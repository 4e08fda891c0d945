# RoverPy author, 2026.

from roverpy.simulation_apis.random_world_generator import generate_random_world
from roverpy.simulation_apis.simulate_one_step import AvoidancePipeline, TickResult, simulate_one_step

# RoverPy author, 2026.

from roverpy.core.rover import Rover
from roverpy.core.sensors import Sensor, SensorArray, SensorId, SensorReading, SensorReadings
from roverpy.core.vector import Vec3
from roverpy.core.world_model import WorldModel

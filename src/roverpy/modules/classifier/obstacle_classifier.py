# RoverPy author, 2026.

# obstacle_classifier.py
# classify(readings) -> ObstacleState
#
# Named access over one tick of sensor readings. No smoothing, no
# minimum-detection count: each flag is exactly the reading's has_obstacle.

from dataclasses import dataclass

from roverpy.core.sensors import SensorId


@dataclass(frozen=True)
class ObstacleState:
    front: bool = False
    front_left: bool = False
    front_right: bool = False
    left: bool = False
    right: bool = False
    left_distance: float = 0.0
    right_distance: float = 0.0

    @property
    def any_blocked(self):
        return self.front or self.front_left or self.front_right or self.left or self.right


def classify(readings):
    return ObstacleState(
        front=bool(readings[SensorId.FRONT].has_obstacle),
        front_left=bool(readings[SensorId.FRONT_LEFT].has_obstacle),
        front_right=bool(readings[SensorId.FRONT_RIGHT].has_obstacle),
        left=bool(readings[SensorId.LEFT].has_obstacle),
        right=bool(readings[SensorId.RIGHT].has_obstacle),
        left_distance=float(readings[SensorId.LEFT].distance),
        right_distance=float(readings[SensorId.RIGHT].distance),
    )

# RoverPy author, 2026.

import enum
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass

from roverpy.core.vector import FORWARD, LEFT, RIGHT, UP, Vec3, rotate_yaw

logger = logging.getLogger(__name__)

DEFAULT_SENSOR_RANGE = 3.0
DEFAULT_SENSOR_HEIGHT = 0.5
ALL_LAYERS = -1


class SensorId(enum.Enum):
    FRONT = 0
    FRONT_LEFT = 1
    FRONT_RIGHT = 2
    LEFT = 3
    RIGHT = 4

    @property
    def label(self):
        return self.name.replace("_", "-").title()


@dataclass(frozen=True)
class Sensor:
    id: SensorId
    direction: Vec3
    max_range: float = DEFAULT_SENSOR_RANGE

    def __post_init__(self):
        if not self.max_range > 0.0:
            raise ValueError(f"{self.id.label} sensor range must be positive, got {self.max_range}")


@dataclass(frozen=True)
class SensorReading:
    sensor_id: SensorId
    has_obstacle: bool
    distance: float
    origin: Vec3 = Vec3()
    end: Vec3 = Vec3()


class SensorReadings(Mapping):
    """
    One reading per SensorId for a single tick (meters):
      front, front_left, front_right, left, right
    Index by SensorId, or use the named attributes.
    """

    __slots__ = ("_readings",)

    def __init__(self, readings):
        by_id = {r.sensor_id: r for r in readings}
        missing = [sid.label for sid in SensorId if sid not in by_id]
        if missing:
            raise KeyError(f"missing readings for: {', '.join(missing)}")
        self._readings = tuple(by_id[sid] for sid in SensorId)

    def __getitem__(self, sensor_id):
        try:
            return self._readings[SensorId(sensor_id).value]
        except ValueError:
            raise KeyError(sensor_id) from None

    def __iter__(self):
        return iter(SensorId)

    def __len__(self):
        return len(self._readings)

    def __eq__(self, other):
        if isinstance(other, SensorReadings):
            return self._readings == other._readings
        return NotImplemented

    def __hash__(self):
        return hash(self._readings)

    def __repr__(self):
        return f"SensorReadings({list(self._readings)!r})"

    @property
    def front(self):
        return self._readings[SensorId.FRONT.value]

    @property
    def front_left(self):
        return self._readings[SensorId.FRONT_LEFT.value]

    @property
    def front_right(self):
        return self._readings[SensorId.FRONT_RIGHT.value]

    @property
    def left(self):
        return self._readings[SensorId.LEFT.value]

    @property
    def right(self):
        return self._readings[SensorId.RIGHT.value]


class SensorArray:
    """
    Five fixed-direction range finders on the rover body.

    sense(position, heading_deg, ray_query) casts one ray per sensor from
    position + sensor_height (up), along the sensor direction rotated by the
    heading, and returns a SensorReadings for the tick.

    ray_query(origin, direction, max_distance, layer_mask) -> float | None
    is the physics collaborator. It fails open: a missing query, a query that
    raises or a distance outside [0, max_range] reads as "no obstacle".
    """

    def __init__(self, sensors=None, sensor_height=DEFAULT_SENSOR_HEIGHT, layer_mask=ALL_LAYERS):
        if sensors is None:
            sensors = self.default_sensors()
        sensors = tuple(sensors)
        ids = [s.id for s in sensors]
        if sorted(ids, key=lambda sid: sid.value) != list(SensorId):
            raise ValueError("sensor array needs exactly one sensor per SensorId")
        self.sensors = tuple(sorted(sensors, key=lambda s: s.id.value))
        self.sensor_height = float(sensor_height)
        self.layer_mask = int(layer_mask)

    @staticmethod
    def default_sensors(max_range=DEFAULT_SENSOR_RANGE):
        return (
            Sensor(SensorId.FRONT, FORWARD, max_range),
            Sensor(SensorId.FRONT_LEFT, (FORWARD + LEFT).normalized(), max_range),
            Sensor(SensorId.FRONT_RIGHT, (FORWARD + RIGHT).normalized(), max_range),
            Sensor(SensorId.LEFT, LEFT, max_range),
            Sensor(SensorId.RIGHT, RIGHT, max_range),
        )

    def ray_origin(self, position):
        return Vec3(*position) + UP.scaled(self.sensor_height)

    def sense(self, position, heading_deg, ray_query):
        origin = self.ray_origin(position)
        readings = []
        for sensor in self.sensors:
            direction = rotate_yaw(sensor.direction, heading_deg)
            hit = self._query(ray_query, sensor, origin, direction)
            if hit is None:
                readings.append(
                    SensorReading(
                        sensor.id, False, sensor.max_range,
                        origin, origin + direction.scaled(sensor.max_range),
                    )
                )
            else:
                readings.append(
                    SensorReading(sensor.id, True, hit, origin, origin + direction.scaled(hit))
                )
        return SensorReadings(readings)

    def _query(self, ray_query, sensor, origin, direction):
        if ray_query is None:
            return None
        try:
            hit = ray_query(origin, direction, sensor.max_range, self.layer_mask)
        except Exception:
            logger.warning("ray query failed for %s sensor, reading as clear", sensor.id.label, exc_info=True)
            return None
        if hit is None:
            return None
        try:
            hit = float(hit)
        except (TypeError, ValueError):
            logger.warning("ray query for %s sensor returned %r, reading as clear", sensor.id.label, hit)
            return None
        if not math.isfinite(hit) or hit < 0.0 or hit > sensor.max_range:
            return None
        return hit

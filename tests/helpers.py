from __future__ import annotations

from pathlib import Path
from textwrap import dedent

from roverpy.core.sensors import SensorArray, SensorId
from roverpy.core.vector import rotate_yaw
from roverpy.modules.classifier.obstacle_classifier import ObstacleState


def write_config(directory: Path, name: str, contents: str) -> Path:
    """Persist a config source under ``directory`` and return its path."""

    target = directory / name
    target.write_text(dedent(contents).lstrip(), encoding="utf8")
    return target


class StubRayQuery:
    """Ray query answering per sensor, matched on the world-space ray direction."""

    def __init__(self, hits: dict[SensorId, float] | None = None, heading_deg: float = 0.0):
        self.hits = dict(hits or {})
        self.calls: list[tuple] = []
        self._directions = {
            sensor.id: rotate_yaw(sensor.direction, heading_deg)
            for sensor in SensorArray.default_sensors()
        }

    def __call__(self, origin, direction, max_distance, layer_mask):
        self.calls.append((origin, direction, max_distance, layer_mask))
        for sensor_id, expected in self._directions.items():
            if all(abs(a - b) < 1e-9 for a, b in zip(direction, expected)):
                return self.hits.get(sensor_id)
        raise AssertionError(f"unexpected ray direction {direction}")


def obstacle_state(**overrides) -> ObstacleState:
    """ObstacleState with clear sensors at full range unless overridden."""

    values = {"left_distance": 3.0, "right_distance": 3.0}
    values.update(overrides)
    return ObstacleState(**values)

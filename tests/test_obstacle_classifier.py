import itertools

import pytest

from roverpy.core.sensors import SensorArray, SensorId
from roverpy.core.vector import Vec3
from roverpy.modules.classifier.obstacle_classifier import ObstacleState, classify

from tests.helpers import StubRayQuery


@pytest.mark.parametrize("blocked", list(itertools.product([False, True], repeat=5)))
def test_flags_mirror_readings(blocked) -> None:
    hits = {sid: 1.0 for sid, flag in zip(SensorId, blocked) if flag}
    readings = SensorArray().sense(Vec3(), 0.0, StubRayQuery(hits))

    state = classify(readings)

    assert (state.front, state.front_left, state.front_right, state.left, state.right) == blocked
    assert state.any_blocked == any(blocked)


def test_side_distances_are_carried_for_tie_breaks() -> None:
    readings = SensorArray().sense(
        Vec3(), 0.0, StubRayQuery({SensorId.LEFT: 1.5, SensorId.FRONT: 0.4})
    )

    state = classify(readings)

    assert state.left_distance == 1.5
    assert state.right_distance == 3.0


def test_same_readings_give_same_state() -> None:
    readings = SensorArray().sense(Vec3(), 0.0, StubRayQuery({SensorId.RIGHT: 2.0}))

    assert classify(readings) == classify(readings)
    assert classify(readings) == ObstacleState(right=True, left_distance=3.0, right_distance=2.0)

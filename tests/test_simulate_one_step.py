import logging

import pytest

from roverpy.core.rover import Rover
from roverpy.core.sensors import SensorId
from roverpy.core.world_model import WorldModel
from roverpy.modules.controller.blender import ManualIntent
from roverpy.runtime.config_loader import RoverConfig
from roverpy.simulation_apis.simulate_one_step import (
    STATUS_ACTIVE,
    STATUS_CLEAR,
    AvoidancePipeline,
    simulate_one_step,
)

FORWARD = ManualIntent.from_keys(forward=True)
DT = 1.0 / 60.0


def run(rover, world, pipeline, manual, frames):
    results = []
    for frame in range(1, frames + 1):
        world.set_runtime(frame, DT)
        results.append(simulate_one_step(rover, world, manual, pipeline))
    return results


def test_open_ground_passes_manual_drive(rover, default_config) -> None:
    world = WorldModel()
    world.set_runtime(1, DT)

    result = simulate_one_step(rover, world, FORWARD, AvoidancePipeline.from_config(default_config))

    assert result.decision.active is False
    assert result.command.move_direction == FORWARD.move_direction
    assert result.status == STATUS_CLEAR
    assert rover.z == pytest.approx(default_config.move_speed * DT)


def test_default_intent_holds_still(rover) -> None:
    world = WorldModel()
    world.set_runtime(1, DT)

    result = simulate_one_step(rover, world)

    assert result.command.rotation == 0.0
    assert rover.z == 0.0


def test_wall_ahead_triggers_avoidance(rover, wall_world, default_config) -> None:
    rover.place(0.0, 6.0, 0.0)

    result = simulate_one_step(rover, wall_world, FORWARD, AvoidancePipeline.from_config(default_config))

    assert result.readings[SensorId.FRONT].has_obstacle is True
    assert result.readings.front.distance == pytest.approx(1.75)
    assert result.state.front is True
    # Both diagonals see the wall and both sides are open: equal clearance turns left.
    assert result.state.front_left is True
    assert result.state.front_right is True
    assert result.decision.rotation == pytest.approx(-default_config.avoidance_strength)
    assert result.command.move_direction.z == pytest.approx(-0.5)
    assert result.status == STATUS_ACTIVE


def test_rover_driven_at_wall_never_reaches_it(rover, wall_world, default_config) -> None:
    pipeline = AvoidancePipeline.from_config(default_config)

    results = run(rover, wall_world, pipeline, FORWARD, 600)

    assert any(r.decision.active for r in results)
    assert not rover.contacts
    # The wall's near face sits at z = 7.75.
    assert rover.z < 7.75 - rover.radius


def test_reverse_escape_moves_back_while_avoiding(rover, wall_world, default_config) -> None:
    rover.place(0.0, 6.5, 0.0)
    pipeline = AvoidancePipeline.from_config(default_config)
    wall_world.set_runtime(1, DT)

    result = simulate_one_step(rover, wall_world, ManualIntent.from_keys(backward=True), pipeline)

    assert result.decision.active is True
    assert result.command.move_direction.z == -1.0
    assert rover.z < 6.5


def test_sensor_rays_are_drawn_each_tick(rover, wall_world) -> None:
    lines = []
    rover.set_draw_callback(lambda line, width, color: lines.append(color))
    wall_world.set_runtime(1, DT)

    simulate_one_step(rover, wall_world, FORWARD)

    assert len(lines) == 5


def test_status_changes_are_logged_once(rover, wall_world, caplog) -> None:
    pipeline = AvoidancePipeline()
    rover.place(0.0, 6.0, 0.0)

    with caplog.at_level(logging.INFO, logger="roverpy"):
        run(rover, wall_world, pipeline, ManualIntent(), 3)

    messages = [r.getMessage() for r in caplog.records if STATUS_ACTIVE in r.getMessage()]
    assert len(messages) == 1


def test_collisions_are_logged_on_contact(caplog) -> None:
    rover = Rover()
    world = WorldModel([{"name": "post", "x": 0.0, "z": 0.5, "length": 0.5, "width": 0.5}])
    # Zero dt keeps the rover in place while it backs off.
    world.set_runtime(1, 0.0)

    with caplog.at_level(logging.INFO, logger="roverpy.rover"):
        simulate_one_step(rover, world)
        simulate_one_step(rover, world)

    assert rover.contacts == {"post"}
    assert caplog.text.count("Rover collided with: post") == 1


def test_pipeline_from_config_uses_sensor_tuning(default_config) -> None:
    pipeline = AvoidancePipeline.from_config(default_config)

    assert pipeline.sensor_array.sensor_height == default_config.sensor_height
    assert pipeline.sensor_array.layer_mask == default_config.obstacle_layer_mask
    assert all(s.max_range == default_config.sensor_range for s in pipeline.sensor_array.sensors)


def test_rover_pipeline_keeps_status_across_ticks(rover, wall_world, caplog) -> None:
    rover.place(0.0, 6.0, 0.0)

    with caplog.at_level(logging.INFO, logger="roverpy"):
        for frame in range(1, 4):
            wall_world.set_runtime(frame, DT)
            result = simulate_one_step(rover, wall_world, ManualIntent())
            assert result.decision.active is True

    messages = [r.getMessage() for r in caplog.records if STATUS_ACTIVE in r.getMessage()]
    assert len(messages) == 1


def test_rover_pipeline_uses_rover_config(wall_world) -> None:
    rover = Rover(RoverConfig(sensor_range=1.0))
    rover.place(0.0, 6.0, 0.0)
    wall_world.set_runtime(1, DT)

    result = simulate_one_step(rover, wall_world, FORWARD)

    # The wall is 1.75 m ahead, beyond the 1 m sensors.
    assert result.decision.active is False
    assert all(s.max_range == 1.0 for s in rover.avoidance_pipeline.sensor_array.sensors)


def test_apply_config_rebuilds_rover_pipeline(rover, wall_world) -> None:
    wall_world.set_runtime(1, DT)
    simulate_one_step(rover, wall_world)
    first = rover.avoidance_pipeline

    simulate_one_step(rover, wall_world)
    assert rover.avoidance_pipeline is first

    rover.apply_config(RoverConfig(sensor_height=0.2))
    assert rover.avoidance_pipeline is None
    simulate_one_step(rover, wall_world)
    assert rover.avoidance_pipeline.sensor_array.sensor_height == 0.2

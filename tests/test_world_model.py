import pytest

from roverpy.core.vector import Vec3
from roverpy.core.world_model import WorldModel

ORIGIN = Vec3(0.0, 0.5, 0.0)
FORWARD = Vec3(0.0, 0.0, 1.0)


def box(**kwargs):
    values = {"name": "box", "x": 0.0, "z": 2.0, "length": 1.0, "width": 1.0}
    values.update(kwargs)
    return values


def test_ray_hits_near_face() -> None:
    world = WorldModel([box()])

    assert world.raycast(ORIGIN, FORWARD, 3.0) == pytest.approx(1.5)


def test_ray_misses_beyond_range() -> None:
    world = WorldModel([box(z=5.0)])

    assert world.raycast(ORIGIN, FORWARD, 3.0) is None


def test_ray_misses_obstacle_behind_or_beside() -> None:
    world = WorldModel([box(z=-2.0), box(x=3.0)])

    assert world.raycast(ORIGIN, FORWARD, 10.0) is None


def test_nearest_obstacle_wins() -> None:
    world = WorldModel([box(z=2.5, name="far"), box(z=1.0, length=0.2, name="near")])

    assert world.raycast(ORIGIN, FORWARD, 3.0) == pytest.approx(0.9)


def test_rotated_obstacle_is_hit_on_its_corner() -> None:
    world = WorldModel([box(heading_deg=45.0)])
    half_diagonal = 0.5 * 2 ** 0.5

    assert world.raycast(ORIGIN, FORWARD, 3.0) == pytest.approx(2.0 - half_diagonal)


def test_diagonal_ray() -> None:
    world = WorldModel([box(x=2.0, z=2.0)])
    direction = Vec3(1.0, 0.0, 1.0)

    assert world.raycast(ORIGIN, direction, 5.0) == pytest.approx(1.5 * 2 ** 0.5)


def test_low_obstacles_pass_under_the_ray() -> None:
    world = WorldModel([box(height=0.2)])

    assert world.raycast(ORIGIN, FORWARD, 3.0) is None
    assert world.raycast(Vec3(0.0, 0.1, 0.0), FORWARD, 3.0) == pytest.approx(1.5)


def test_layer_mask_filters_obstacles() -> None:
    world = WorldModel([box(layer=3)])

    assert world.raycast(ORIGIN, FORWARD, 3.0, layer_mask=1 << 3) == pytest.approx(1.5)
    assert world.raycast(ORIGIN, FORWARD, 3.0, layer_mask=1) is None
    assert world.raycast(ORIGIN, FORWARD, 3.0) == pytest.approx(1.5)


def test_ray_from_inside_hits_at_zero() -> None:
    world = WorldModel([box(z=0.0)])

    assert world.raycast(ORIGIN, FORWARD, 3.0) == 0.0


def test_tuple_obstacles_are_normalized() -> None:
    world = WorldModel([(1.0, 2.0, 3.0, 4.0, 10.0, 0.8, 2)])

    obstacle = world.obstacles[0]
    assert obstacle["x"] == 1.0
    assert obstacle["z"] == 2.0
    assert obstacle["length"] == 3.0
    assert obstacle["width"] == 4.0
    assert obstacle["heading_deg"] == 10.0
    assert obstacle["height"] == 0.8
    assert obstacle["layer"] == 2
    assert obstacle["name"] == "obstacle_0"


def test_colliding_reports_overlapping_obstacles() -> None:
    world = WorldModel([box(name="crate"), box(name="far", z=10.0)])

    assert world.colliding(0.0, 1.2, 0.4) == ["crate"]
    assert world.colliding(0.0, 0.0, 0.4) == []


def test_snapshot_copies_state() -> None:
    world = WorldModel([box()])
    world.set_runtime(7, 0.02)

    snap = world.snapshot()
    snap["obstacles"][0]["x"] = 99.0

    assert snap["frame_id"] == 7
    assert snap["dt"] == 0.02
    assert world.obstacles[0]["x"] == 0.0

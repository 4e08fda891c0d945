# RoverPy author, 2026.

import math
import random


def _as_num(v, default):
    try:
        n = float(v)
        if math.isfinite(n):
            return n
    except (TypeError, ValueError):
        pass
    return float(default)


def _clamp(v, lo, hi):
    return max(lo, min(hi, v))


def _rand_range(rng, a, b):
    if b <= a:
        return float(a)
    return rng.uniform(a, b)


def _rand_int(rng, a, b):
    lo = int(math.ceil(a))
    hi = int(math.floor(b))
    if hi <= lo:
        return lo
    return rng.randint(lo, hi)


def _ordered(lo, hi):
    if lo > hi:
        return hi, lo
    return lo, hi


def generate_random_world(cfg=None, rng=None):
    """
    Scatter box obstacles in a square arena around the rover start.

    cfg keys (all optional): obsMin, obsMax, obsSizeMin, obsSizeMax,
    arenaSize, clearRadius. Returns {"obstacles", "rover_init", "arena_size"}.
    """
    cfg = cfg if isinstance(cfg, dict) else {}
    rng = rng or random.Random()

    obs_min, obs_max = _ordered(
        _clamp(int(round(_as_num(cfg.get("obsMin"), 8))), 0, 80),
        _clamp(int(round(_as_num(cfg.get("obsMax"), 16))), 0, 80),
    )
    size_min, size_max = _ordered(
        _clamp(_as_num(cfg.get("obsSizeMin"), 0.8), 0.2, 10.0),
        _clamp(_as_num(cfg.get("obsSizeMax"), 2.5), 0.2, 10.0),
    )
    arena = _clamp(_as_num(cfg.get("arenaSize"), 40.0), 10.0, 400.0)
    clear_radius = _clamp(_as_num(cfg.get("clearRadius"), 4.0), 0.0, arena * 0.4)

    half = arena * 0.5
    rover_init = (0.0, 0.0, _rand_range(rng, 0.0, 360.0))
    target_count = _rand_int(rng, obs_min, obs_max)
    obstacles = []

    for i in range(target_count):
        for _try in range(36):
            x = _rand_range(rng, -half, half)
            z = _rand_range(rng, -half, half)
            size = _rand_range(rng, size_min, size_max)
            length = _rand_range(rng, size * 0.8, size * 1.4)
            width = _rand_range(rng, size * 0.4, size * 0.85)

            # Keep the start pose free, including the obstacle's own extent.
            if math.hypot(x - rover_init[0], z - rover_init[1]) < clear_radius + length * 0.5:
                continue

            min_sep = max(1.0, length * 0.7)
            too_close = False
            for o in obstacles:
                if math.hypot(x - o["x"], z - o["z"]) < (min_sep + o["length"] * 0.5):
                    too_close = True
                    break
            if too_close:
                continue

            obstacles.append(
                {
                    "name": f"box_{i}",
                    "x": x,
                    "z": z,
                    "length": length,
                    "width": width,
                    "heading_deg": _rand_range(rng, 0.0, 180.0),
                    "height": _rand_range(rng, 0.6, 2.0),
                }
            )
            break

    # Arena walls keep the rover inside.
    for name, x, z, length, heading in (
        ("wall_north", 0.0, half, arena, 90.0),
        ("wall_south", 0.0, -half, arena, 90.0),
        ("wall_east", half, 0.0, arena, 0.0),
        ("wall_west", -half, 0.0, arena, 0.0),
    ):
        obstacles.append(
            {"name": name, "x": x, "z": z, "length": length, "width": 0.5,
             "heading_deg": heading, "height": 2.0}
        )

    return {"obstacles": obstacles, "rover_init": rover_init, "arena_size": arena}

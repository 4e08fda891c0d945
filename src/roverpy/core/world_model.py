# RoverPy author, 2026.

import logging
import math

logger = logging.getLogger(__name__)


class WorldModel:
    """
    Runtime world passed to simulate_one_step(rover, world_model).

    frame_id: int
    dt: float (seconds)
    obstacles:
      list of dicts: name, x, z, length, width, heading_deg, height, layer
      (oriented rectangles on the ground plane; length runs along the
      obstacle heading, height is measured up from the ground)

    Methods:
      set_runtime(...), set_obstacles(...), snapshot(),
      raycast(origin, direction, max_distance, layer_mask), colliding(x, z, radius)
    """

    def __init__(self, obstacles=None):
        self.frame_id = 0
        self.dt = 0.0
        self.obstacles = []
        if obstacles:
            self.set_obstacles(obstacles)

    @staticmethod
    def _to_obstacle_dicts(obstacles):
        if not isinstance(obstacles, list):
            obstacles = list(obstacles or [])

        out = []
        for i, obstacle in enumerate(obstacles):
            if isinstance(obstacle, (list, tuple)):
                keys = ("x", "z", "length", "width", "heading_deg", "height", "layer")
                obstacle = dict(zip(keys, obstacle))
            elif not isinstance(obstacle, dict):
                obstacle = dict(obstacle)
            out.append(
                {
                    "name": str(obstacle.get("name", f"obstacle_{i}")),
                    "x": float(obstacle.get("x", 0.0)),
                    "z": float(obstacle.get("z", 0.0)),
                    "length": max(0.0, float(obstacle.get("length", 1.0))),
                    "width": max(0.0, float(obstacle.get("width", 1.0))),
                    "heading_deg": float(obstacle.get("heading_deg", 0.0)),
                    "height": float(obstacle.get("height", 1.0)),
                    "layer": int(obstacle.get("layer", 0)),
                }
            )
        return out

    def set_runtime(self, frame_id, dt):
        self.frame_id = int(frame_id)
        self.dt = float(dt)

    def set_obstacles(self, obstacles):
        self.obstacles = self._to_obstacle_dicts(obstacles)
        logger.debug("world has %d obstacles", len(self.obstacles))

    def snapshot(self):
        return {
            "frame_id": self.frame_id,
            "dt": self.dt,
            "obstacles": [dict(o) for o in self.obstacles],
        }

    @staticmethod
    def _to_local(obstacle, px, pz):
        # Obstacle frame: u along its heading (length), v across it (width).
        h = math.radians(obstacle["heading_deg"])
        c = math.cos(h)
        s = math.sin(h)
        dx = px - obstacle["x"]
        dz = pz - obstacle["z"]
        return dx * s + dz * c, dx * c - dz * s

    @staticmethod
    def _in_layer(obstacle, layer_mask):
        return bool(int(layer_mask) & (1 << obstacle["layer"]))

    def _ray_hit(self, obstacle, origin, direction, max_distance):
        if origin[1] < 0.0 or origin[1] > obstacle["height"]:
            return None

        ou, ov = self._to_local(obstacle, origin[0], origin[2])
        h = math.radians(obstacle["heading_deg"])
        du = direction[0] * math.sin(h) + direction[2] * math.cos(h)
        dv = direction[0] * math.cos(h) - direction[2] * math.sin(h)

        t_near = 0.0
        t_far = float(max_distance)
        for o, d, half in ((ou, du, obstacle["length"] * 0.5), (ov, dv, obstacle["width"] * 0.5)):
            if abs(d) < 1e-12:
                if o < -half or o > half:
                    return None
                continue
            t1 = (-half - o) / d
            t2 = (half - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)
            if t_near > t_far:
                return None
        return t_near

    def raycast(self, origin, direction, max_distance, layer_mask=-1):
        """Nearest hit distance along a horizontal ray, or None within max_distance."""
        planar = math.hypot(direction[0], direction[2])
        if planar < 1e-12:
            return None
        unit = (direction[0] / planar, 0.0, direction[2] / planar)

        best = None
        for obstacle in self.obstacles:
            if not self._in_layer(obstacle, layer_mask):
                continue
            t = self._ray_hit(obstacle, origin, unit, max_distance)
            if t is not None and (best is None or t < best):
                best = t
        return best

    def colliding(self, x, z, radius):
        """Names of obstacles overlapping a circle on the ground plane."""
        hits = []
        for obstacle in self.obstacles:
            u, v = self._to_local(obstacle, x, z)
            half_l = obstacle["length"] * 0.5
            half_w = obstacle["width"] * 0.5
            cu = max(-half_l, min(half_l, u))
            cv = max(-half_w, min(half_w, v))
            if math.hypot(u - cu, v - cv) <= radius:
                hits.append(obstacle["name"])
        return hits

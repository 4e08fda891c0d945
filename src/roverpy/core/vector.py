# RoverPy author, 2026.

"""
Vec3 value type shared by the sensors, controller and rover.

Frame convention (vehicle-local and world alike):
    x -- right
    y -- up
    z -- forward  (negative z is reverse)

Headings are yaw angles in degrees about +y, 0 facing +z, increasing
clockwise seen from above, so a positive rotation rate turns right.
"""

import math
from typing import NamedTuple


class Vec3(NamedTuple):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other):
        return Vec3(self.x + other[0], self.y + other[1], self.z + other[2])

    def __mul__(self, k):
        return self.scaled(k)

    __rmul__ = __mul__

    def scaled(self, k):
        return Vec3(self.x * k, self.y * k, self.z * k)

    def length(self):
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self):
        n = self.length()
        if n < 1e-12:
            return ZERO
        return Vec3(self.x / n, self.y / n, self.z / n)

    def with_z(self, z):
        return Vec3(self.x, self.y, float(z))


ZERO = Vec3(0.0, 0.0, 0.0)
UP = Vec3(0.0, 1.0, 0.0)
FORWARD = Vec3(0.0, 0.0, 1.0)
BACK = Vec3(0.0, 0.0, -1.0)
LEFT = Vec3(-1.0, 0.0, 0.0)
RIGHT = Vec3(1.0, 0.0, 0.0)


def rotate_yaw(v, heading_deg):
    """Rotate a local-frame vector into the world frame by a yaw heading."""
    h = math.radians(heading_deg)
    c = math.cos(h)
    s = math.sin(h)
    return Vec3(v[0] * c + v[2] * s, v[1], -v[0] * s + v[2] * c)

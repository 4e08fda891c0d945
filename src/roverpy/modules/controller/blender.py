# RoverPy author, 2026.

# blender.py
# InputBlender.blend(manual, decision) -> BlendedCommand
#
# Path clear: manual intent passes through untouched.
# Avoidance active: the avoidance command wins, except that
#   - a reverse request (manual z < 0) replaces the z axis, so the operator
#     can always back out of a trap;
#   - a manual turn in the same direction as the avoidance turn (or no turn)
#     takes the larger magnitude; an opposing turn is ignored.

from dataclasses import dataclass

from roverpy.core.vector import BACK, FORWARD, ZERO, Vec3


@dataclass(frozen=True)
class ManualIntent:
    move_direction: Vec3 = ZERO
    rotation: float = 0.0

    @classmethod
    def from_keys(cls, forward=False, backward=False, left=False, right=False):
        move = ZERO
        if forward:
            move = move + FORWARD
        if backward:
            move = move + BACK
        rotation = 0.0
        if left:
            rotation = -1.0
        if right:
            rotation = 1.0
        return cls(Vec3(*move), rotation)


@dataclass(frozen=True)
class BlendedCommand:
    move_direction: Vec3 = ZERO
    rotation: float = 0.0


def sign(v):
    """Sign with sign(0) == +1, the convention the blend rules are tuned for."""
    return 1.0 if v >= 0.0 else -1.0


class InputBlender:
    @staticmethod
    def blend(manual, decision):
        if not decision.active:
            return BlendedCommand(Vec3(*manual.move_direction), float(manual.rotation))

        move = Vec3(*decision.direction)
        rotation = decision.rotation

        if manual.move_direction[2] < 0.0:
            move = move.with_z(manual.move_direction[2])

        if manual.rotation == 0.0 or sign(manual.rotation) == sign(decision.rotation):
            rotation = max(abs(manual.rotation), abs(decision.rotation)) * sign(decision.rotation)

        return BlendedCommand(move, rotation)

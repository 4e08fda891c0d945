# RoverPy author, 2026.

# controller_avoidance.py
# AvoidanceController.decide(obstacle_state) -> AvoidanceDecision
# rotation convention: -1 left, +1 right (scaled by avoidance_strength)
#
# Rules, in priority order (rotation adds up, direction comes from rule 1 only):
#   1. front blocked: turn right if the right side is clear, else left if the
#      left side is clear, else toward the larger raw side clearance (ties
#      turn left); back off at reverse_bias.
#   2. left blocked, front clear: += side_gain * strength
#   3. right blocked, front clear: -= side_gain * strength
# Rules 2 and 3 stack when the rover is pinched with a clear front.

import logging
from dataclasses import dataclass

from roverpy.core.vector import ZERO, Vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvoidanceDecision:
    active: bool = False
    direction: Vec3 = ZERO
    rotation: float = 0.0

    @classmethod
    def idle(cls):
        return cls()


def clamp(v, lo, hi):
    return max(lo, min(hi, v))


class AvoidanceController:
    def __init__(self, avoidance_strength=2.0, reverse_bias=0.5, side_gain=0.5, max_rotation=None):
        self.avoidance_strength = float(avoidance_strength)
        self.reverse_bias = float(reverse_bias)
        self.side_gain = float(side_gain)
        self.max_rotation = None if max_rotation is None else abs(float(max_rotation))

    @classmethod
    def from_config(cls, config):
        return cls(
            avoidance_strength=config.avoidance_strength,
            reverse_bias=config.reverse_bias,
            side_gain=config.side_gain,
            max_rotation=config.max_rotation,
        )

    def _front_turn(self, state):
        strength = self.avoidance_strength
        if not state.right and not state.front_right:
            return strength
        if not state.left and not state.front_left:
            return -strength

        left_clearance = 0.0 if state.left else state.left_distance
        right_clearance = 0.0 if state.right else state.right_distance
        if right_clearance > left_clearance:
            return strength
        return -strength

    def decide(self, state):
        active = False
        direction = ZERO
        rotation = 0.0

        if state.front:
            active = True
            rotation = self._front_turn(state)
            direction = Vec3(0.0, 0.0, -self.reverse_bias)

        if state.left and not state.front:
            active = True
            rotation += self.avoidance_strength * self.side_gain

        if state.right and not state.front:
            active = True
            rotation -= self.avoidance_strength * self.side_gain

        if self.max_rotation is not None:
            rotation = clamp(rotation, -self.max_rotation, self.max_rotation)

        if not active:
            return AvoidanceDecision.idle()

        logger.debug("avoidance rotation=%.2f direction=%s", rotation, direction)
        return AvoidanceDecision(active=True, direction=direction, rotation=rotation)

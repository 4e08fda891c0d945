# RoverPy author, 2026.

# Convention: rotation_input = -1 left, +1 right; move_input is rover-local (x right, z forward).

import math


class State:
    def __init__(self):
        # Runtime fields are injected from the rover each frame.
        pass


def step(state, dt):
    h = math.radians(state.heading_deg)
    mx, _, mz = state.move_input
    state.vx = (mx * math.cos(h) + mz * math.sin(h)) * state.move_speed
    state.vz = (-mx * math.sin(h) + mz * math.cos(h)) * state.move_speed

    if abs(state.rotation_input) > state.rotation_deadband:
        state.yaw_rate = state.rotation_input * state.rotate_speed
    else:
        state.yaw_rate = 0.0

    state.x += state.vx * dt
    state.z += state.vz * dt
    state.heading_deg = (state.heading_deg + state.yaw_rate * dt) % 360.0

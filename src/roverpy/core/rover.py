# RoverPy author, 2026.

"""
Rover body and its locomotion hook.

Logs under the fixed name "roverpy.rover" rather than the module path, so
battery, collision and log(msg) messages read as coming from the rover.
"""

import logging

from roverpy.core.vector import Vec3
from roverpy.rover_models import MODELS

logger = logging.getLogger("roverpy.rover")


class Rover:
    """
    Rover body passed to simulate_one_step(rover, world_model).

    Pose (integrated by the locomotion model each drive()):
        x, y, z        -- position in meters (y up, ground contact at y)
        heading_deg    -- yaw in degrees (0 = +z, clockwise seen from above)
        vx, vz         -- world velocity in m/s
        yaw_rate       -- deg/s, positive turns right

    Tuning:
        move_speed         -- m/s at full move input
        rotate_speed       -- deg/s at rotation input 1
        rotation_deadband  -- rotation inputs at or below this do not turn
        length, width      -- body footprint (m)

    Battery:
        max_battery_level, battery_level, battery_drain_rate (per second while moving)

    Last command (set by drive()):
        move_input     -- Vec3, rover-local
        rotation_input -- float

    contacts           -- names of obstacles currently touching the body

    config             -- last RoverConfig applied (None for defaults)
    avoidance_pipeline -- pipeline simulate_one_step uses when given none;
                          built on first use, dropped by apply_config()

    Debug helpers:
        log(msg), draw_line(line, width=0.05, color='rgba(...)')
    """

    def __init__(self, config=None, model="direct_drive"):
        self.x = 0.0
        self.y = 0.0
        self.z = 0.0
        self.heading_deg = 0.0
        self.vx = 0.0
        self.vz = 0.0
        self.yaw_rate = 0.0
        self.move_speed = 10.0
        self.rotate_speed = 150.0
        self.rotation_deadband = 0.1
        self.length = 1.2
        self.width = 0.8
        self.max_battery_level = 100.0
        self.battery_level = self.max_battery_level
        self.battery_drain_rate = 1.0
        self.move_input = Vec3()
        self.rotation_input = 0.0
        self.contacts = set()
        self.config = None
        self.avoidance_pipeline = None
        self.model = None
        self._model_step_fn = None
        self._model_state = None
        self._draw_line_cb = None
        if config is not None:
            self.apply_config(config)
        if model:
            mod = MODELS[model]
            self.load_model(mod.step, mod.State(), model)

    @property
    def position(self):
        return Vec3(self.x, self.y, self.z)

    @property
    def radius(self):
        return 0.5 * min(self.length, self.width)

    def apply_config(self, config):
        self.config = config
        self.avoidance_pipeline = None
        self.move_speed = float(config.move_speed)
        self.rotate_speed = float(config.rotate_speed)
        self.rotation_deadband = float(config.rotation_deadband)
        self.length = float(config.length)
        self.width = float(config.width)
        self.max_battery_level = float(config.max_battery_level)
        self.battery_level = min(self.battery_level, self.max_battery_level)
        self.battery_drain_rate = float(config.battery_drain_rate)

    def place(self, x, z, heading_deg=0.0):
        self.x = float(x)
        self.z = float(z)
        self.heading_deg = float(heading_deg)
        self.vx = self.vz = self.yaw_rate = 0.0

    def load_model(self, step_fn, state_obj=None, model_name=None):
        if step_fn is None or not callable(step_fn):
            raise ValueError("step_fn must be callable: step(state, dt)")
        if state_obj is None:
            class _State:
                pass
            state_obj = _State()
        self._model_step_fn = step_fn
        self._model_state = state_obj
        if model_name:
            self.model = str(model_name)

    def has_model(self):
        return self._model_step_fn is not None and self._model_state is not None

    def export_rover_state(self):
        s = self._model_state
        s.x = self.x
        s.z = self.z
        s.heading_deg = self.heading_deg
        s.vx = self.vx
        s.vz = self.vz
        s.yaw_rate = self.yaw_rate
        s.move_speed = self.move_speed
        s.rotate_speed = self.rotate_speed
        s.rotation_deadband = self.rotation_deadband
        s.move_input = self.move_input
        s.rotation_input = self.rotation_input

    def import_rover_state(self):
        s = self._model_state
        for attr in ("x", "z", "heading_deg", "vx", "vz", "yaw_rate"):
            if hasattr(s, attr):
                setattr(self, attr, float(getattr(s, attr)))

    def drive(self, command, dt):
        """Apply a BlendedCommand for dt seconds."""
        if not self.has_model():
            raise RuntimeError("No model loaded. Call load_model(step_fn, state_obj) first.")
        self.move_input = Vec3(*command.move_direction)
        self.rotation_input = float(command.rotation)

        if self.battery_level <= 0.0:
            self.vx = self.vz = self.yaw_rate = 0.0
            return

        dt = float(dt)
        self.export_rover_state()
        self._model_step_fn(self._model_state, dt)
        self.import_rover_state()
        self._drain_battery(dt)

    def _drain_battery(self, dt):
        if self.move_input.length() <= 0.1 and abs(self.rotation_input) <= 0.1:
            return
        self.battery_level = max(0.0, self.battery_level - self.battery_drain_rate * dt)
        if self.battery_level <= 0.0:
            self.vx = self.vz = self.yaw_rate = 0.0
            logger.warning("Battery depleted! Rover stopped.")

    def recharge(self):
        self.battery_level = self.max_battery_level
        logger.info("Battery recharged to %.0f%%", self.max_battery_level)

    def is_moving(self):
        speed = (self.vx * self.vx + self.vz * self.vz) ** 0.5
        return speed > 0.1 or abs(self.yaw_rate) > 0.1

    def on_collision(self, name):
        logger.info("Rover collided with: %s", name)

    def set_draw_callback(self, callback):
        self._draw_line_cb = callback

    def log(self, msg):
        logger.info("%s", msg)

    def draw_line(self, line, width=0.05, color="rgba(34,197,94,.9)"):
        if self._draw_line_cb is not None:
            self._draw_line_cb(line, width, color)

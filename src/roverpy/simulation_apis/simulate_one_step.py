# RoverPy author, 2026.

# simulate_one_step.py
# simulate_one_step(rover, world_model, manual_intent) -- called every frame
#
# One tick, strictly in order:
#   sense     SensorArray.sense(rover.position, rover.heading_deg, world_model.raycast)
#   classify  classify(readings) -> ObstacleState
#   decide    AvoidanceController.decide(state) -> AvoidanceDecision
#   blend     InputBlender.blend(manual_intent, decision) -> BlendedCommand
#   drive     rover.drive(command, world_model.dt)
#   draw      one sensor ray per sensor through rover.draw_line
#
# Rover state:
#   rover.x, rover.y, rover.z, rover.heading_deg, rover.vx, rover.vz, rover.yaw_rate
#   rover.battery_level, rover.move_input, rover.rotation_input
#
# World model:
#   world_model.frame_id, world_model.dt
#   world_model.obstacles list of:
#       {name, x, z, length, width, heading_deg, height, layer}

import logging
from dataclasses import dataclass

from roverpy.core.sensors import SensorArray, SensorReadings
from roverpy.modules.classifier.obstacle_classifier import ObstacleState, classify
from roverpy.modules.controller.blender import BlendedCommand, InputBlender, ManualIntent
from roverpy.modules.controller.controller_avoidance import AvoidanceController, AvoidanceDecision
from roverpy.runtime.bindings import SensorRayPainter
from roverpy.runtime.config_loader import RoverConfig

logger = logging.getLogger(__name__)

STATUS_ACTIVE = "OBSTACLE AVOIDANCE ACTIVE"
STATUS_CLEAR = "Path Clear"


@dataclass(frozen=True)
class TickResult:
    readings: SensorReadings
    state: ObstacleState
    decision: AvoidanceDecision
    command: BlendedCommand

    @property
    def status(self):
        return STATUS_ACTIVE if self.decision.active else STATUS_CLEAR


class AvoidancePipeline:
    """Sensor array, controller and blender for one rover."""

    def __init__(self, sensor_array=None, controller=None, blender=None, painter=None):
        self.sensor_array = sensor_array or SensorArray()
        self.controller = controller or AvoidanceController()
        self.blender = blender or InputBlender()
        self.painter = painter
        self.last_status = None

    @classmethod
    def from_config(cls, config=None, painter=None):
        config = config or RoverConfig()
        sensor_array = SensorArray(
            SensorArray.default_sensors(config.sensor_range),
            sensor_height=config.sensor_height,
            layer_mask=config.obstacle_layer_mask,
        )
        return cls(sensor_array, AvoidanceController.from_config(config), InputBlender(), painter)

    def evaluate(self, position, heading_deg, ray_query, manual_intent):
        readings = self.sensor_array.sense(position, heading_deg, ray_query)
        state = classify(readings)
        decision = self.controller.decide(state)
        command = self.blender.blend(manual_intent, decision)
        return TickResult(readings, state, decision, command)

    def report_status(self, result, frame_id):
        status = result.status
        if status != self.last_status:
            logger.info("frame %d: %s", frame_id, status)
            self.last_status = status


def simulate_one_step(rover, world_model, manual_intent=None, pipeline=None):
    if pipeline is None:
        if rover.avoidance_pipeline is None:
            rover.avoidance_pipeline = AvoidancePipeline.from_config(rover.config)
        pipeline = rover.avoidance_pipeline
    if manual_intent is None:
        manual_intent = ManualIntent()

    result = pipeline.evaluate(rover.position, rover.heading_deg, world_model.raycast, manual_intent)
    rover.drive(result.command, world_model.dt)

    painter = pipeline.painter or SensorRayPainter(rover.draw_line)
    painter.paint(result.readings)

    contacts = set(world_model.colliding(rover.x, rover.z, rover.radius))
    for name in sorted(contacts - rover.contacts):
        rover.on_collision(name)
    rover.contacts = contacts

    pipeline.report_status(result, world_model.frame_id)
    if world_model.frame_id % 120 == 0:
        logger.debug(
            "frame %d move=%s rot=%.2f battery=%.1f",
            world_model.frame_id,
            tuple(round(v, 2) for v in result.command.move_direction),
            result.command.rotation,
            rover.battery_level,
        )
    return result

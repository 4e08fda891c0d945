# RoverPy author, 2026.

from roverpy.modules.controller.blender import BlendedCommand, InputBlender, ManualIntent
from roverpy.modules.controller.controller_avoidance import AvoidanceController, AvoidanceDecision

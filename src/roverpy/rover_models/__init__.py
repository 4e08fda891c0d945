# RoverPy author, 2026.

from roverpy.rover_models import direct_drive

MODELS = {
    "direct_drive": direct_drive,
}

# RoverPy author, 2026.

from roverpy.modules.classifier.obstacle_classifier import ObstacleState, classify

# RoverPy author, 2026.

# RoverPy author, 2026.

# Rover starts at the origin facing +z.
rover_init = (0.0, 0.0, 0.0)

# (x, z, length, width, heading_deg[, height, layer])
obstacles = [
    {"name": "crate", "x": 0.0, "z": 8.0, "length": 1.5, "width": 3.0, "heading_deg": 0.0},
    {"name": "rock", "x": 4.0, "z": 14.0, "length": 2.0, "width": 2.0, "heading_deg": 30.0},
    {"name": "curb", "x": -3.0, "z": 5.0, "length": 4.0, "width": 0.3, "heading_deg": 0.0, "height": 0.2},
    (0.0, 20.0, 0.5, 16.0, 0.0, 2.0),
    (-8.0, 10.0, 20.0, 0.5, 0.0, 2.0),
    (8.0, 10.0, 20.0, 0.5, 0.0, 2.0),
]

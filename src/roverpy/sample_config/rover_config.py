# RoverPy author, 2026.

rover_config = {
    "move_speed": 10.0,
    "rotate_speed": 150.0,
    "rotation_deadband": 0.1,
    "max_battery_level": 100.0,
    "battery_drain_rate": 1.0,
    "sensor_range": 3.0,
    "sensor_height": 0.5,
    "obstacle_layer_mask": -1,
    "avoidance_strength": 2.0,
    "reverse_bias": 0.5,
    "side_gain": 0.5,
    "max_rotation": None,
    "sensor_line_width": 0.05,
    "length": 1.2,
    "width": 0.8,
}

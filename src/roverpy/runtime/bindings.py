# RoverPy author, 2026.

class _PointNormalizer:
    """Ground-plane points for drawing: Vec3 / (x, y, z) map to (x, z)."""

    @staticmethod
    def coerce_point(value):
        if isinstance(value, (list, tuple)):
            try:
                if len(value) >= 3:
                    return [float(value[0]), float(value[2])]
                if len(value) == 2:
                    return [float(value[0]), float(value[1])]
            except (TypeError, ValueError):
                return None
            return None

        if isinstance(value, dict) and "x" in value and "z" in value:
            try:
                return [float(value["x"]), float(value["z"])]
            except (TypeError, ValueError):
                return None

        return None

    @classmethod
    def normalize_line(cls, line):
        if isinstance(line, (list, tuple)) and len(line) == 4 and all(
            isinstance(v, (int, float)) for v in line
        ):
            return [
                [float(line[0]), float(line[1])],
                [float(line[2]), float(line[3])],
            ]

        if isinstance(line, dict):
            line = line.get("points", line.get("line", []))

        points = []
        for point in line or []:
            parsed = cls.coerce_point(point)
            if parsed is not None:
                points.append(parsed)
        return points


normalize_line = _PointNormalizer.normalize_line


class SensorRayPainter:
    """
    Visualization sink for one tick of sensor readings.

    paint(readings) draws one line per sensor from the ray origin to its end
    (hit point, or full range when clear) through draw_line(line, width, color).
    Purely observational.
    """

    def __init__(self, draw_line, clear_color="rgba(34,197,94,.9)",
                 obstacle_color="rgba(239,68,68,.9)", line_width=0.05):
        self._draw_line = draw_line
        self.clear_color = clear_color
        self.obstacle_color = obstacle_color
        self.line_width = float(line_width)

    @classmethod
    def from_config(cls, draw_line, config):
        return cls(
            draw_line,
            clear_color=config.clear_sensor_color,
            obstacle_color=config.obstacle_detected_color,
            line_width=config.sensor_line_width,
        )

    def paint(self, readings):
        for sensor_id in readings:
            reading = readings[sensor_id]
            color = self.obstacle_color if reading.has_obstacle else self.clear_color
            self._draw_line([reading.origin, reading.end], self.line_width, color)

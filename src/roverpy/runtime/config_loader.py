# RoverPy author, 2026.

import logging
import math
import pathlib
from dataclasses import dataclass, fields, replace

logger = logging.getLogger(__name__)

SAMPLE_DIR = pathlib.Path(__file__).resolve().parent.parent / "sample_config"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class RoverConfig:
    move_speed: float = 10.0
    rotate_speed: float = 150.0
    rotation_deadband: float = 0.1
    max_battery_level: float = 100.0
    battery_drain_rate: float = 1.0
    sensor_range: float = 3.0
    sensor_height: float = 0.5
    obstacle_layer_mask: int = -1
    avoidance_strength: float = 2.0
    reverse_bias: float = 0.5
    side_gain: float = 0.5
    max_rotation: float | None = None
    clear_sensor_color: str = "rgba(34,197,94,.9)"
    obstacle_detected_color: str = "rgba(239,68,68,.9)"
    sensor_line_width: float = 0.05
    length: float = 1.2
    width: float = 0.8


_POSITIVE = (
    "move_speed", "rotate_speed", "max_battery_level", "sensor_range",
    "avoidance_strength", "sensor_line_width", "length", "width",
)
_NON_NEGATIVE = ("rotation_deadband", "battery_drain_rate", "sensor_height", "reverse_bias", "side_gain")
_STRINGS = ("clear_sensor_color", "obstacle_detected_color")


def _as_number(key, value):
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        n = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number, got {value!r}") from None
    if not math.isfinite(n):
        raise ConfigError(f"{key} must be finite, got {value!r}")
    return n


def build_rover_config(cfg):
    if not isinstance(cfg, dict):
        raise ConfigError("rover_config must be a dict.")

    known = {f.name for f in fields(RoverConfig)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ConfigError(f"Unknown rover_config keys: {', '.join(unknown)}")

    values = {}
    for key, value in cfg.items():
        if key in _STRINGS:
            values[key] = str(value)
        elif key == "obstacle_layer_mask":
            values[key] = int(_as_number(key, value))
        elif key == "max_rotation":
            values[key] = None if value is None else _as_number(key, value)
        else:
            values[key] = _as_number(key, value)

    for key in _POSITIVE:
        if key in values and values[key] <= 0.0:
            raise ConfigError(f"{key} must be positive, got {values[key]}")
    for key in _NON_NEGATIVE:
        if key in values and values[key] < 0.0:
            raise ConfigError(f"{key} must not be negative, got {values[key]}")
    if values.get("max_rotation") is not None and values["max_rotation"] <= 0.0:
        raise ConfigError(f"max_rotation must be positive or None, got {values['max_rotation']}")

    return replace(RoverConfig(), **values)


class RoverConfigLoader:
    def __init__(self, config_symbol="rover_config"):
        self.config_symbol = config_symbol

    def load_namespace(self, source_code):
        namespace = {}
        try:
            exec(source_code, namespace, namespace)
        except SyntaxError as exc:
            raise ConfigError(f"Config source does not parse: {exc}") from exc
        return namespace

    def load(self, source_code):
        namespace = self.load_namespace(source_code)
        config_obj = namespace.get(self.config_symbol)
        if config_obj is None:
            raise ConfigError(f"No dict '{self.config_symbol}' found.")
        return build_rover_config(config_obj)


def _read(path, default_name):
    path = pathlib.Path(path) if path is not None else SAMPLE_DIR / default_name
    try:
        return path, path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc


def load_rover_config(path=None):
    path, source = _read(path, "rover_config.py")
    config = RoverConfigLoader().load(source)
    logger.debug("loaded rover config from %s", path)
    return config


def load_world_config(path=None):
    """Returns (obstacles, rover_init) from a world config source."""
    path, source = _read(path, "world_config.py")
    namespace = RoverConfigLoader().load_namespace(source)

    obstacles = namespace.get("obstacles", [])
    if not isinstance(obstacles, (list, tuple)):
        raise ConfigError("obstacles must be a list.")

    rover_init = namespace.get("rover_init", (0.0, 0.0, 0.0))
    if not isinstance(rover_init, (list, tuple)) or len(rover_init) < 2:
        raise ConfigError("rover_init must be (x, z) or (x, z, heading_deg).")
    x = _as_number("rover_init.x", rover_init[0])
    z = _as_number("rover_init.z", rover_init[1])
    heading = _as_number("rover_init.heading_deg", rover_init[2]) if len(rover_init) >= 3 else 0.0

    logger.debug("loaded world config from %s (%d obstacles)", path, len(obstacles))
    return list(obstacles), (x, z, heading)

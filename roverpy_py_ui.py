#!/usr/bin/env python3
# RoverPy author, 2026.

"""RoverPy Python UI (runtime viewer).

- Drives the rover with WASD / arrow keys; obstacle avoidance overrides when needed.
- Auto-reloads rover and world config on file save.
- Draws obstacles, sensor rays and the avoidance status.
"""

from __future__ import annotations

import logging
import math
import pathlib
import random
import sys
import time

try:
    import tkinter as tk
    from tkinter import filedialog, ttk
except ModuleNotFoundError as exc:
    if exc.name == "tkinter":
        sys.stderr.write(
            "Error: tkinter is not installed for this Python interpreter.\n"
            "Install it, then rerun:\n"
            "  Ubuntu/Debian: sudo apt-get install python3-tk\n"
            "  Fedora:        sudo dnf install python3-tkinter\n"
            "  Arch:          sudo pacman -S tk\n"
            "  macOS (brew):  brew install python-tk\n"
        )
        raise SystemExit(1)
    raise

from roverpy.core.rover import Rover
from roverpy.core.world_model import WorldModel
from roverpy.modules.controller.blender import ManualIntent
from roverpy.runtime.bindings import SensorRayPainter, normalize_line
from roverpy.runtime.config_loader import SAMPLE_DIR, ConfigError, load_rover_config, load_world_config
from roverpy.runtime.log import setup_logging
from roverpy.simulation_apis.random_world_generator import generate_random_world
from roverpy.simulation_apis.simulate_one_step import AvoidancePipeline, simulate_one_step

logger = logging.getLogger("roverpy.ui")

PATHS = {
    "config": SAMPLE_DIR / "rover_config.py",
    "world": SAMPLE_DIR / "world_config.py",
}

KEYS = {
    "w": "forward", "Up": "forward",
    "s": "backward", "Down": "backward",
    "a": "left", "Left": "left",
    "d": "right", "Right": "right",
}


class _UILogHandler(logging.Handler):
    def __init__(self, ui):
        super().__init__()
        self.ui = ui

    def emit(self, record):
        self.ui.log(self.format(record))


class RoverPyUI:
    def __init__(self, root: tk.Tk):
        self.root = root
        self.root.title("RoverPy 1.0 (Python Runtime UI)")
        self.root.geometry("1100x820")

        self.config = None
        self.rover = Rover()
        self.world_model = WorldModel()
        self.pipeline = AvoidancePipeline()
        self.rover_init = (0.0, 0.0, 0.0)

        self.frame_id = 0
        self.last_tick = time.perf_counter()
        self.paused = False
        self.step_once = False
        self.time_scale = 1.0
        self.manual_keys = {"forward": False, "backward": False, "left": False, "right": False}
        self.last_result = None

        self.logs: list[str] = []
        self.draw_lines: list[dict] = []

        self.config_path: pathlib.Path = PATHS["config"]
        self.world_path: pathlib.Path = PATHS["world"]
        self.file_mtimes: dict[pathlib.Path, int] = {}
        self.reload_cooldown = 0.0

        self.status_var = tk.StringVar(value="Watching config files...")

        self._build_ui()
        self._bind_keys()
        self._install_log_handler()
        self.rover.set_draw_callback(self._append_draw_line)
        self._force_reload_all()
        self._tick()

    def _build_ui(self):
        root_frame = ttk.Frame(self.root)
        root_frame.pack(fill=tk.BOTH, expand=True)

        controls = ttk.Frame(root_frame)
        controls.pack(fill=tk.X, padx=8, pady=8)

        ttk.Button(controls, text="Pause/Resume", command=self._toggle_pause).grid(row=0, column=0, padx=4, pady=4)
        ttk.Button(controls, text="1 Step", command=self._step_once).grid(row=0, column=1, padx=4, pady=4)
        ttk.Button(controls, text="Restart", command=self._restart).grid(row=0, column=2, padx=4, pady=4)
        ttk.Button(controls, text="Recharge", command=self.rover.recharge).grid(row=0, column=3, padx=4, pady=4)
        ttk.Button(controls, text="Random World", command=self._random_world).grid(row=0, column=4, padx=4, pady=4)
        ttk.Button(controls, text="Reload Now", command=self._force_reload_all).grid(row=0, column=5, padx=4, pady=4)
        ttk.Button(controls, text="Load Rover Config", command=self._load_config_file).grid(row=0, column=6, padx=4, pady=4)
        ttk.Button(controls, text="Load World Config", command=self._load_world_file).grid(row=0, column=7, padx=4, pady=4)

        ttk.Label(controls, text="Time Scale").grid(row=1, column=0, sticky="w", padx=4)
        self.time_scale_var = tk.DoubleVar(value=1.0)
        ttk.Scale(controls, from_=0.2, to=2.5, variable=self.time_scale_var, command=self._on_time_scale).grid(
            row=1, column=1, columnspan=2, sticky="ew", padx=4
        )

        controls.columnconfigure(7, weight=1)

        self.canvas = tk.Canvas(root_frame, bg="#101419", highlightthickness=1, highlightbackground="#2b3642")
        self.canvas.pack(fill=tk.BOTH, expand=True, padx=8, pady=(0, 8))

        self.log_box = tk.Text(root_frame, height=8, wrap=tk.WORD)
        self.log_box.pack(fill=tk.X, padx=8, pady=(0, 8))

        status = ttk.Label(root_frame, textvariable=self.status_var, anchor="w")
        status.pack(fill=tk.X, padx=8, pady=(0, 8))

    def _bind_keys(self):
        for keysym, name in KEYS.items():
            self.root.bind(f"<KeyPress-{keysym}>", lambda _, n=name: self._set_key(n, True))
            self.root.bind(f"<KeyRelease-{keysym}>", lambda _, n=name: self._set_key(n, False))

    def _install_log_handler(self):
        handler = _UILogHandler(self)
        handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
        logging.getLogger("roverpy").addHandler(handler)

    def _set_key(self, key: str, val: bool):
        self.manual_keys[key] = val

    def _on_time_scale(self, _=None):
        self.time_scale = float(self.time_scale_var.get())

    def _toggle_pause(self):
        self.paused = not self.paused

    def _step_once(self):
        self.step_once = True
        self.paused = True

    def _restart(self):
        self.frame_id = 0
        self.rover.place(*self.rover_init)
        self.rover.contacts = set()

    def _random_world(self):
        world = generate_random_world(rng=random.Random())
        self.world_model.set_obstacles(world["obstacles"])
        self.rover_init = world["rover_init"]
        self._restart()
        logger.info("random world with %d obstacles", len(self.world_model.obstacles))

    def _load_config_file(self):
        path = filedialog.askopenfilename(
            title="Load rover_config",
            filetypes=[("Python files", "*.py"), ("Text files", "*.txt"), ("All files", "*")],
        )
        if not path:
            return
        self.config_path = pathlib.Path(path)
        self._reload_config(force=True)

    def _load_world_file(self):
        path = filedialog.askopenfilename(
            title="Load world_config",
            filetypes=[("Python files", "*.py"), ("Text files", "*.txt"), ("All files", "*")],
        )
        if not path:
            return
        self.world_path = pathlib.Path(path)
        self._reload_world(force=True)

    def _was_changed(self, path: pathlib.Path) -> bool:
        m = path.stat().st_mtime_ns
        old = self.file_mtimes.get(path)
        if old is None or m != old:
            self.file_mtimes[path] = m
            return True
        return False

    def _force_reload_all(self):
        try:
            self._reload_config(force=True)
            self._reload_world(force=True)
        except (ConfigError, OSError) as exc:
            logger.error("reload error: %s", exc)
            self.status_var.set("Reload error")

    def _reload_if_needed(self):
        now = time.perf_counter()
        if now < self.reload_cooldown:
            return

        try:
            changed = False
            if self._reload_config(force=False):
                changed = True
            if self._reload_world(force=False):
                changed = True
            if changed:
                self.status_var.set("Auto-reloaded config files")
        except (ConfigError, OSError) as exc:
            logger.error("reload error: %s", exc)
            self.status_var.set("Reload error")
            self.reload_cooldown = time.perf_counter() + 0.5

    def _reload_config(self, force: bool) -> bool:
        if not (self._was_changed(self.config_path) or force):
            return False
        self.config = load_rover_config(self.config_path)
        self.rover.apply_config(self.config)
        self.pipeline = AvoidancePipeline.from_config(
            self.config, SensorRayPainter.from_config(self.rover.draw_line, self.config)
        )
        logger.info("reloaded rover_config")
        return True

    def _reload_world(self, force: bool) -> bool:
        if not (self._was_changed(self.world_path) or force):
            return False
        obstacles, self.rover_init = load_world_config(self.world_path)
        self.world_model.set_obstacles(obstacles)
        self._restart()
        logger.info("reloaded world_config")
        return True

    def _append_draw_line(self, line, width=0.05, color="rgba(34,197,94,.9)"):
        points = normalize_line(line)
        if len(points) < 2:
            return
        try:
            canvas_width = max(1, int(round(float(width) * 30.0)))
        except (TypeError, ValueError):
            canvas_width = 1
        self.draw_lines.append(
            {
                "points": points,
                "width": canvas_width,
                "color": self._normalize_color(color),
            }
        )

    @staticmethod
    def _normalize_color(color):
        c = str(color or "").strip()
        if not c:
            return "#66d9ef"
        if c.startswith("rgba(") and c.endswith(")"):
            vals = [v.strip() for v in c[5:-1].split(",")]
            if len(vals) >= 3:
                try:
                    r = max(0, min(255, int(float(vals[0]))))
                    g = max(0, min(255, int(float(vals[1]))))
                    b = max(0, min(255, int(float(vals[2]))))
                    return f"#{r:02x}{g:02x}{b:02x}"
                except ValueError:
                    pass
        return c

    def _tick(self):
        now = time.perf_counter()
        dt = min(0.05, now - self.last_tick)
        self.last_tick = now

        self._reload_if_needed()

        should_step = (not self.paused) or self.step_once
        if should_step:
            self.step_once = False
            self._sim_step(dt * self.time_scale)

        self._draw_canvas()
        self.root.after(16, self._tick)

    def _sim_step(self, dt: float):
        self.frame_id += 1
        self.world_model.set_runtime(self.frame_id, dt)
        self.draw_lines.clear()
        manual = ManualIntent.from_keys(**self.manual_keys)
        self.last_result = simulate_one_step(self.rover, self.world_model, manual, self.pipeline)

    def _draw_canvas(self):
        c = self.canvas
        c.delete("all")

        w = max(1, c.winfo_width())
        h = max(1, c.winfo_height())
        scale = 18.0

        def to_px(x: float, z: float):
            return w * 0.5 + x * scale, h * 0.5 - z * scale

        def corners(cx, cz, length, width, heading_deg):
            hr = math.radians(heading_deg)
            fx, fz = math.sin(hr), math.cos(hr)
            rx, rz = math.cos(hr), -math.sin(hr)
            hl, hw = length * 0.5, width * 0.5
            pts = []
            for sl, sw in ((1, 1), (1, -1), (-1, -1), (-1, 1)):
                pts.extend(to_px(cx + fx * hl * sl + rx * hw * sw, cz + fz * hl * sl + rz * hw * sw))
            return pts

        for ob in self.world_model.obstacles:
            below_sensors = ob["height"] < self.rover.y + self.pipeline.sensor_array.sensor_height
            c.create_polygon(
                *corners(ob["x"], ob["z"], ob["length"], ob["width"], ob["heading_deg"]),
                outline="#64748b" if below_sensors else "#eab308",
                fill="",
                dash=(3, 3) if below_sensors else None,
            )

        for line in self.draw_lines:
            pts_src = line.get("points", [])
            if len(pts_src) < 2:
                continue
            pts = []
            for x, z in pts_src:
                pts.extend(to_px(x, z))
            c.create_line(*pts, fill=line.get("color", "#66d9ef"), width=line.get("width", 1))

        r = self.rover
        c.create_polygon(*corners(r.x, r.z, r.length, r.width, r.heading_deg), outline="#34d399", fill="", width=2)

        cx, cz = to_px(r.x, r.z)
        hr = math.radians(r.heading_deg)
        c.create_line(
            cx, cz, cx + math.sin(hr) * r.length * scale, cz - math.cos(hr) * r.length * scale,
            fill="#34d399", width=2,
        )

        active = self.last_result is not None and self.last_result.decision.active
        status = self.last_result.status if self.last_result is not None else "-"
        c.create_text(
            12,
            12,
            text=f"paused={self.paused} frame={self.frame_id} battery={r.battery_level:.1f}%",
            anchor="nw",
            fill="#e5e7eb",
        )
        c.create_text(
            12,
            30,
            text=status,
            anchor="nw",
            fill="#ef4444" if active else "#22c55e",
        )
        if self.last_result is not None:
            cmd = self.last_result.command
            c.create_text(
                12,
                48,
                text=f"move=({cmd.move_direction.x:.2f}, {cmd.move_direction.z:.2f}) rotation={cmd.rotation:.2f}",
                anchor="nw",
                fill="#e5e7eb",
            )

    def log(self, msg: str):
        line = str(msg)
        self.logs.append(line)
        if len(self.logs) > 400:
            self.logs = self.logs[-400:]
        self.log_box.delete("1.0", tk.END)
        self.log_box.insert("1.0", "\n".join(reversed(self.logs[-120:])))


def main():
    setup_logging("INFO")
    app = tk.Tk()
    RoverPyUI(app)
    app.mainloop()


if __name__ == "__main__":
    main()

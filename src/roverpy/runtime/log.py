# RoverPy author, 2026.

"""Logging setup for RoverPy entry points. Library modules only create loggers."""

import logging
import sys

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)-5s] [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"

_HANDLER_NAME = "roverpy-stream"


def setup_logging(level="INFO", stream=None):
    """Attach one stream handler to the ``roverpy`` logger; repeated calls only update the level."""
    root = logging.getLogger("roverpy")
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {name}")
    root.setLevel(level)

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)
            return root

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)
    return root

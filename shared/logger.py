"""
logger.py — Visualizer Logging
===============================
Every module logs through a stdlib logger named after itself
(`algorithms`, `engine.playback`, `main`, …); setup_logging() wires
them all to stdout once, when the Flask app is created.

Playback steps are delivered on `playback-N` worker threads, so the
thread name is part of every record:

    12:03:41 [INFO] engine.playback (playback-3): Playback cancelled after 4/16 steps

The front end polls GET /api/state several times a second while a run
plays; werkzeug's per-request access log is kept at WARNING unless the
visualizer itself runs at DEBUG.
"""

import logging
import sys

_configured = False

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"


def resolve_level(level: str) -> int:
    """Map a level name ("debug", "INFO", …) to its logging constant."""
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level {level!r}")
    return value


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging.  Only the first call has an effect."""
    global _configured
    if _configured:
        return

    numeric = resolve_level(level)
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    logging.getLogger("werkzeug").setLevel(
        logging.DEBUG if numeric <= logging.DEBUG else logging.WARNING
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

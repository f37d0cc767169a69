"""
main.py — Sorting Algorithm Visualizer Flask App
=================================================
JSON API in front of the step engine.  The browser front end owns all
drawing; this server only hands it arrays, Steps and playback state.

Routes:
  GET  /api/algorithms         – registry cards
  POST /api/array/generate     – new random array
  POST /api/array/import       – array from caller-supplied values
  POST /api/config/algo        – select algorithm
  POST /api/config/speed       – select speed (percent or preset)
  POST /api/run                – generate every Step for the current array
  POST /api/play               – start timed playback of the current run
  POST /api/stop               – cancel playback
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N
  POST /api/reset              – stop, drop the run, fresh array
  GET  /api/state              – visualization state (poll this while playing)
  POST /api/compare            – analytics for two algorithms on the current array

State management:
  One VisualizerSession per app, kept in app.extensions.  Playback runs
  on a worker thread and writes into the session's VisualizationState,
  so it cannot live in the Flask cookie session.
"""

import threading
from dataclasses import asdict
from typing import Any, Dict, Optional

from flask import Flask, current_app, jsonify, request

from arrays import generate_array, elements_from_values
from algorithms import get_algorithm, list_algorithms
from engine import (
    PlaybackController,
    Recorder,
    Run,
    VisualizationState,
    compare,
    resolve_speed,
)
from shared import VisualizerConfig, get_logger, setup_logging

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Session State
# ---------------------------------------------------------------------------
class VisualizerSession:
    """
    Attributes:
        config        : VisualizerConfig in effect.
        elements      : Current input array.
        selected_algo : Registry key used by the next run.
        speed         : Playback speed percentage.
        run           : Last successfully generated Run (or None).
        controller    : PlaybackController driving `state`.
        state         : VisualizationState the front end polls.
    """

    def __init__(self, config: VisualizerConfig):
        self.config:        VisualizerConfig   = config
        self.elements:      list               = []
        self.selected_algo: str                = config.default_algorithm
        self.speed:         int                = config.default_speed
        self.run:           Optional[Run]      = None
        self.metrics:       Dict[str, Any]     = {}
        self.controller                        = PlaybackController()
        self.state                             = VisualizationState()
        self.lock                              = threading.RLock()

        self.new_array(config.default_size)

    def new_array(self, size: int, seed: Optional[int] = None) -> None:
        elements = generate_array(
            size, low=self.config.min_value, high=self.config.max_value, seed=seed,
        )
        self.load_array(elements)

    def load_array(self, elements) -> None:
        self.controller.stop()
        self.elements = list(elements)
        self.run      = None
        self.metrics  = {}
        self.state.load(self.elements)

    def describe(self) -> Dict[str, Any]:
        return self.state.snapshot({
            "selected_algo": self.selected_algo,
            "speed":         self.speed,
            "is_playing":    self.controller.is_playing,
            "run":           self.run.to_dict() if self.run else None,
            "metrics":       self.metrics,
        })


def get_session() -> VisualizerSession:
    return current_app.extensions["visualizer"]


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _bad_request(message: str):
    return jsonify({"error": message}), 400


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[VisualizerConfig] = None) -> Flask:
    config = config or VisualizerConfig.from_env()
    setup_logging(config.log_level)

    app = Flask(__name__)
    app.config["VISUALIZER"] = config
    app.extensions["visualizer"] = VisualizerSession(config)

    register_routes(app)
    return app


def register_routes(app: Flask) -> None:

    # -----------------------------------------------------------------
    # Registry
    # -----------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})

    # -----------------------------------------------------------------
    # Array
    # -----------------------------------------------------------------
    @app.route("/api/array/generate", methods=["POST"])
    def api_array_generate():
        sess = get_session()
        cfg  = sess.config
        data = _json_body()

        size = data.get("size", cfg.default_size)
        if isinstance(size, bool) or not isinstance(size, int):
            return _bad_request(f"size must be an integer, got {size!r}")
        if not cfg.min_size <= size <= cfg.max_size:
            return _bad_request(f"size must be between {cfg.min_size} and {cfg.max_size}")
        seed = data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            return _bad_request(f"seed must be an integer, got {seed!r}")

        with sess.lock:
            sess.new_array(size, seed=seed)
            return jsonify(sess.describe())

    @app.route("/api/array/import", methods=["POST"])
    def api_array_import():
        sess   = get_session()
        values = _json_body().get("values")
        if not isinstance(values, list) or not values:
            return _bad_request("values must be a non-empty list of numbers")
        try:
            elements = elements_from_values(values)
        except (TypeError, ValueError) as e:
            return _bad_request(str(e))

        with sess.lock:
            sess.load_array(elements)
            return jsonify(sess.describe())

    # -----------------------------------------------------------------
    # Config
    # -----------------------------------------------------------------
    @app.route("/api/config/algo", methods=["POST"])
    def api_config_algo():
        sess = get_session()
        key  = _json_body().get("algo", sess.config.default_algorithm)
        info = get_algorithm(key) if isinstance(key, str) else None
        if info is None:
            logger.warning("Rejected unsupported algorithm selector %r", key)
            return _bad_request(f"Unsupported algorithm: {key}")
        with sess.lock:
            sess.selected_algo = key
        return jsonify({"algo": info.to_dict()})

    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        sess = get_session()
        try:
            speed = resolve_speed(_json_body().get("speed", sess.config.default_speed))
        except (TypeError, ValueError) as e:
            return _bad_request(str(e))
        with sess.lock:
            sess.speed = speed
        return jsonify({"speed": speed})

    # -----------------------------------------------------------------
    # Run & playback
    # -----------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        sess = get_session()
        data = _json_body()
        algo = data.get("algo", sess.selected_algo)
        if not isinstance(algo, str):
            return _bad_request(f"algo must be a string, got {algo!r}")

        with sess.lock:
            rec = Recorder()
            run = rec.start(algo, sess.elements)
            if run.error:
                # previous run and view stay as they were
                return _bad_request(run.error)

            sess.controller.stop()
            sess.selected_algo = algo
            sess.run     = run
            sess.metrics = asdict(rec.metrics) if rec.metrics else {}
            sess.controller.goto_step(run, 0, sess.state.apply)

            return jsonify({
                "run":     run.to_dict(),
                "metrics": sess.metrics,
                "step":    run.steps[0].to_dict(),
            })

    @app.route("/api/play", methods=["POST"])
    def api_play():
        sess = get_session()
        data = _json_body()

        with sess.lock:
            if sess.run is None:
                return _bad_request("Run an algorithm first")
            try:
                speed = resolve_speed(data.get("speed", sess.speed))
            except (TypeError, ValueError) as e:
                return _bad_request(str(e))
            sess.speed = speed
            handle = sess.controller.play_run(sess.run, speed, sess.state.apply)
            return jsonify({
                "is_playing": True,
                "speed":      speed,
                "delay_ms":   handle.delay_ms,
                "run":        sess.run.to_dict(),
            })

    @app.route("/api/stop", methods=["POST"])
    def api_stop():
        sess = get_session()
        with sess.lock:
            stopped = sess.controller.stop()
            return jsonify({"stopped": stopped, "state": sess.describe()})

    # -----------------------------------------------------------------
    # Step navigation
    # -----------------------------------------------------------------
    def _navigate(move, *args):
        sess = get_session()
        with sess.lock:
            if sess.run is None:
                return _bad_request("Run an algorithm first")
            step = move(sess.run, *args, sess.state.apply)
            if step is None:
                return _bad_request("No such step")
            return jsonify({"step": step.to_dict(), "run": sess.run.to_dict()})

    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        return _navigate(get_session().controller.next_step)

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        return _navigate(get_session().controller.prev_step)

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        idx = _json_body().get("index")
        if isinstance(idx, bool) or not isinstance(idx, int):
            return _bad_request(f"index must be an integer, got {idx!r}")
        return _navigate(get_session().controller.goto_step, idx)

    # -----------------------------------------------------------------
    # Reset / state
    # -----------------------------------------------------------------
    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        sess = get_session()
        with sess.lock:
            size = len(sess.elements) or sess.config.default_size
            size = min(max(size, sess.config.min_size), sess.config.max_size)
            sess.new_array(size)
            return jsonify(sess.describe())

    @app.route("/api/state")
    def api_state():
        return jsonify(get_session().describe())

    # -----------------------------------------------------------------
    # Comparison Mode
    # -----------------------------------------------------------------
    @app.route("/api/compare", methods=["POST"])
    def api_compare():
        sess  = get_session()
        data  = _json_body()
        left  = data.get("left")
        right = data.get("right")
        for key in (left, right):
            if not isinstance(key, str) or get_algorithm(key) is None:
                return _bad_request(f"Unsupported algorithm: {key}")

        with sess.lock:
            rec_l, rec_r = Recorder(), Recorder()
            rec_l.start(left, sess.elements)
            rec_r.start(right, sess.elements)
        return jsonify(compare(rec_l, rec_r).to_dict())


app = create_app()


if __name__ == "__main__":
    logger.info("Sorting Algorithm Visualizer listening on http://localhost:5000")
    app.run(debug=False, threaded=True)

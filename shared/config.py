"""
config.py — Visualizer Configuration
======================================
Tunables for array generation, playback defaults and logging.

Values come from the dataclass defaults, optionally overridden by
environment variables:

    VISUALIZER_MIN_VALUE        lower bound of generated values (inclusive)
    VISUALIZER_MAX_VALUE        upper bound of generated values (exclusive)
    VISUALIZER_MIN_SIZE         smallest array the HTTP API will generate
    VISUALIZER_MAX_SIZE         largest array the HTTP API will generate
    VISUALIZER_DEFAULT_SIZE
    VISUALIZER_DEFAULT_SPEED    percent, 10–100
    VISUALIZER_DEFAULT_ALGO
    VISUALIZER_LOG_LEVEL
"""

import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional

from shared.logger import resolve_level


_ENV_PREFIX = "VISUALIZER_"


@dataclass
class VisualizerConfig:
    min_value:         int = 10
    max_value:         int = 310
    min_size:          int = 5
    max_size:          int = 50
    default_size:      int = 20
    default_speed:     int = 100
    default_algorithm: str = "bubble"
    log_level:         str = "INFO"

    def __post_init__(self):
        if self.min_value <= 0 or self.max_value <= self.min_value:
            raise ValueError(
                f"Invalid value range [{self.min_value}, {self.max_value})"
            )
        if self.min_size < 1 or self.max_size < self.min_size:
            raise ValueError(
                f"Invalid size bounds [{self.min_size}, {self.max_size}]"
            )
        if not self.min_size <= self.default_size <= self.max_size:
            raise ValueError(
                f"default_size {self.default_size} outside "
                f"[{self.min_size}, {self.max_size}]"
            )
        if not 10 <= self.default_speed <= 100:
            raise ValueError(f"default_speed must be in [10, 100], got {self.default_speed}")
        resolve_level(self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "VisualizerConfig":
        env = os.environ if environ is None else environ
        kwargs: Dict[str, Any] = {}

        for name in ("min_value", "max_value", "min_size", "max_size",
                     "default_size", "default_speed"):
            raw = env.get(_ENV_PREFIX + name.upper())
            if raw is None:
                continue
            try:
                kwargs[name] = int(raw)
            except ValueError:
                raise ValueError(
                    f"{_ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}"
                ) from None

        algo = env.get(_ENV_PREFIX + "DEFAULT_ALGO")
        if algo:
            kwargs["default_algorithm"] = algo
        level = env.get(_ENV_PREFIX + "LOG_LEVEL")
        if level:
            kwargs["log_level"] = level

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

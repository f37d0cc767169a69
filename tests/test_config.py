"""Tests for VisualizerConfig defaults, validation and env overrides."""

import logging

import pytest

from shared import VisualizerConfig
from shared.logger import resolve_level


def test_defaults():
    cfg = VisualizerConfig()
    assert (cfg.min_value, cfg.max_value) == (10, 310)
    assert (cfg.min_size, cfg.max_size) == (5, 50)
    assert cfg.default_speed == 100
    assert cfg.default_algorithm == "bubble"
    assert cfg.to_dict()["default_size"] == 20


def test_from_env_overrides():
    cfg = VisualizerConfig.from_env({
        "VISUALIZER_MAX_SIZE": "80",
        "VISUALIZER_DEFAULT_SPEED": "40",
        "VISUALIZER_DEFAULT_ALGO": "insertion",
        "VISUALIZER_LOG_LEVEL": "DEBUG",
    })
    assert cfg.max_size == 80
    assert cfg.default_speed == 40
    assert cfg.default_algorithm == "insertion"
    assert cfg.log_level == "DEBUG"


def test_from_env_ignores_unrelated_keys():
    assert VisualizerConfig.from_env({"PATH": "/bin"}) == VisualizerConfig()


def test_from_env_rejects_non_integer():
    with pytest.raises(ValueError, match="VISUALIZER_MIN_SIZE"):
        VisualizerConfig.from_env({"VISUALIZER_MIN_SIZE": "five"})


@pytest.mark.parametrize("kwargs", [
    {"min_value": 0},
    {"min_value": 50, "max_value": 20},
    {"min_size": 0},
    {"min_size": 10, "max_size": 5, "default_size": 7},
    {"default_size": 51},
    {"default_speed": 5},
    {"log_level": "LOUD"},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        VisualizerConfig(**kwargs)


def test_log_level_names_are_case_insensitive():
    cfg = VisualizerConfig.from_env({"VISUALIZER_LOG_LEVEL": "debug"})
    assert resolve_level(cfg.log_level) == logging.DEBUG


def test_unknown_log_level_from_env_is_rejected():
    with pytest.raises(ValueError, match="log level"):
        VisualizerConfig.from_env({"VISUALIZER_LOG_LEVEL": "chatty"})

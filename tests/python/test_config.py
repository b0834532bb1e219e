from __future__ import annotations

import pytest
from pytest import approx

from boids.sim.core.config import FieldConfig, Parameters, SimulationConfig, load_config
from boids.sim.core.errors import ConfigurationError


def test_defaults_use_standard_field_and_speed():
    config = SimulationConfig()
    assert config.bounds == FieldConfig(width=1280.0, height=720.0)
    assert config.max_speed == approx(500.0)
    assert config.parameters.ds < config.parameters.d


def test_load_config_from_mapping():
    config = load_config(
        {
            "boid_count": 12,
            "seed": 3,
            "time_step": 0.5,
            "bounds": {"width": 200, "height": 100},
            "parameters": {"d": 7, "ds": 5, "s": 1, "a": 0.5, "c": 0.25},
        }
    )
    assert config.boid_count == 12
    assert config.seed == 3
    assert config.bounds == FieldConfig(200.0, 100.0)
    assert config.parameters == Parameters(d=7.0, ds=5.0, s=1.0, a=0.5, c=0.25)


def test_from_yaml(tmp_path):
    path = tmp_path / "flock.yaml"
    path.write_text(
        "boid_count: 5\n"
        "max_speed: 80.0\n"
        "parameters:\n"
        "  d: 40.0\n"
        "  ds: 10.0\n"
        "  s: 0.2\n"
        "  a: 0.1\n"
        "  c: 0.05\n"
    )
    config = SimulationConfig.from_yaml(path)
    assert config.boid_count == 5
    assert config.max_speed == approx(80.0)
    assert config.parameters.d == approx(40.0)
    assert config.bounds == FieldConfig()


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert SimulationConfig.from_yaml(path) == SimulationConfig()


@pytest.mark.parametrize(
    "raw",
    [
        {"parameters": {"d": 5, "ds": 6}},
        {"parameters": {"d": 5, "ds": 1, "s": 3}},
        {"parameters": {"radius": 5}},
        {"bounds": {"width": -1}},
        {"unknown": 1},
        {"max_speed": -2.0},
        {"time_step": 0},
        {"time_step": None},
        {"max_speed": "fast"},
        {"initial_speed": float("nan")},
        {"boid_count": "many"},
        {"boid_count": 2.5},
        {"boid_count": True},
        {"seed": "abc"},
        {"bounds": {"width": "wide"}},
        {"bounds": {"height": None}},
        {"initial_speed": -1.0},
    ],
)
def test_invalid_configuration_is_rejected(raw):
    with pytest.raises(ConfigurationError):
        load_config(raw)


def test_malformed_yaml_is_a_configuration_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("parameters: [d: 1\n")
    with pytest.raises(ConfigurationError, match="not valid YAML"):
        SimulationConfig.from_yaml(path)

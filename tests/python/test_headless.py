import csv
import io
import json

from boids.app.headless import main, run_headless
from boids.sim.core.config import SimulationConfig


def _read_csv(path):
    with path.open(newline="") as handle:
        return list(csv.reader(handle))


def test_headless_log_header_and_rows(tmp_path):
    log_path = tmp_path / "run.csv"
    run_headless(
        steps=3,
        seed=1,
        log_path=log_path,
        deterministic_log=True,
        config=SimulationConfig(boid_count=6),
    )
    rows = _read_csv(log_path)
    assert len(rows) == 4
    assert rows[0] == [
        "tick",
        "population",
        "mean_speed",
        "sigma_speed",
        "mean_distance",
        "sigma_distance",
        "tick_ms",
    ]
    assert [row[0] for row in rows[1:]] == ["0", "1", "2"]
    assert all(row[1] == "6" for row in rows[1:])
    assert all(row[-1] == "0.000" for row in rows[1:])


def test_headless_is_deterministic_for_a_seed(tmp_path):
    first = tmp_path / "a.csv"
    second = tmp_path / "b.csv"
    run_headless(steps=5, seed=11, log_path=first, deterministic_log=True, config=SimulationConfig(boid_count=5))
    run_headless(steps=5, seed=11, log_path=second, deterministic_log=True, config=SimulationConfig(boid_count=5))
    assert first.read_text() == second.read_text()


def test_headless_summary_output(tmp_path):
    summary_path = tmp_path / "summary.json"
    run_headless(
        steps=4,
        seed=3,
        log_path=None,
        deterministic_log=True,
        summary_path=summary_path,
        config=SimulationConfig(boid_count=4),
    )
    payload = json.loads(summary_path.read_text())
    assert payload["steps"] == 4
    assert payload["seed"] == 3
    assert payload["boid_count"] == 4
    assert "tick_ms" in payload
    assert payload["mean_speed"]["min"] <= payload["mean_speed"]["max"]
    assert payload["mean_distance"]["avg"] > 0.0


def test_headless_prints_distance_histogram():
    stream = io.StringIO()
    run_headless(
        steps=6,
        seed=4,
        log_path=None,
        config=SimulationConfig(boid_count=5),
        histogram_every=2,
        histogram_norm=50.0,
        histogram_stream=stream,
    )
    lines = stream.getvalue().splitlines()
    assert len(lines) == 3
    assert all("+-" in line and line.endswith("σ") for line in lines)


def test_main_rejects_invalid_configuration(tmp_path, capsys):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("parameters:\n  d: 5\n  ds: 9\n")
    status = main(["--steps", "1", "--config", str(config_path)])
    assert status == 1
    assert "ds must be positive and smaller than d" in capsys.readouterr().err


def test_main_reports_non_numeric_setting(tmp_path, capsys):
    config_path = tmp_path / "fast.yaml"
    config_path.write_text("max_speed: fast\n")
    status = main(["--steps", "1", "--config", str(config_path)])
    assert status == 1
    assert "Something went wrong. Setting max_speed must be a number" in capsys.readouterr().err


def test_main_runs_from_yaml(tmp_path):
    config_path = tmp_path / "ok.yaml"
    config_path.write_text("boid_count: 3\nparameters:\n  d: 50\n  ds: 10\n  s: 0.1\n  a: 0.1\n  c: 0.1\n")
    log_path = tmp_path / "ok.csv"
    status = main(["--steps", "2", "--config", str(config_path), "--log", str(log_path), "--deterministic-log"])
    assert status == 0
    assert len(_read_csv(log_path)) == 3


def test_seed_override_leaves_caller_config_untouched():
    config = SimulationConfig(boid_count=3, seed=5)
    simulation = run_headless(steps=1, seed=99, log_path=None, config=config)
    assert config.seed == 5
    assert simulation.config.seed == 99

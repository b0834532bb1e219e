from __future__ import annotations

import argparse
import csv
import json
import logging
import math
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, TextIO

from ..sim.core.config import SimulationConfig
from ..sim.core.errors import ConfigurationError, InsufficientData, NotEnoughAgents
from ..sim.core.simulation import Simulation
from ..sim.systems.histogram import print_histogram

logger = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "population",
    "mean_speed",
    "sigma_speed",
    "mean_distance",
    "sigma_distance",
    "tick_ms",
]


def _format_row(metrics: object, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.population,
        f"{metrics.mean_speed:.4f}",
        f"{metrics.sigma_speed:.4f}",
        f"{metrics.mean_distance:.4f}",
        f"{metrics.sigma_distance:.4f}",
        f"{tick_ms:.3f}",
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    values = [value for value in values if not math.isnan(value)]
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
        "p95": _percentile(sorted_values, 0.95),
        "p99": _percentile(sorted_values, 0.99),
    }


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    summary_path: Optional[Path] = None,
    config: Optional[SimulationConfig] = None,
    histogram_every: int = 0,
    histogram_norm: float = 10.0,
    histogram_stream: Optional[TextIO] = None,
) -> Simulation:
    config = SimulationConfig() if config is None else config
    if seed is not None:
        config = replace(config, seed=seed)
    simulation = Simulation(config)
    logger.info("Running %d steps with %d boids (seed %d)", steps, config.boid_count, config.seed)

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    tick_ms_series: list[float] = []
    speed_series: list[float] = []
    distance_series: list[float] = []
    histogram_means: list[float] = []
    histogram_sigmas: list[float] = []

    try:
        for tick in range(steps):
            metrics = simulation.step(tick)
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
            tick_ms_series.append(tick_ms)
            speed_series.append(metrics.mean_speed)
            distance_series.append(metrics.mean_distance)
            if histogram_every > 0 and tick % histogram_every == 0 and not math.isnan(metrics.mean_distance):
                histogram_means.append(metrics.mean_distance)
                histogram_sigmas.append(metrics.sigma_distance)
            if writer:
                writer.writerow(_format_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    if histogram_every > 0:
        try:
            print_histogram(histogram_means, histogram_sigmas, histogram_norm, stream=histogram_stream)
        except InsufficientData as exc:
            logger.warning("Histogram skipped: %s", exc)

    if summary_path:
        summary = {
            "steps": steps,
            "seed": config.seed,
            "boid_count": config.boid_count,
            "deterministic_log": deterministic_log,
            "tick_ms": _summary_stats(tick_ms_series),
            "mean_speed": _summary_stats(speed_series),
            "mean_distance": _summary_stats(distance_series),
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))
    return simulation


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Headless boids simulation")
    parser.add_argument("--steps", type=int, default=3000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML file with simulation settings")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write metrics")
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Optional JSON file to write summary stats for the run.",
    )
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument(
        "--histogram-every",
        type=int,
        default=0,
        help="Print a histogram of the mean pairwise distance sampled every N ticks.",
    )
    parser.add_argument("--histogram-norm", type=float, default=10.0, help="Distance units per histogram character.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = SimulationConfig.from_yaml(args.config) if args.config else None
        run_headless(
            args.steps,
            args.seed,
            args.log,
            deterministic_log=args.deterministic_log,
            summary_path=args.summary,
            config=config,
            histogram_every=args.histogram_every,
            histogram_norm=args.histogram_norm,
        )
    except ConfigurationError as exc:
        print(f"Something went wrong. {exc}", file=sys.stderr)
        return 1
    except NotEnoughAgents as exc:
        print(f"{exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from typing import Callable, Iterator, Optional, TextIO

from ..sim.core.config import Parameters, SimulationConfig
from ..sim.core.errors import ConfigurationError
from ..sim.core.flock import Flock
from ..sim.core.rng import DeterministicRng
from ..sim.systems.spawning import bootstrap_flock

logger = logging.getLogger(__name__)

MENU = "Valid commands:\n[g] to generate a flock\n[b] to view the boids\n[q] to quit.\n"


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _read_number(tokens: Iterator[str], name: str, cast: Callable[[str], float]) -> float:
    token = next(tokens, None)
    if token is None:
        raise ConfigurationError(f"Missing value for {name}.", field=name)
    try:
        return cast(token)
    except ValueError:
        raise ConfigurationError(f"Parameter {name} must be a number, got {token!r}.", field=name) from None


def _generate(
    tokens: Iterator[str], stdout: TextIO, config: SimulationConfig, rng: DeterministicRng
) -> Optional[Flock]:
    stdout.write("Please input your data. \nFirst enter the number of boids: ")
    count = int(_read_number(tokens, "N", int))
    if count < 2:
        stdout.write("Not enough data. Try generating a bigger flock.\n")
        return None
    stdout.write("Enter separation parameter s: ")
    s = _read_number(tokens, "s", float)
    stdout.write("Enter alignment parameter a: ")
    a = _read_number(tokens, "a", float)
    stdout.write("Enter cohesion parameter c: ")
    c = _read_number(tokens, "c", float)
    stdout.write("Enter distance d and range influence parameter ds: ")
    d = _read_number(tokens, "d", float)
    ds = _read_number(tokens, "ds", float)
    parameters = Parameters(d=d, ds=ds, s=s, a=a, c=c)
    flock = bootstrap_flock(replace(config, boid_count=count, parameters=parameters), rng)
    stdout.write("Data generated successfully.\n")
    return flock


def run_prompt(
    stdin: TextIO,
    stdout: TextIO,
    viewer: Optional[Callable[[Flock], None]] = None,
    config: Optional[SimulationConfig] = None,
) -> int:
    """Read operator commands until ``q`` or end of input; return the exit status.

    Invalid parameters or a flock too small to simulate end the session with
    status 1 after printing a diagnostic.
    """
    if viewer is None:
        from .viewer import run_viewer as viewer

    config = SimulationConfig() if config is None else config
    rng = DeterministicRng(config.seed)
    tokens = _tokens(stdin)
    flock: Optional[Flock] = None

    stdout.write(MENU)
    for command in tokens:
        if command == "g":
            try:
                generated = _generate(tokens, stdout, config, rng)
            except ConfigurationError as exc:
                logger.debug("Rejected operator input: %s", exc)
                stdout.write(f"\nSomething went wrong. {exc}\n")
                return 1
            if generated is None:
                return 1
            flock = generated
        elif command == "b":
            if flock is None:
                stdout.write("Not enough data. Try generating a flock with [g].\n")
                return 1
            viewer(flock)
        elif command == "q":
            return 0
        else:
            stdout.write("Bad format, insert a new command\n")
    return 0


def main() -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(run_prompt(sys.stdin, sys.stdout))


if __name__ == "__main__":
    main()

from __future__ import annotations

import sys
from typing import List, Sequence, TextIO

from ..core.errors import InsufficientData
from ..utils.math2d import _round_half_away


def _run(length: float, fill: str) -> str:
    return fill * max(0, _round_half_away(length))


def render_histogram(
    entries: Sequence[float],
    errors: Sequence[float],
    norm: float,
    fill: str = "-",
) -> List[str]:
    """Render one line per bin: ``value+-error |`` then a scaled bar.

    The bar is ``value - error`` fill characters, a ``σ`` marker, the error
    run, a ``*`` at the value, the error run again and a closing ``σ``.
    """
    if len(entries) < 1:
        raise InsufficientData("Not enough entries to draw a histogram")
    if len(entries) != len(errors):
        raise ValueError(f"Got {len(entries)} entries but {len(errors)} errors")
    if norm <= 0:
        raise ValueError(f"Histogram norm must be positive, got {norm}")

    lines = []
    for entry, error in zip(entries, errors):
        body = _run((entry - error) / norm, fill)
        sigma = _run(error / norm, fill)
        lines.append(f"{entry:.0f}+-{error:.0f} |{body}σ{sigma}*{sigma}σ")
    return lines


def print_histogram(
    entries: Sequence[float],
    errors: Sequence[float],
    norm: float,
    stream: TextIO | None = None,
    fill: str = "-",
) -> None:
    stream = sys.stdout if stream is None else stream
    for line in render_histogram(entries, errors, norm, fill=fill):
        stream.write(line + "\n")

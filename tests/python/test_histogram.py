import io

import pytest

from boids.sim.core.errors import InsufficientData
from boids.sim.systems.histogram import print_histogram, render_histogram


def test_histogram_lines_scale_value_and_error():
    lines = render_histogram([30.0, 20.0], [10.0, 5.0], norm=5.0)
    assert lines == [
        "30+-10 |----σ--*--σ",
        "20+-5 |---σ-*-σ",
    ]


def test_histogram_rounds_half_away_from_zero():
    lines = render_histogram([7.5], [2.5], norm=1.0, fill="#")
    assert lines == ["8+-2 |#####σ###*###σ"]


def test_histogram_error_larger_than_value_draws_no_body():
    lines = render_histogram([2.0], [4.0], norm=1.0)
    assert lines == ["2+-4 |σ----*----σ"]


def test_print_histogram_writes_one_line_per_bin():
    stream = io.StringIO()
    print_histogram([10.0, 12.0, 9.0], [1.0, 2.0, 1.0], 1.0, stream=stream)
    output = stream.getvalue().splitlines()
    assert len(output) == 3
    assert output[1].startswith("12+-2 |")


def test_histogram_needs_entries():
    with pytest.raises(InsufficientData):
        render_histogram([], [], norm=1.0)


def test_histogram_rejects_mismatched_errors():
    with pytest.raises(ValueError):
        render_histogram([1.0, 2.0], [0.5], norm=1.0)

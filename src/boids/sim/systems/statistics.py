from __future__ import annotations

import math
from typing import Iterable

from ..core.errors import InsufficientData
from ..types.statistics import Statistics


def sample_statistics(values: Iterable[float]) -> Statistics:
    """Mean and Bessel-corrected standard deviation of ``values``.

    Uses two passes (mean first, then squared deviations) so the variance
    cannot come out negative for nearly constant samples.
    """
    data = [float(value) for value in values]
    count = len(data)
    if count < 2:
        raise InsufficientData(f"Not enough entries to run a statistics: {count} given, at least 2 required")
    mean = math.fsum(data) / count
    squared = math.fsum((value - mean) * (value - mean) for value in data)
    return Statistics(mean=mean, sigma=math.sqrt(squared / (count - 1)))

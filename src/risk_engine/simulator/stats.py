"""Order statistics over simulated samples."""

from __future__ import annotations

import math
from typing import Sequence


def percentile(sample: Sequence[float], p: float) -> float:
    """Linearly interpolated percentile, ``p`` in [0, 1]; 0.0 for an empty sample."""
    if not sample:
        return 0.0
    ordered = sorted(sample)
    p = min(max(p, 0.0), 1.0)
    rank = (len(ordered) - 1) * p
    lo = math.floor(rank)
    hi = math.ceil(rank)
    if lo == hi:
        return float(ordered[lo])
    return ordered[lo] + (rank - lo) * (ordered[hi] - ordered[lo])


def max_drawdown(path: Sequence[float]) -> float:
    """Largest peak-to-trough decline along a path, as a fraction of the peak."""
    if not path:
        return 0.0
    peak = path[0]
    worst = 0.0
    for value in path:
        if value > peak:
            peak = value
        if peak > 0:
            worst = max(worst, (peak - value) / peak)
    return worst

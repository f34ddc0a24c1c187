"""Fixed-width binning and mean for histogram datasets.

Buckets are half-open ``[lo, hi)`` except the top one, which also takes
values exactly equal to ``max``. Values outside ``[min, max]``, NaN and
non-numeric entries are dropped, never clamped.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from functools import reduce
from typing import Any, Iterable

import numpy as np
import pandas as pd

from landhist.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BucketSet:
    """Result of binning.

    Attributes:
        counts: Number of values in each bucket, smallest bucket first.
        centres: Midpoint of each bucket, same length as counts.
    """

    counts: list[int]
    centres: list[float]

    @property
    def n_buckets(self) -> int:
        return len(self.counts)

    @property
    def total(self) -> int:
        return sum(self.counts)

    @property
    def step_size(self) -> float:
        """Bucket width (NaN for a single bucket, which has no neighbour)."""
        if len(self.centres) < 2:
            return math.nan
        return self.centres[1] - self.centres[0]


def as_float_array(data: Iterable[Any]) -> np.ndarray:
    """Values as a float array; None and non-numeric entries become NaN."""
    s = pd.to_numeric(pd.Series(list(data), dtype=object), errors="coerce")
    return s.to_numpy(dtype=float)


def bin_values(data: Iterable[float], min: float, max: float, nsteps: int) -> BucketSet:
    """Generate histogram counts for a distribution of values.

    The range between ``min`` and ``max`` is partitioned into ``nsteps``
    equal-width buckets.

    Args:
        data: Values to be binned. NaN, non-numeric and out-of-range values
            are ignored.
        min: Lower edge of the first bucket.
        max: Upper edge of the last bucket (inclusive).
        nsteps: Number of buckets.

    Returns:
        BucketSet with ``nsteps`` counts and centres.

    Raises:
        ValueError: If nsteps < 1 or max <= min.
    """
    if nsteps < 1:
        raise ValueError(f"nsteps must be >= 1, got {nsteps}")
    if not max > min:
        raise ValueError(f"histogram range must have max > min, got min={min}, max={max}")

    step_size = (max - min) / nsteps
    arr = as_float_array(data)

    at_max = arr == max
    rest = arr[~at_max]
    with np.errstate(invalid="ignore"):
        idx = np.floor((rest - min) / step_size)
        in_range = (idx >= 0) & (idx < nsteps)
    counts = np.bincount(idx[in_range].astype(np.int64), minlength=nsteps)
    # include the maximum value in the last bucket
    counts[nsteps - 1] += int(np.count_nonzero(at_max))

    centres = min + (np.arange(nsteps) + 0.5) * step_size

    n_dropped = arr.size - int(counts.sum())
    if n_dropped:
        logger.debug(f"{n_dropped} of {arr.size} values outside [{min}, {max}] or NaN, not binned")

    return BucketSet(counts=[int(c) for c in counts], centres=[float(c) for c in centres])


def get_mean(xs: Iterable[Any]) -> float:
    """Arithmetic mean, summed left to right; NaN for an empty sequence.

    NaN and non-numeric members make the mean NaN.
    """
    arr = as_float_array(xs)
    if arr.size == 0:
        return math.nan
    return reduce(operator.add, arr.tolist(), 0.0) / arr.size

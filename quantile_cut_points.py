from __future__ import annotations

from dataclasses import dataclass, field
import logging

import numpy as np

from bin_count_policy import avg_length, effective_max_bins
from cut_allocation import allocate_cut_points
from errors import ConversionOverflowError, DiscretizationError
from missing_values import remove_missing_values
from random_stream import RandomStream, seed_as_int
from splitting_ranges import build_splitting_ranges

logger = logging.getLogger(__name__)

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


@dataclass
class CutPointsResult:
    cut_points: np.ndarray = field(default_factory=lambda: np.array([], dtype=np.float64))
    is_missing: bool = False
    min_value: float = 0.0
    max_value: float = 0.0
    error: DiscretizationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def n_cut_points(self) -> int:
        return int(self.cut_points.size)


def _check_int64(name: str, value: int) -> int:
    value = int(value)
    if not (INT64_MIN <= value <= INT64_MAX):
        raise ConversionOverflowError(f"{name}={value} does not fit in int64")
    return value


def _as_working_array(values) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        arr = arr.reshape(-1)
    if not arr.flags.writeable:
        arr = arr.copy()
    return arr


def _generate(
    random_seed: int,
    values,
    max_bins: int,
    min_instances_per_bin: int,
) -> CutPointsResult:
    random_seed = _check_int64("random_seed", seed_as_int(random_seed))
    max_bins = _check_int64("max_bins", max_bins)
    min_instances_per_bin = _check_int64("min_instances_per_bin", min_instances_per_bin)

    arr = _as_working_array(values)
    n = _check_int64("n_samples", arr.shape[0])
    if n == 0:
        return CutPointsResult()

    n_present = remove_missing_values(arr)
    is_missing = n_present < n
    if n_present == 0:
        return CutPointsResult(is_missing=is_missing)

    present = arr[:n_present]
    present.sort()
    result = CutPointsResult(
        is_missing=is_missing,
        min_value=float(present[0]),
        max_value=float(present[-1]),
    )
    if max_bins <= 1:
        return result

    min_per_bin = max(1, min_instances_per_bin)
    if n_present < 2 * min_per_bin:
        # A single cut already needs min_per_bin values on each side.
        return result

    bins = effective_max_bins(is_missing, max_bins)
    avg = avg_length(n_present, bins, min_per_bin)
    range_set = build_splitting_ranges(present, avg, min_per_bin)
    if not range_set:
        return result

    stream = RandomStream(random_seed)
    result.cut_points = allocate_cut_points(present, range_set, bins, min_per_bin, stream)
    return result


def generate_quantile_cut_points(
    random_seed: int,
    values,
    max_bins: int,
    min_instances_per_bin: int,
) -> CutPointsResult:
    """Find quantile-style cut points for one feature.

    ``values`` is sorted and compacted in place when it is a writable float64
    array, so its contents are not meaningful afterwards. Failures are not
    raised: they are logged and returned in ``CutPointsResult.error`` with the
    other fields at their defaults.
    """
    logger.info(
        "Entered generate_quantile_cut_points: random_seed=%s, n_samples=%d, max_bins=%s, min_instances_per_bin=%s",
        random_seed,
        len(values),
        max_bins,
        min_instances_per_bin,
    )
    try:
        result = _generate(random_seed, values, max_bins, min_instances_per_bin)
    except DiscretizationError as e:
        logger.warning("generate_quantile_cut_points failed: %s", e)
        return CutPointsResult(error=e)

    logger.info(
        "Exited generate_quantile_cut_points: n_cut_points=%d, is_missing=%s",
        result.n_cut_points,
        result.is_missing,
    )
    return result

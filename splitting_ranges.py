from __future__ import annotations

import logging

import numpy as np

from data_structures import RangePosition, SplittingRange, SplittingRangeSet
from errors import AllocationFailureError, ConversionOverflowError

logger = logging.getLogger(__name__)

INT64_MAX = int(np.iinfo(np.int64).max)
# Record fields plus one slot in each ordering view, as int64 words.
RANGE_RECORD_BYTES = 8 * 9


def equal_value_runs(values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Start index and length of every maximal run of identical sorted values."""
    n = int(values.shape[0])
    if n == 0:
        empty = np.array([], dtype=np.int64)
        return empty, empty

    changes = np.flatnonzero(values[1:] != values[:-1]).astype(np.int64) + 1
    starts = np.concatenate((np.zeros(1, dtype=np.int64), changes))
    ends = np.concatenate((changes, np.array([n], dtype=np.int64)))
    return starts, ends - starts


def has_legal_cut(values: np.ndarray, min_samples_per_bin: int) -> bool:
    """True when some value change leaves ``min_samples_per_bin`` on both sides.

    With a minimum of 3, ``0 1 3 3 4 5`` has value changes but none of them
    sits between positions 3 and 3.
    """
    n = int(values.shape[0])
    starts, _ = equal_value_runs(values)
    changes = starts[1:]
    return bool(np.any((changes >= min_samples_per_bin) & (changes <= n - min_samples_per_bin)))


def _find_spans(
    values: np.ndarray,
    avg_length: int,
    min_samples_per_bin: int,
) -> list[tuple[int, int, int, int]]:
    n = int(values.shape[0])
    starts, lengths = equal_value_runs(values)

    spans: list[tuple[int, int, int, int]] = []
    span_start = 0
    prior_len = 0
    for run_start, run_len in zip(starts.tolist(), lengths.tolist()):
        if run_len < avg_length:
            continue
        span_len = run_start - span_start
        # A short leading span has no room for a cut below it, so it just
        # joins the unsplittable run.
        if span_start != 0 or span_len >= min_samples_per_bin:
            spans.append((span_start, span_len, prior_len, run_len))
        span_start = run_start + run_len
        prior_len = run_len

    if span_start == 0:
        # No separator at all: one range covering everything, if it can be cut.
        if has_legal_cut(values, min_samples_per_bin):
            spans.append((0, n, 0, 0))
    elif span_start < n:
        trailing_len = n - span_start
        if trailing_len >= min_samples_per_bin:
            spans.append((span_start, trailing_len, prior_len, 0))

    return spans


def build_splitting_ranges(
    values: np.ndarray,
    avg_length: int,
    min_samples_per_bin: int,
) -> SplittingRangeSet:
    """Scan sorted non-missing values and collect the ranges that can host cuts.

    Runs of at least ``avg_length`` identical values separate the ranges. An
    empty result means no cut point can be placed.
    """
    assert avg_length >= 1
    assert min_samples_per_bin >= 1

    spans = _find_spans(values, avg_length, min_samples_per_bin)
    if len(spans) > INT64_MAX // RANGE_RECORD_BYTES:
        raise ConversionOverflowError(
            f"{len(spans)} splitting ranges overflow the int64 scratch size"
        )

    try:
        range_set = SplittingRangeSet()
        for start, length, prior_len, subsequent_len in spans:
            range_set.ranges.append(
                SplittingRange(
                    splittable_start=start,
                    splittable_len=length,
                    prior_unsplittable_len=prior_len,
                    subsequent_unsplittable_len=subsequent_len,
                    position_flags=RangePosition.FIRST if start == 0 else RangePosition.MIDDLE,
                )
            )
            range_set.total_splittable += length
    except MemoryError as e:
        raise AllocationFailureError(f"could not allocate {len(spans)} splitting ranges") from e

    if range_set.ranges:
        range_set.ranges[-1].position_flags |= RangePosition.LAST

    logger.debug(
        "found %d splitting ranges over %d values (avg_length=%d, total_splittable=%d)",
        len(range_set),
        int(values.shape[0]),
        avg_length,
        range_set.total_splittable,
    )
    return range_set

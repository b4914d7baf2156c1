from __future__ import annotations

import heapq
import logging

import numpy as np

from data_structures import SplittingRange, SplittingRangeSet
from random_stream import RandomStream
from range_ordering import (
    order_by_growing_splittable_size,
    order_by_shrinking_unsplittable_neighbor,
)

logger = logging.getLogger(__name__)


def legal_cut_indices(
    values: np.ndarray,
    splitting_range: SplittingRange,
    min_samples_per_bin: int,
) -> np.ndarray:
    """Sorted indices ``i`` where a cut between ``values[i-1]`` and ``values[i]`` is allowed.

    Cuts may sit on either edge of the range (against a flanking run) but never
    inside a run of equal values. At the true ends of the array a cut must
    leave ``min_samples_per_bin`` values outside it.
    """
    n = int(values.shape[0])
    low = splitting_range.splittable_start
    high = splitting_range.splittable_end
    if low == 0:
        low = min_samples_per_bin
    if high == n:
        high = n - min_samples_per_bin
    low = max(low, 1)
    high = min(high, n - 1)
    if low > high:
        return np.array([], dtype=np.int64)

    idx = np.arange(low, high + 1, dtype=np.int64)
    return idx[values[idx - 1] != values[idx]]


def cut_capacity(candidates: np.ndarray, min_samples_per_bin: int) -> int:
    """Most cuts the candidates can host while staying ``min_samples_per_bin`` apart."""
    count = 0
    last = None
    for c in candidates.tolist():
        if last is None or c - last >= min_samples_per_bin:
            count += 1
            last = c
    return count


def _latest_positions(candidates: np.ndarray, n_cuts: int, min_samples_per_bin: int) -> list[int]:
    latest = [0] * n_cuts
    bound = int(candidates[-1])
    for j in range(n_cuts - 1, -1, -1):
        pos = int(np.searchsorted(candidates, bound, side="right")) - 1
        assert pos >= 0, "more cuts requested than the range can host"
        latest[j] = int(candidates[pos])
        bound = latest[j] - min_samples_per_bin
    return latest


def _target_positions(splitting_range: SplittingRange, n_values: int, n_cuts: int) -> np.ndarray:
    # Pieces next to a flanking run merge into that run's bin, so they count half.
    left_weight = 0.5 if splitting_range.splittable_start > 0 else 1.0
    right_weight = 0.5 if splitting_range.splittable_end < n_values else 1.0
    total_weight = left_weight + (n_cuts - 1) + right_weight
    cumulative = left_weight + np.arange(n_cuts, dtype=np.float64)
    return splitting_range.splittable_start + splitting_range.splittable_len * cumulative / total_weight


def place_cuts(
    splitting_range: SplittingRange,
    candidates: np.ndarray,
    n_values: int,
    min_samples_per_bin: int,
) -> list[int]:
    """Pick ``assigned_splits`` cut indices for one range, as evenly spaced as allowed.

    Each cut takes the candidate nearest its target among those that keep the
    minimum distance to the previous cut and still leave room for the rest.
    """
    n_cuts = splitting_range.assigned_splits
    assert n_cuts >= 1
    latest = _latest_positions(candidates, n_cuts, min_samples_per_bin)
    targets = _target_positions(splitting_range, n_values, n_cuts)

    chosen: list[int] = []
    for j in range(n_cuts):
        lo = 0 if not chosen else int(np.searchsorted(candidates, chosen[-1] + min_samples_per_bin, side="left"))
        hi = int(np.searchsorted(candidates, latest[j], side="right"))
        window = candidates[lo:hi]
        assert window.size > 0
        chosen.append(int(window[int(np.argmin(np.abs(window - targets[j])))]))
    return chosen


def distribute_budget(
    ranges: list[SplittingRange],
    capacities: list[int],
    budget: int,
    size_order: list[int],
) -> int:
    """Hand the cuts left after the one-per-range baseline to the widest ranges.

    A range's priority is its splittable length per assigned cut. Ties go to
    the more isolated range (longer flanking runs, as in
    ``order_by_shrinking_unsplittable_neighbor``), then to the range later in
    ``size_order``. Full ranges drop out and their share goes to the next
    one. Returns the budget nobody could absorb.
    """
    remaining = budget - sum(r.assigned_splits for r in ranges)
    assert remaining >= 0

    size_rank = {idx: rank for rank, idx in enumerate(reversed(size_order))}

    def priority(i: int) -> tuple[float, int, int, int, int]:
        r = ranges[i]
        return (-r.splittable_len / r.assigned_splits, -r.flank_max, -r.flank_min, size_rank[i], i)

    heap = [priority(i) for i, r in enumerate(ranges) if r.assigned_splits < capacities[i]]
    heapq.heapify(heap)

    while remaining > 0 and heap:
        i = heapq.heappop(heap)[-1]
        r = ranges[i]
        r.assigned_splits += 1
        remaining -= 1
        if r.assigned_splits < capacities[i]:
            heapq.heappush(heap, priority(i))

    return remaining


def cut_values(values: np.ndarray, cut_indices: np.ndarray) -> np.ndarray:
    """Boundary value for each cut index, inside ``(values[i-1], values[i]]``.

    Cut points are lower-bound inclusive: ``values[i]`` lands above the cut.
    """
    below = values[cut_indices - 1]
    above = values[cut_indices]
    with np.errstate(invalid="ignore", over="ignore"):
        mid = below * 0.5 + above * 0.5
    # Adjacent floats and infinities can collapse the midpoint onto an end.
    bad = ~((mid > below) & (mid <= above))
    mid[bad] = above[bad]
    return mid.astype(np.float64)


def allocate_cut_points(
    values: np.ndarray,
    range_set: SplittingRangeSet,
    max_bins: int,
    min_samples_per_bin: int,
    stream: RandomStream,
) -> np.ndarray:
    """Turn splitting ranges into the strictly increasing cut-point array.

    ``values`` are the sorted non-missing values the ranges index into and
    ``max_bins`` is already adjusted for a missing bin.
    """
    ranges = range_set.ranges
    budget = max_bins - 1
    if not ranges or budget < 1:
        return np.array([], dtype=np.float64)

    size_order = order_by_growing_splittable_size(ranges, stream)
    isolation_order = order_by_shrinking_unsplittable_neighbor(ranges, stream)

    if len(ranges) > budget:
        kept = sorted(isolation_order[:budget])
        logger.debug("budget %d fits only %d of %d splitting ranges", budget, len(kept), len(ranges))
        kept_set = set(kept)
        remap = {old: new for new, old in enumerate(kept)}
        size_order = [remap[i] for i in size_order if i in kept_set]
        ranges = [ranges[i] for i in kept]

    n_values = int(values.shape[0])
    candidates = [legal_cut_indices(values, r, min_samples_per_bin) for r in ranges]
    capacities = [cut_capacity(c, min_samples_per_bin) for c in candidates]
    for r, capacity in zip(ranges, capacities):
        assert capacity >= 1, "every splitting range must host at least one cut"
        r.assigned_splits = 1

    unused = distribute_budget(ranges, capacities, budget, size_order)
    logger.debug(
        "assigned %d cuts over %d ranges (%d of budget %d unused)",
        budget - unused,
        len(ranges),
        unused,
        budget,
    )

    cut_indices: list[int] = []
    for r, c in zip(ranges, candidates):
        cut_indices.extend(place_cuts(r, c, n_values, min_samples_per_bin))

    cuts = cut_values(values, np.asarray(cut_indices, dtype=np.int64))
    assert np.all(np.diff(cuts) > 0)
    return cuts

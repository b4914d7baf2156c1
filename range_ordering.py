from __future__ import annotations

from typing import Callable, Hashable

from data_structures import SplittingRange
from random_stream import RandomStream


def _shuffle_tied_runs(
    order: list[int],
    tie_key: Callable[[int], Hashable],
    stream: RandomStream,
) -> None:
    """Shuffle, in place, every maximal run of ``order`` sharing the same key.

    Runs are visited left to right and each draws ``next(remaining)`` once per
    element beyond its first, so a seed fixes the whole permutation.
    """
    run_start = 0
    n = len(order)
    while run_start < n:
        key = tie_key(order[run_start])
        run_end = run_start + 1
        while run_end < n and tie_key(order[run_end]) == key:
            run_end += 1

        pos = run_start
        remaining = run_end - run_start
        while remaining > 1:
            swap = pos + stream.next(remaining)
            order[pos], order[swap] = order[swap], order[pos]
            pos += 1
            remaining -= 1
        run_start = run_end


def order_by_growing_splittable_size(
    ranges: list[SplittingRange],
    stream: RandomStream,
) -> list[int]:
    """Range indices by ascending ``splittable_len``, equal sizes in random order."""
    assert ranges

    order = sorted(range(len(ranges)), key=lambda i: (ranges[i].splittable_len, i))
    _shuffle_tied_runs(order, lambda i: ranges[i].splittable_len, stream)
    return order


def order_by_shrinking_unsplittable_neighbor(
    ranges: list[SplittingRange],
    stream: RandomStream,
) -> list[int]:
    """Range indices by descending longest, then shortest, flanking run.

    Ranges wedged between long unsplittable runs come first; fully tied
    ranges are shuffled.
    """
    assert ranges

    order = sorted(
        range(len(ranges)),
        key=lambda i: (ranges[i].flank_max, ranges[i].flank_min, i),
        reverse=True,
    )
    _shuffle_tied_runs(order, lambda i: (ranges[i].flank_max, ranges[i].flank_min), stream)
    return order

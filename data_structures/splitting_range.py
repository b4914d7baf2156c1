from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag


class RangePosition(Flag):
    MIDDLE = 1
    FIRST = 2
    LAST = 4


@dataclass
class SplittingRange:
    """A span of sorted values, between long equal-value runs, that hosts cuts.

    ``splittable_start``/``splittable_len`` index the sorted non-missing
    values. The flanking run lengths are 0 at the true ends of the array.
    """

    splittable_start: int
    splittable_len: int
    prior_unsplittable_len: int
    subsequent_unsplittable_len: int
    position_flags: RangePosition = RangePosition.MIDDLE
    assigned_splits: int = 1

    @property
    def splittable_end(self) -> int:
        return self.splittable_start + self.splittable_len

    @property
    def flank_max(self) -> int:
        return max(self.prior_unsplittable_len, self.subsequent_unsplittable_len)

    @property
    def flank_min(self) -> int:
        return min(self.prior_unsplittable_len, self.subsequent_unsplittable_len)

    @property
    def is_first(self) -> bool:
        return bool(self.position_flags & RangePosition.FIRST)

    @property
    def is_last(self) -> bool:
        return bool(self.position_flags & RangePosition.LAST)


@dataclass
class SplittingRangeSet:
    ranges: list[SplittingRange] = field(default_factory=list)
    total_splittable: int = 0

    def __len__(self) -> int:
        return len(self.ranges)

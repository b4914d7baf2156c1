"""
Data structures for quantile cut-point discovery.

Splitting ranges are index views into the sorted, non-missing values of a
single feature; they live only for the duration of one cut-point call.
"""
from data_structures.splitting_range import RangePosition, SplittingRange, SplittingRangeSet

__all__ = ["RangePosition", "SplittingRange", "SplittingRangeSet"]

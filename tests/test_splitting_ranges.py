import numpy as np
import pytest

from data_structures import RangePosition
from errors import ConversionOverflowError
import splitting_ranges
from splitting_ranges import build_splitting_ranges, equal_value_runs, has_legal_cut


def _spans(range_set):
    return [
        (
            r.splittable_start,
            r.splittable_len,
            r.prior_unsplittable_len,
            r.subsequent_unsplittable_len,
            r.position_flags,
        )
        for r in range_set.ranges
    ]


def test_equal_value_runs():
    starts, lengths = equal_value_runs(np.array([1.0, 1.0, 2.0, 3.0, 3.0, 3.0]))

    np.testing.assert_array_equal(starts, [0, 2, 3])
    np.testing.assert_array_equal(lengths, [2, 1, 3])


def test_long_runs_separate_ranges():
    values = np.array(
        [0, 1, 2, 5, 5, 5, 5, 5, 6, 7, 8, 9, 10, 10, 10, 10, 10, 11, 12], dtype=np.float64
    )
    range_set = build_splitting_ranges(values, avg_length=5, min_samples_per_bin=2)

    assert _spans(range_set) == [
        (0, 3, 0, 5, RangePosition.FIRST),
        (8, 4, 5, 5, RangePosition.MIDDLE),
        (17, 2, 5, 0, RangePosition.MIDDLE | RangePosition.LAST),
    ]
    assert range_set.total_splittable == 9
    assert range_set.ranges[0].flank_max == 5
    assert range_set.ranges[0].flank_min == 0


def test_short_trailing_span_is_dropped():
    values = np.array(
        [0, 1, 2, 5, 5, 5, 5, 5, 6, 7, 8, 9, 10, 10, 10, 10, 10, 11, 12], dtype=np.float64
    )
    range_set = build_splitting_ranges(values, avg_length=5, min_samples_per_bin=3)

    assert _spans(range_set) == [
        (0, 3, 0, 5, RangePosition.FIRST),
        (8, 4, 5, 5, RangePosition.MIDDLE | RangePosition.LAST),
    ]


def test_short_leading_span_joins_the_unsplittable_run():
    values = np.array([0, 5, 5, 5, 5, 5, 6, 7, 10, 10, 10, 10, 10, 11, 12, 13], dtype=np.float64)
    range_set = build_splitting_ranges(values, avg_length=5, min_samples_per_bin=2)

    assert _spans(range_set) == [
        (6, 2, 5, 5, RangePosition.MIDDLE),
        (13, 3, 5, 0, RangePosition.MIDDLE | RangePosition.LAST),
    ]
    assert not any(r.is_first for r in range_set.ranges)


def test_adjacent_long_runs_make_an_empty_range():
    values = np.array([1, 1, 1, 1, 1, 2, 2, 2, 2, 2], dtype=np.float64)
    range_set = build_splitting_ranges(values, avg_length=3, min_samples_per_bin=2)

    assert _spans(range_set) == [(5, 0, 5, 5, RangePosition.MIDDLE | RangePosition.LAST)]


def test_no_long_runs_gives_one_range():
    values = np.arange(10, dtype=np.float64)
    range_set = build_splitting_ranges(values, avg_length=4, min_samples_per_bin=2)

    assert _spans(range_set) == [(0, 10, 0, 0, RangePosition.FIRST | RangePosition.LAST)]
    assert range_set.ranges[0].is_first
    assert range_set.ranges[0].is_last


def test_single_range_without_legal_cut_is_discarded():
    values = np.array([0, 1, 3, 3, 4, 5], dtype=np.float64)

    assert not has_legal_cut(values, 3)
    assert has_legal_cut(values, 2)
    assert len(build_splitting_ranges(values, avg_length=10, min_samples_per_bin=3)) == 0


def test_constant_values_have_no_ranges():
    values = np.full(10, 4.0)
    range_set = build_splitting_ranges(values, avg_length=3, min_samples_per_bin=1)

    assert len(range_set) == 0
    assert range_set.total_splittable == 0


def test_range_count_beyond_int64_scratch_size_overflows(monkeypatch):
    values = np.array(
        [0, 1, 2, 5, 5, 5, 5, 5, 6, 7, 8, 9, 10, 10, 10, 10, 10, 11, 12], dtype=np.float64
    )
    assert len(build_splitting_ranges(values, 5, 2)) == 3

    monkeypatch.setattr(splitting_ranges, "RANGE_RECORD_BYTES", splitting_ranges.INT64_MAX + 1)
    with pytest.raises(ConversionOverflowError):
        build_splitting_ranges(values, 5, 2)

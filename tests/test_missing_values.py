import numpy as np

from missing_values import remove_missing_values


def test_remove_missing_values_keeps_order():
    values = np.array([np.nan, 3.0, 1.0, np.nan, 2.0, np.nan])
    k = remove_missing_values(values)

    assert k == 3
    np.testing.assert_array_equal(values[:k], [3.0, 1.0, 2.0])


def test_remove_missing_values_without_missing():
    values = np.array([2.0, 1.0, 3.0])

    assert remove_missing_values(values) == 3
    np.testing.assert_array_equal(values, [2.0, 1.0, 3.0])


def test_remove_missing_values_edge_cases():
    assert remove_missing_values(np.array([], dtype=np.float64)) == 0
    assert remove_missing_values(np.full(4, np.nan)) == 0

    values = np.array([1.0, 2.0, np.nan])
    assert remove_missing_values(values) == 2
    np.testing.assert_array_equal(values[:2], [1.0, 2.0])

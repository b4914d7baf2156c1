import numpy as np
import pytest

from binning import FeatureBins, QuantileBinningParams, apply_bins, build_bins


def test_build_and_apply_bins_round_trip_shapes():
    rng = np.random.default_rng(7)
    X = rng.normal(size=(160, 4))
    X[rng.uniform(size=160) < 0.1, 2] = np.nan
    X_before = X.copy()

    feature_bins = build_bins(X, QuantileBinningParams(max_bins=16, min_samples_per_bin=3, random_state=7))
    X_bin = apply_bins(X, feature_bins)

    np.testing.assert_array_equal(X, X_before)
    assert len(feature_bins) == 4
    assert X_bin.shape == X.shape
    assert X_bin.dtype == np.int32
    assert X_bin.flags["C_CONTIGUOUS"]

    assert feature_bins[2].is_missing
    assert not feature_bins[0].is_missing
    assert np.all(X_bin[np.isnan(X[:, 2]), 2] == 0)
    for j, bins in enumerate(feature_bins):
        assert bins.cut_points.size <= 15
        assert X_bin[:, j].max() < bins.n_bins
        assert X_bin[:, j].min() >= 0


def test_each_bin_keeps_min_samples():
    rng = np.random.default_rng(3)
    X = np.column_stack(
        [
            rng.integers(0, 8, size=300).astype(np.float64),
            rng.exponential(size=300),
        ]
    )
    feature_bins = build_bins(X, QuantileBinningParams(max_bins=32, min_samples_per_bin=10, random_state=3))
    X_bin = apply_bins(X, feature_bins)

    for j in range(X.shape[1]):
        counts = np.bincount(X_bin[:, j])
        assert counts.min() >= 10


def test_building_is_deterministic_per_random_state():
    rng = np.random.default_rng(11)
    X = np.round(rng.normal(size=(500, 3)), 1)
    params = QuantileBinningParams(max_bins=16, min_samples_per_bin=5, random_state=4)

    first = build_bins(X, params)
    second = build_bins(X, params)

    for a, b in zip(first, second):
        np.testing.assert_array_equal(a.cut_points, b.cut_points)


def test_unseen_missing_values_map_to_sentinel():
    X_train = np.arange(40, dtype=np.float64).reshape(-1, 1)
    feature_bins = build_bins(X_train, QuantileBinningParams(max_bins=4))
    X_bin = apply_bins(np.array([[np.nan], [0.0], [39.0]]), feature_bins)

    np.testing.assert_array_equal(X_bin[:, 0], [-1, 0, 3])


def test_constant_feature_has_a_single_bin():
    X = np.full((20, 1), 2.5)
    feature_bins = build_bins(X)

    assert feature_bins[0].cut_points.size == 0
    assert feature_bins[0].n_bins == 1
    assert np.all(apply_bins(X, feature_bins) == 0)


def test_input_validation():
    with pytest.raises(ValueError):
        build_bins(np.arange(5.0))
    with pytest.raises(ValueError):
        apply_bins(np.zeros((3, 2)), [FeatureBins(np.array([]), False, 0.0, 0.0)])
    with pytest.raises(ValueError):
        QuantileBinningParams(max_bins=0)
    with pytest.raises(ValueError):
        QuantileBinningParams(min_samples_per_bin=0)

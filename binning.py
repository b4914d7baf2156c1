from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from discretizer import discretize
from quantile_cut_points import generate_quantile_cut_points


@dataclass
class QuantileBinningParams:
    max_bins: int = 256
    min_samples_per_bin: int = 1
    random_state: int = 0

    def __post_init__(self) -> None:
        if self.max_bins < 1:
            raise ValueError("max_bins must be at least 1")
        if self.min_samples_per_bin < 1:
            raise ValueError("min_samples_per_bin must be at least 1")


@dataclass
class FeatureBins:
    cut_points: np.ndarray
    is_missing: bool
    min_value: float
    max_value: float

    @property
    def n_bins(self) -> int:
        return int(self.cut_points.size) + 1 + int(self.is_missing)


def build_bins(X: np.ndarray, params: QuantileBinningParams | None = None) -> list[FeatureBins]:
    """Find per-feature cut points used to map values to integer bins.

    Feature ``j`` is seeded with ``random_state + j``. ``X`` is not modified.
    """
    params = params or QuantileBinningParams()
    X = np.asarray(X, dtype=np.float64)
    if X.ndim != 2:
        raise ValueError("X must be a 2D array")

    feature_bins: list[FeatureBins] = []
    for feature_idx in range(X.shape[1]):
        column = np.array(X[:, feature_idx], dtype=np.float64, copy=True)
        result = generate_quantile_cut_points(
            params.random_state + feature_idx,
            column,
            params.max_bins,
            params.min_samples_per_bin,
        )
        if not result.ok:
            raise result.error

        feature_bins.append(
            FeatureBins(
                cut_points=result.cut_points,
                is_missing=result.is_missing,
                min_value=result.min_value,
                max_value=result.max_value,
            )
        )

    return feature_bins


def apply_bins(X: np.ndarray, feature_bins: list[FeatureBins]) -> np.ndarray:
    """Apply previously built cut points to produce an int32 binned matrix.

    NaN maps to bin 0 for features that had missing values when fitted and to
    -1 otherwise.
    """
    X = np.asarray(X, dtype=np.float64)
    if X.ndim != 2:
        raise ValueError("X must be a 2D array")
    if X.shape[1] != len(feature_bins):
        raise ValueError("feature_bins length must match number of features")

    X_bin = np.empty(X.shape, dtype=np.int32)
    for feature_idx, bins in enumerate(feature_bins):
        X_bin[:, feature_idx] = discretize(bins.is_missing, bins.cut_points, X[:, feature_idx])

    return np.ascontiguousarray(X_bin)

import numpy as np

MISSING_SENTINEL = -1


def discretize(is_missing: bool, cut_points, values) -> np.ndarray:
    """Map each value to its bin id.

    The bin of a value is the number of cut points ``<= value``. When
    ``is_missing`` is set, bin 0 is reserved for NaN and every other id is
    shifted up by one; otherwise NaN maps to -1.
    """
    cut_points = np.asarray(cut_points, dtype=np.float64)
    values = np.asarray(values, dtype=np.float64)
    assert cut_points.ndim == 1 and values.ndim == 1
    assert np.all(cut_points[1:] > cut_points[:-1]), "cut points must be strictly increasing"

    offset = 1 if is_missing else 0
    missing_bin = 0 if is_missing else MISSING_SENTINEL
    nan_mask = np.isnan(values)

    if cut_points.size == 0:
        out = np.full(values.shape[0], offset, dtype=np.int64)
    else:
        out = np.searchsorted(cut_points, values, side="right").astype(np.int64) + offset
    out[nan_mask] = missing_bin
    return out

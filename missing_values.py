import numpy as np


def remove_missing_values(values: np.ndarray) -> int:
    """Compact the non-NaN entries of ``values`` to the front, in place.

    Relative order of the kept values is preserved. Returns the number of
    non-NaN values; entries at or past that index are left unspecified.
    """
    n = int(values.shape[0])
    if n == 0:
        return 0

    nan_mask = np.isnan(values)
    first_missing = int(np.argmax(nan_mask))
    if not nan_mask[first_missing]:
        return n

    # Everything before the first NaN is already in place.
    tail = values[first_missing:]
    kept = tail[~nan_mask[first_missing:]]
    write_end = first_missing + int(kept.size)
    values[first_missing:write_end] = kept
    return write_end

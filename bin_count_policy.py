import math

# Powers of two below this are never reduced to make room for the missing bin.
MIN_REDUCIBLE_POWER_OF_TWO = 16


def _is_power_of_two(value: int) -> bool:
    return value > 0 and (value & (value - 1)) == 0


def effective_max_bins(is_missing: bool, max_bins: int) -> int:
    """Number of non-missing bins we may produce.

    With a missing bin taking index 0, asking for 256 bins would yield 257
    distinct ids and a wider storage type, so a power of two >= 16 is reduced
    by one. Smaller powers keep their bins; losing one there costs too much.
    """
    if is_missing and max_bins >= MIN_REDUCIBLE_POWER_OF_TWO and _is_power_of_two(max_bins):
        return max_bins - 1
    return max_bins


def avg_length(n_samples: int, max_bins: int, min_samples_per_bin: int) -> int:
    """Shortest equal-value run treated as a separator between splitting ranges.

    Rounded up so that ``avg_length * max_bins >= n_samples``, which keeps at
    least one cut available to every splitting range.
    """
    assert max_bins >= 2
    assert min_samples_per_bin >= 1

    avg_float = math.ceil(float(n_samples) / float(max_bins))
    length = int(avg_float)
    # Large counts may not round-trip through float64.
    while length * max_bins < n_samples:
        length += 1
    return max(length, min_samples_per_bin)

from __future__ import annotations

import operator

import numpy as np

from errors import RandomSourceInitError

_SEED_MODULUS = 1 << 64


def seed_as_int(seed) -> int:
    """Exact integer value of ``seed``; floats and strings are rejected, not truncated."""
    try:
        return operator.index(seed)
    except TypeError as e:
        raise RandomSourceInitError(f"cannot seed random stream with {seed!r}") from e


class RandomStream:
    """Seeded integer stream used to break ties reproducibly.

    Negative seeds are folded into the unsigned 64-bit range so that every
    int64 seed maps to its own stream.
    """

    def __init__(self, seed: int) -> None:
        seed = seed_as_int(seed)
        try:
            self._rng = np.random.default_rng(seed % _SEED_MODULUS)
        except (TypeError, ValueError) as e:
            raise RandomSourceInitError(f"cannot seed random stream with {seed!r}") from e

    def next(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)``."""
        assert bound >= 1
        return int(self._rng.integers(bound))

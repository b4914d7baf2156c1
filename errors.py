class DiscretizationError(Exception):
    """Base class for failures of the cut-point generation call."""


class ConversionOverflowError(DiscretizationError):
    """A count does not fit the int64 type used for counts and indices."""


class AllocationFailureError(DiscretizationError):
    """Scratch storage for the splitting ranges could not be obtained."""


class RandomSourceInitError(DiscretizationError):
    """The seeded random stream could not be constructed."""

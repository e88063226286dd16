"""Exception and warning types raised by the binning package."""


class InvalidArgument(ValueError):
    """Malformed classification input (empty sample, bad k, non-finite values)."""


class OutOfRange(ValueError):
    """Value queried outside the [b0, bk] range of a set of breakpoints."""


class ClassCountWarning(UserWarning):
    """Requested class count was lowered to the number of distinct values."""

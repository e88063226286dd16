"""Class lookup and legend labels for a set of breakpoints.

Breakpoints b0 <= b1 <= ... <= bk describe k classes. Class i covers
[b_i, b_{i+1}) except the last class, which is closed on both ends so the
sample maximum always belongs to it.
"""

import math
import warnings
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, List, Sequence
import numpy as np

from binning.errors import InvalidArgument, OutOfRange


def validate_breakpoints(breakpoints: Sequence[float]) -> np.ndarray:
    """Check that breakpoints are finite, non-decreasing and at least two long.

    Raises:
        InvalidArgument: If the breakpoints are malformed.
    """
    try:
        bins = np.asarray(breakpoints, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Breakpoints must be numbers: {e}")

    if bins.ndim != 1 or bins.size < 2:
        raise InvalidArgument("Need at least two breakpoints to define a class")
    if not np.isfinite(bins).all():
        raise InvalidArgument("Breakpoints must be finite")
    if (np.diff(bins) < 0).any():
        raise InvalidArgument(f"Breakpoints must be non-decreasing: {bins.tolist()}")
    return bins


def _lookup(values: np.ndarray, bins: np.ndarray) -> np.ndarray:
    # Highest class whose lower bound is <= value; the top value falls in the last class.
    k = bins.size - 1
    idx = np.searchsorted(bins, values, side="right") - 1
    return np.minimum(idx, k - 1)


def assign(value: float, breakpoints: Sequence[float]) -> int:
    """Return the class index of a single value.

    Args:
        value: Value to classify.
        breakpoints: k+1 non-decreasing breakpoints.

    Returns:
        Class index in [0, k-1].

    Raises:
        InvalidArgument: If the value is NaN or the breakpoints are malformed.
        OutOfRange: If value < b0 or value > bk.

    Note:
        Repeated breakpoints produce an empty class [b, b); a value equal to
        b goes to the next class up.
    """
    bins = validate_breakpoints(breakpoints)
    value = float(value)
    if math.isnan(value):
        raise InvalidArgument("Cannot classify NaN")
    if value < bins[0] or value > bins[-1]:
        raise OutOfRange(f"{value} is outside [{bins[0]}, {bins[-1]}]")
    return int(_lookup(np.array([value]), bins)[0])


def assign_many(values: Any, breakpoints: Sequence[float]) -> np.ndarray:
    """Vectorised assign() over an array of values.

    Raises:
        InvalidArgument: If any value is NaN or the breakpoints are malformed.
        OutOfRange: If any value lies outside [b0, bk].
    """
    bins = validate_breakpoints(breakpoints)
    arr = np.asarray(values, dtype=float)
    if np.isnan(arr).any():
        raise InvalidArgument("Cannot classify NaN")

    outside = (arr < bins[0]) | (arr > bins[-1])
    if outside.any():
        bad = arr[outside]
        raise OutOfRange(
            f"{int(outside.sum())} value(s) outside [{bins[0]}, {bins[-1]}], "
            f"e.g. {bad[0]}"
        )
    return _lookup(arr, bins).astype(np.int64)


def round_half_away(value: float, precision: int) -> Decimal:
    """Round a float to `precision` decimals, ties away from zero.

    The float's shortest repr is used as the decimal value, so 2.675 rounds
    to 2.68 the way it reads rather than the way it is stored.
    """
    exact = Decimal(repr(float(value)))
    quantum = Decimal(1).scaleb(-precision)
    # Context precision must cover every integer digit plus the decimals.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + precision + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return rounded


def format_labels(
    breakpoints: Sequence[float],
    precision: int = 0,
    unit: str = "",
) -> List[str]:
    """Build one "<lower> to <upper><unit>" label per class.

    Args:
        breakpoints: k+1 non-decreasing breakpoints.
        precision: Number of decimal digits (>= 0).
        unit: Suffix appended to every label (e.g. "%").

    Returns:
        List of k labels.

    Raises:
        InvalidArgument: If precision is negative or breakpoints are malformed.
    """
    if isinstance(precision, bool) or not isinstance(precision, (int, np.integer)) or precision < 0:
        raise InvalidArgument(f"Precision must be a non-negative integer, got {precision!r}")
    bins = validate_breakpoints(breakpoints)

    # Each breakpoint is rounded once and shared by the two labels it bounds.
    texts = [f"{round_half_away(b, int(precision)):f}" for b in bins]

    collapsed = [
        i for i in range(bins.size - 1)
        if bins[i] != bins[i + 1] and texts[i] == texts[i + 1]
    ]
    if collapsed:
        warnings.warn(
            f"precision={precision} makes distinct breakpoints print the same "
            f"for class(es) {collapsed}; consider a higher precision",
            stacklevel=2,
        )

    return [f"{texts[i]} to {texts[i + 1]}{unit}" for i in range(bins.size - 1)]

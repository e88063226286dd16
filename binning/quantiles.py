"""Quantile (equal-count) classification.

Classes are filled by rank: with n values and k classes, class c starts at
sorted position floor(c * n / k), so class sizes differ by at most one.
Ties are ordered by their input position, which makes the split of a run
of equal values across two classes reproducible.
"""

import numpy as np

from binning.base import Classifier


def class_starts(n: int, k: int) -> np.ndarray:
    """Return the sorted position where each of the k classes begins."""
    return (np.arange(k) * n) // k


class QuantileClassifier(Classifier):
    """Equal-count classes assigned by rank.

    Breakpoint b_c (0 < c < k) is the value at the first sorted position of
    class c. Labels are assigned by rank rather than by value, so a run of
    tied values may straddle a breakpoint; predict() on new values uses the
    value-based rule and sends such ties to the upper class.

    Args:
        k: Number of classes (default: 5).
        **kwargs: Additional arguments passed to Classifier base class.
    """

    def __init__(self, k: int = 5, **kwargs):
        super().__init__(k=k, **kwargs)
        self.method = "quantiles"

    def _compute_bins(self, sorted_values: np.ndarray, k: int) -> np.ndarray:
        starts = class_starts(sorted_values.size, k)
        return np.concatenate([sorted_values[starts], sorted_values[-1:]])

    def _compute_labels(self, values, order, bins):
        n = values.size
        k = bins.size - 1
        ranks = np.empty(n, dtype=np.int64)
        ranks[order] = np.arange(n)
        return np.searchsorted(class_starts(n, k), ranks, side="right") - 1

"""Equal-interval classification.

Splits the sample range into k classes of identical width.
"""

import numpy as np

from binning.base import Classifier


class EqualIntervalClassifier(Classifier):
    """Equal-width classes over [min, max].

    Args:
        k: Number of classes (default: 5).
        **kwargs: Additional arguments passed to Classifier base class.
    """

    def __init__(self, k: int = 5, **kwargs):
        super().__init__(k=k, **kwargs)
        self.method = "equal_interval"

    def _compute_bins(self, sorted_values: np.ndarray, k: int) -> np.ndarray:
        lo = float(sorted_values[0])
        hi = float(sorted_values[-1])
        width = (hi - lo) / k
        bins = lo + np.arange(k + 1) * width
        bins[-1] = hi
        return bins

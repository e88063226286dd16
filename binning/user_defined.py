"""User-defined thresholds.

Classes come from caller-chosen interior breakpoints (e.g. policy
thresholds such as 10%, 20%, 50%); the sample minimum and maximum close the
outer classes.
"""

from typing import Sequence
import numpy as np

from binning.base import Classifier
from binning.errors import InvalidArgument


class UserDefinedClassifier(Classifier):
    """Classes bounded by fixed interior breakpoints.

    Args:
        bins: Strictly increasing interior breakpoints. Each must lie
            strictly inside the range of the fitted sample.
        **kwargs: Additional arguments passed to Classifier base class.
    """

    def __init__(self, bins: Sequence[float], **kwargs):
        try:
            interior = [float(b) for b in bins]
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"Thresholds must be numbers: {e}")
        if not all(np.isfinite(interior)):
            raise InvalidArgument("Thresholds must be finite")
        if any(hi <= lo for lo, hi in zip(interior, interior[1:])):
            raise InvalidArgument(f"Thresholds must be strictly increasing: {interior}")

        kwargs.pop("k", None)
        super().__init__(k=len(interior) + 1, **kwargs)
        self.interior = interior
        self.params["bins"] = interior
        self.method = "user_defined"

    def _resolve_k(self, values: np.ndarray) -> int:
        lo, hi = float(values.min()), float(values.max())
        outside = [b for b in self.interior if not lo < b < hi]
        if outside:
            raise InvalidArgument(
                f"Thresholds {outside} are not strictly inside the sample range [{lo}, {hi}]"
            )
        return self.k

    def _compute_bins(self, sorted_values: np.ndarray, k: int) -> np.ndarray:
        return np.concatenate([sorted_values[:1], self.interior, sorted_values[-1:]])

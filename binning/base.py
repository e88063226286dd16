"""Base classification interface for choropleth class intervals.

Defines the abstract base class Classifier that all classification
strategies must implement, providing a consistent interface for fit,
bins, labels, and legend operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List
from datetime import datetime
import numpy as np

from binning.intervals import assign_many, format_labels
from binning.utils import (
    validate_sample,
    distinct_count,
    resolve_k,
    stable_sort,
    canonical_params_json,
    param_hash_from_json,
    HYPERPARAM_KEYS,
)


class Classifier(ABC):
    """Abstract base class for classification strategies.

    All strategies must implement this interface to provide consistent
    fit, bins, labels, and legend operations.

    Attributes:
        k: Requested number of classes.
        cap_k: Lower k to the distinct value count instead of failing.
        params: Dictionary of strategy-specific parameters.
        bins_: Breakpoints (k+1 values) populated by fit().
        labels_: Class index per input position populated by fit().
        k_: Class count actually used (differs from k only when capped).
        values_: Validated sample from the last fit().
        n_samples: Number of samples after fitting.
    """

    def __init__(self, k: int = 5, cap_k: bool = False, **params):
        """Initialize classifier.

        Args:
            k: Number of classes (default: 5).
            cap_k: Cap k to the number of distinct values (default: False).
            **params: Strategy-specific parameters.
        """
        self.k = k
        self.cap_k = cap_k
        self.params = params
        self.params.update({"k": k, "cap_k": cap_k})
        self.bins_: Optional[np.ndarray] = None
        self.labels_: Optional[np.ndarray] = None
        self.k_: Optional[int] = None
        self.values_: Optional[np.ndarray] = None
        self.n_samples: Optional[int] = None

        # Store method name (set by subclasses)
        self.method: Optional[str] = None

    @abstractmethod
    def _compute_bins(self, sorted_values: np.ndarray, k: int) -> np.ndarray:
        """Return k+1 breakpoints for an ascending sample.

        Args:
            sorted_values: Validated sample in ascending (stable) order.
            k: Class count, already checked against the distinct count.

        Returns:
            Array of k+1 breakpoints, first == min, last == max.
        """
        pass

    def _compute_labels(
        self,
        values: np.ndarray,
        order: np.ndarray,
        bins: np.ndarray,
    ) -> np.ndarray:
        """Assign each input position to a class.

        Default is value-based lookup against the breakpoints. Strategies
        that place classes by rank override this.
        """
        return assign_many(values, bins)

    def _resolve_k(self, values: np.ndarray) -> int:
        return resolve_k(self.k, distinct_count(values), self.cap_k)

    def fit(self, values: Any) -> "Classifier":
        """Compute breakpoints and class labels for a sample.

        Args:
            values: Sequence of finite numbers.

        Returns:
            self for method chaining.

        Raises:
            InvalidArgument: If the sample or k is invalid.
        """
        values = validate_sample(values)
        k = self._resolve_k(values)
        sorted_values, order = stable_sort(values)

        bins = np.asarray(self._compute_bins(sorted_values, k), dtype=float)
        bins[0] = sorted_values[0]
        bins[-1] = sorted_values[-1]

        self.labels_ = self._compute_labels(values, order, bins)
        self.bins_ = bins
        self.k_ = k
        self.values_ = values
        self.n_samples = int(values.size)
        return self

    def _check_fitted(self) -> None:
        if self.bins_ is None:
            raise RuntimeError("Classifier not fitted. Run .fit() first.")

    def bins(self) -> List[float]:
        """Return breakpoints as a list of k+1 floats.

        Raises:
            RuntimeError: If classifier has not been fitted.
        """
        self._check_fitted()
        return [float(b) for b in self.bins_]

    def labels(self) -> np.ndarray:
        """Return stored class labels (one per input position).

        Raises:
            RuntimeError: If classifier has not been fitted.
        """
        self._check_fitted()
        return self.labels_

    def counts(self) -> np.ndarray:
        """Return the number of samples in each class."""
        self._check_fitted()
        return np.bincount(self.labels_, minlength=self.k_)

    def legend(self, precision: int = 0, unit: str = "") -> List[str]:
        """Return "<lower> to <upper><unit>" labels for the fitted classes."""
        self._check_fitted()
        return format_labels(self.bins_, precision=precision, unit=unit)

    def predict(self, values: Any) -> np.ndarray:
        """Assign new values to the fitted classes by value.

        Raises:
            RuntimeError: If classifier has not been fitted.
            OutOfRange: If a value lies outside the fitted range.
        """
        self._check_fitted()
        return assign_many(values, self.bins_)

    def info(self) -> Dict[str, Any]:
        """Return classifier information.

        Returns:
            Dictionary with method name, params, params_json, params_hash,
            k, n_samples, bins, gvf and timestamp.

        Note:
            Can be called before fitting, but k, n_samples, bins and gvf
            will be None if not yet fitted.
        """
        if self.method is None:
            raise RuntimeError("Method name not set. This should not happen.")

        from metrics.classification import goodness_of_variance_fit

        include = HYPERPARAM_KEYS.get(self.method, set())
        params_json = canonical_params_json(self.method, self.params, include)
        params_hash = param_hash_from_json(params_json)

        fitted = self.bins_ is not None
        return {
            "method": self.method,
            "params": self.params,
            "params_json": params_json,
            "params_hash": params_hash,
            "k": self.k_,
            "n_samples": self.n_samples,
            "bins": self.bins() if fitted else None,
            "gvf": goodness_of_variance_fit(self.values_, self.labels_) if fitted else None,
            "timestamp": datetime.now().isoformat(),
        }

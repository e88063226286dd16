"""Classification evaluation metrics.

Provides goodness-of-fit measures for a class assignment of a numeric
sample: within-class squared deviation, goodness of variance fit (GVF),
tabular accuracy index (TAI) and class sizes.
"""

import numpy as np


def _as_arrays(values, labels):
    values = np.asarray(values, dtype=float)
    labels = np.asarray(labels, dtype=np.int64)
    if values.shape != labels.shape:
        raise ValueError(
            f"values and labels must have the same shape, got {values.shape} and {labels.shape}"
        )
    return values, labels


def total_squared_deviation(values) -> float:
    """Squared deviation of the whole sample from its mean (SDAM)."""
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return 0.0
    return float(((values - values.mean()) ** 2).sum())


def sum_squared_deviations(values, labels) -> float:
    """Sum over classes of squared deviations from the class mean (SDCM).

    Args:
        values: Sample values (shape: (n_samples,)).
        labels: Class index per value (shape: (n_samples,)).

    Returns:
        Total within-class squared deviation (lower is better).
    """
    values, labels = _as_arrays(values, labels)
    if values.size == 0:
        return 0.0
    n_classes = int(labels.max()) + 1
    sums = np.bincount(labels, weights=values, minlength=n_classes)
    sizes = np.bincount(labels, minlength=n_classes)
    means = np.divide(sums, sizes, out=np.zeros_like(sums), where=sizes > 0)
    return float(((values - means[labels]) ** 2).sum())


def goodness_of_variance_fit(values, labels) -> float:
    """Goodness of variance fit, 1 - SDCM / SDAM.

    Returns:
        GVF in [0, 1] (higher is better). A constant sample scores 1.0.
    """
    sdam = total_squared_deviation(values)
    if sdam == 0:
        return 1.0
    return 1.0 - sum_squared_deviations(values, labels) / sdam


def tabular_accuracy_index(values, labels) -> float:
    """Tabular accuracy index, 1 - sum|x - class mean| / sum|x - mean|.

    Returns:
        TAI in [0, 1] (higher is better). A constant sample scores 1.0.
    """
    values, labels = _as_arrays(values, labels)
    if values.size == 0:
        return 1.0
    total = float(np.abs(values - values.mean()).sum())
    if total == 0:
        return 1.0
    n_classes = int(labels.max()) + 1
    sums = np.bincount(labels, weights=values, minlength=n_classes)
    sizes = np.bincount(labels, minlength=n_classes)
    means = np.divide(sums, sizes, out=np.zeros_like(sums), where=sizes > 0)
    within = float(np.abs(values - means[labels]).sum())
    return 1.0 - within / total


def class_counts(labels, k: int) -> list:
    """Number of values in each of k classes (empty classes count 0)."""
    labels = np.asarray(labels, dtype=np.int64)
    return [int(c) for c in np.bincount(labels, minlength=k)[:k]]

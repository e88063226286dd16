"""Metrics package for choropleth classification evaluation.

Provides goodness-of-fit metrics and class-count diagnostics for
classifications produced by the binning package.
"""

from metrics.classification import (
    sum_squared_deviations,
    total_squared_deviation,
    goodness_of_variance_fit,
    tabular_accuracy_index,
    class_counts,
)

__all__ = [
    "sum_squared_deviations",
    "total_squared_deviation",
    "goodness_of_variance_fit",
    "tabular_accuracy_index",
    "class_counts",
]

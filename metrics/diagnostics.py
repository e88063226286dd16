"""Class-count diagnostics for choropleth classification.

Sweeps the number of classes for one or more strategies and reports fit
metrics per k, so a class count can be picked from the goodness of
variance fit curve.
"""
from __future__ import annotations

from datetime import datetime

from binning import make_classifier, validate_sample
from binning.utils import distinct_count
from .classification import (
    goodness_of_variance_fit,
    tabular_accuracy_index,
    class_counts,
)

DEFAULT_STRATEGIES = ("equal_interval", "quantiles", "natural_breaks")


def calc_diagnostics(
    values,
    kmin: int = 2,
    kmax: int = 9,
    strategies=DEFAULT_STRATEGIES,
) -> dict:
    """Fit every strategy for k in [kmin, kmax] and collect fit metrics.

    Args:
        values: Sample to classify.
        kmin: Smallest class count (>= 1).
        kmax: Largest class count (>= kmin).
        strategies: Strategy names to sweep.

    Returns:
        dict: Dictionary containing timestamp, stage, diagnostics
            ({strategy: [{"k", "gvf", "tai", "bins", "counts"}, ...]}) and a
            warnings list. Class counts above the number of distinct values
            are skipped with a warning.

    Raises:
        InvalidArgument: If the sample is invalid.
        ValueError: If the k range is invalid or a strategy is unknown.
    """
    values = validate_sample(values)
    if kmin < 1:
        raise ValueError("kmin must be >= 1")
    if kmax < kmin:
        raise ValueError("kmax must be >= kmin")

    n_distinct = distinct_count(values)
    out = {
        "timestamp": datetime.now().isoformat(),
        "stage": "diagnostics",
        "n_samples": int(values.size),
        "n_distinct": n_distinct,
        "diagnostics": {},
        "warnings": [],
    }

    top = min(kmax, n_distinct)
    if top < kmax:
        out["warnings"].append(
            f"k={max(top + 1, kmin)}..{kmax} skipped: sample has {n_distinct} distinct value(s)"
        )

    for name in strategies:
        rows = []
        for k in range(kmin, top + 1):
            clf = make_classifier(name, k=k).fit(values)
            labels = clf.labels()
            rows.append({
                "k": k,
                "gvf": goodness_of_variance_fit(values, labels),
                "tai": tabular_accuracy_index(values, labels),
                "bins": clf.bins(),
                "counts": class_counts(labels, k),
            })
        out["diagnostics"][name] = rows

    return out


def select_k(ks, gvfs, threshold: float = 0.8) -> int:
    """Pick a class count from a goodness of variance fit curve.

    Args:
        ks: Class counts, ascending.
        gvfs: GVF for each class count.
        threshold: Target GVF.

    Returns:
        Smallest k whose GVF reaches the threshold, else the k with the
        highest GVF.

    Raises:
        ValueError: If ks is empty or lengths differ.
    """
    ks = list(ks)
    gvfs = list(gvfs)
    if not ks or len(ks) != len(gvfs):
        raise ValueError("ks and gvfs must be non-empty and of equal length")
    for k, g in zip(ks, gvfs):
        if g >= threshold:
            return k
    return ks[max(range(len(gvfs)), key=lambda i: gvfs[i])]

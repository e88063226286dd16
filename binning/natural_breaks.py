"""Natural breaks (Jenks) classification.

Finds the partition of the sorted sample into k contiguous classes with the
smallest total within-class sum of squared deviations, using dynamic
programming over prefix sums:

    cost[c][i] = min_j cost[c-1][j] + ssd(j, i)

where ssd(j, i) is the squared deviation of sorted values j..i-1 from their
mean, evaluated in O(1) from cumulative sums. The minimisation over j is
vectorised, giving O(k * n^2) arithmetic with O(k * n) Python steps.
"""

from typing import List
import numpy as np

from binning.base import Classifier


def _segment_ssd(s: np.ndarray, q: np.ndarray, j, i) -> np.ndarray:
    """Sum of squared deviations of values j..i-1 from prefix sums s and q."""
    count = i - j
    total = s[i] - s[j]
    ssd = (q[i] - q[j]) - total * total / count
    return np.maximum(ssd, 0.0)


def jenks_class_starts(sorted_values: np.ndarray, k: int) -> List[int]:
    """Return the sorted position where each class after the first begins.

    Cuts are only placed between distinct values. Among equally good cuts
    the earliest start for the last class wins, which keeps results stable
    across repeated calls.

    Args:
        sorted_values: Ascending sample.
        k: Number of classes, at most the number of distinct values.

    Returns:
        List of k-1 increasing start positions in [1, n-1].
    """
    n = sorted_values.size
    if k <= 1:
        return []

    # Centre the values so the prefix sums stay small.
    v = sorted_values - sorted_values.mean()
    s = np.concatenate(([0.0], np.cumsum(v)))
    q = np.concatenate(([0.0], np.cumsum(v * v)))

    # cut[i]: a class may end before position i (i.e. start at i).
    cut = np.ones(n + 1, dtype=bool)
    cut[1:n] = sorted_values[1:] > sorted_values[:-1]
    cut_positions = np.flatnonzero(cut)

    cost = np.full((k + 1, n + 1), np.inf)
    back = np.zeros((k + 1, n + 1), dtype=np.int64)
    ends = np.arange(1, n + 1)
    cost[1, 1:] = _segment_ssd(s, q, 0, ends)

    for c in range(2, k + 1):
        for i in cut_positions:
            if i < c:
                continue
            j = cut_positions[(cut_positions >= c - 1) & (cut_positions < i)]
            if j.size == 0:
                continue
            total = cost[c - 1, j] + _segment_ssd(s, q, j, i)
            best = int(np.argmin(total))
            cost[c, i] = total[best]
            back[c, i] = j[best]

    starts = []
    i = n
    for c in range(k, 1, -1):
        i = int(back[c, i])
        starts.append(i)
    return starts[::-1]


class NaturalBreaksClassifier(Classifier):
    """Jenks natural breaks: minimum within-class squared deviation.

    Breakpoint b_c (0 < c < k) is the smallest value of class c, so the
    value-based class rule reproduces the optimal partition exactly.

    Args:
        k: Number of classes (default: 5).
        **kwargs: Additional arguments passed to Classifier base class.
    """

    def __init__(self, k: int = 5, **kwargs):
        super().__init__(k=k, **kwargs)
        self.method = "natural_breaks"

    def _compute_bins(self, sorted_values: np.ndarray, k: int) -> np.ndarray:
        starts = jenks_class_starts(sorted_values, k)
        interior = sorted_values[starts] if starts else np.array([])
        return np.concatenate([sorted_values[:1], interior, sorted_values[-1:]])

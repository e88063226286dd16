"""Unit tests for metrics.classification module."""

import pytest
import numpy as np

from binning import NaturalBreaksClassifier, EqualIntervalClassifier
from metrics.classification import (
    sum_squared_deviations,
    total_squared_deviation,
    goodness_of_variance_fit,
    tabular_accuracy_index,
    class_counts,
)

VALUES = [1, 2, 3, 10, 11, 12]
LABELS = [0, 0, 0, 1, 1, 1]


class TestSquaredDeviations:
    """Test suite for SDCM and SDAM."""

    def test_within_class(self):
        """Test squared deviation from class means."""
        assert sum_squared_deviations(VALUES, LABELS) == pytest.approx(4.0)

    def test_total(self):
        """Test squared deviation from the sample mean."""
        assert total_squared_deviation(VALUES) == pytest.approx(125.5)

    def test_single_class_equals_total(self):
        """Test that one class gives SDCM == SDAM."""
        assert sum_squared_deviations(VALUES, [0] * 6) == pytest.approx(total_squared_deviation(VALUES))

    def test_unused_class_index(self):
        """Test labels that skip a class index."""
        assert sum_squared_deviations([1, 3, 10], [0, 0, 2]) == pytest.approx(2.0)

    def test_shape_mismatch(self):
        """Test that values and labels must align."""
        with pytest.raises(ValueError, match="same shape"):
            sum_squared_deviations([1, 2, 3], [0, 1])

    def test_empty(self):
        """Test empty inputs."""
        assert sum_squared_deviations([], []) == 0.0
        assert total_squared_deviation([]) == 0.0


class TestGoodnessOfVarianceFit:
    """Test suite for metrics.classification.goodness_of_variance_fit."""

    def test_known_value(self):
        """Test GVF for two well-separated groups."""
        assert goodness_of_variance_fit(VALUES, LABELS) == pytest.approx(1 - 4.0 / 125.5)

    def test_single_class_is_zero(self):
        """Test that one class explains no variance."""
        assert goodness_of_variance_fit(VALUES, [0] * 6) == pytest.approx(0.0)

    def test_each_value_alone_is_one(self):
        """Test that singleton classes explain all variance."""
        assert goodness_of_variance_fit(VALUES, range(6)) == pytest.approx(1.0)

    def test_constant_sample(self):
        """Test that a constant sample scores 1.0."""
        assert goodness_of_variance_fit([4, 4, 4], [0, 0, 0]) == 1.0

    def test_natural_breaks_beats_equal_interval(self):
        """Test that Jenks breaks fit at least as well as equal intervals."""
        values = np.random.default_rng(11).lognormal(3, 1, 60)
        jenks = NaturalBreaksClassifier(k=5).fit(values)
        equal = EqualIntervalClassifier(k=5).fit(values)

        assert goodness_of_variance_fit(values, jenks.labels()) >= goodness_of_variance_fit(values, equal.labels())


class TestTabularAccuracyIndex:
    """Test suite for metrics.classification.tabular_accuracy_index."""

    def test_known_value(self):
        """Test TAI for two well-separated groups."""
        assert tabular_accuracy_index(VALUES, LABELS) == pytest.approx(1 - 4.0 / 27.0)

    def test_constant_sample(self):
        """Test that a constant sample scores 1.0."""
        assert tabular_accuracy_index([4, 4], [0, 0]) == 1.0


class TestClassCounts:
    """Test suite for metrics.classification.class_counts."""

    def test_counts_with_empty_class(self):
        """Test that empty classes are reported as zero."""
        assert class_counts([0, 0, 2], 3) == [2, 0, 1]

    def test_trailing_empty_classes(self):
        """Test that k sets the output length."""
        assert class_counts([0, 1], 4) == [1, 1, 0, 0]
